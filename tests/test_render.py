import io
import os

import pytest

from sizetree.models import Node
from sizetree.render import TreeLines, print_tree, render_lines, write_lines
from sizetree.utils import format_bytes


def f(name, size=0):
    return Node(name=name, path="/t/" + name, is_dir=False, size=size)


def d(name, *children):
    return Node(name=name, path="/t/" + name, is_dir=True,
                size=sum(c.size for c in children), children=list(children))


def sample_tree():
    return d("root",
             d("a", f("x", 5), d("y", f("deep", 15))),
             d("b", f("c", 2048)))


def test_format_bytes():
    assert format_bytes(0) == "0 B"
    assert format_bytes(1023) == "1023 B"
    assert format_bytes(1024) == "1.00 KB"
    assert format_bytes(1536) == "1.50 KB"
    assert format_bytes(1048576) == "1.00 MB"
    assert format_bytes(3 * 1024 ** 3) == "3.00 GB"
    assert format_bytes(2048 * 1024 ** 4) == "2048.00 TB"
    assert format_bytes(-5) == "-5"


def test_connectors_and_nested_prefixes():
    lines = list(render_lines(sample_tree()))
    assert lines == [
        "root/ (2.02 KB)",
        "    ├── a/ (20 B)",
        "    │   ├── x (5 B)",
        "    │   └── y/ (15 B)",
        "    │       └── deep (15 B)",
        "    └── b/ (2.00 KB)",
        "        └── c (2.00 KB)",
    ]


def test_single_file_root():
    assert list(render_lines(f("solo.txt", 12))) == ["solo.txt (12 B)"]


def test_empty_directory_has_slash():
    assert list(render_lines(d("empty"))) == ["empty/ (0 B)"]


def test_lines_are_lazy_and_restartable():
    root = sample_tree()
    gen = render_lines(root)
    assert next(gen) == "root/ (2.02 KB)"

    view = TreeLines(root)
    first = list(view)
    assert list(view) == first
    assert len(first) == 7


def test_print_tree_keeps_names_verbatim():
    buf = io.StringIO()
    root = d("[bold]odd", f("a\tb.txt", 1), f("x\ry", 2))

    print_tree(root, buf)

    assert buf.getvalue() == (
        "[bold]odd/ (3 B)\n"
        "    ├── a\tb.txt (1 B)\n"
        "    └── x\ry (2 B)\n"
    )


@pytest.mark.skipif(os.name == "nt", reason="POSIX filename bytes")
def test_write_lines_sends_filesystem_bytes_to_binary_buffer():
    raw = io.BytesIO()
    stream = io.TextIOWrapper(raw, encoding="utf-8")
    name = os.fsdecode(b"bad\xff.txt")

    write_lines(["ok", name], stream)

    assert raw.getvalue() == b"ok\nbad\xff.txt\n"
