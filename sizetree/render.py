from __future__ import annotations
import os
import sys
from typing import IO, Iterable, Iterator, List, Optional, Tuple
from .models import Node
from .utils import format_bytes

BRANCH = "├── "
LAST = "└── "
PIPE = "│   "
SPACE = "    "

def format_line(node: Node, prefix: str, connector: str) -> str:
    return f"{prefix}{connector}{node.display_name} ({format_bytes(node.size)})"

def render_lines(root: Node) -> Iterator[str]:
    """Lines of the console tree, one per node, in depth-first pre-order.

    Each call returns a new generator, so the output can be produced again
    from the same tree.
    """
    # (node, prefix, is_last, is_root)
    stack: List[Tuple[Node, str, bool, bool]] = [(root, "", True, True)]
    while stack:
        node, prefix, is_last, is_root = stack.pop()
        if is_root:
            connector = ""
        else:
            connector = LAST if is_last else BRANCH
        yield format_line(node, prefix, connector)

        if node.children:
            child_prefix = prefix + (SPACE if is_last else PIPE)
            last_idx = len(node.children) - 1
            for i in range(last_idx, -1, -1):
                stack.append((node.children[i], child_prefix, i == last_idx, False))

class TreeLines:
    """Re-iterable view over the console lines of a tree."""

    def __init__(self, root: Node):
        self.root = root

    def __iter__(self) -> Iterator[str]:
        return render_lines(self.root)

def write_lines(lines: Iterable[str], stream: Optional[IO[str]] = None) -> None:
    """Write each line followed by a newline, keeping names exactly as listed.

    On streams backed by a binary buffer the lines go out as filesystem
    bytes, so names that are not valid UTF-8 reach the terminal unchanged.
    """
    if stream is None:
        stream = sys.stdout
    buf = getattr(stream, "buffer", None)
    if buf is None:
        for line in lines:
            stream.write(line + "\n")
        return
    stream.flush()
    for line in lines:
        buf.write(os.fsencode(line) + b"\n")
    buf.flush()

def print_tree(root: Node, stream: Optional[IO[str]] = None) -> None:
    write_lines(render_lines(root), stream)
