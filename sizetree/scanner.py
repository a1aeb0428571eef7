from __future__ import annotations
import errno
import logging
import os
import time
import stat as statmod
from typing import Optional, Tuple
from .models import Node, ScanStats

logger = logging.getLogger(__name__)

# (st_dev, st_ino) of every directory between the root and the current one.
Ancestors = Tuple[Tuple[int, int], ...]

def build_tree(path: str, stats: Optional[ScanStats] = None) -> Node:
    """Build the size tree rooted at ``path``.

    Errors on the root itself (missing path, unreadable root directory) are
    raised to the caller. Entries below the root that cannot be stat'ed or
    listed are left out of the tree and out of their parent's size.
    """
    t0 = time.time()
    if stats is None:
        stats = ScanStats()
    abs_path = os.path.abspath(path)
    name = os.path.basename(abs_path) or abs_path
    root = _build_node(abs_path, name, stats, ())
    stats.elapsed_sec = time.time() - t0
    logger.debug("Scanned %s: %d files, %d dirs, %d skipped in %.2fs",
                 abs_path, stats.files, stats.dirs, stats.skipped, stats.elapsed_sec)
    return root

def _build_node(path: str, name: str, stats: ScanStats, ancestors: Ancestors) -> Node:
    st = os.stat(path)
    if not statmod.S_ISDIR(st.st_mode):
        stats.files += 1
        return Node(name=name, path=path, is_dir=False, size=int(st.st_size))

    ident = (st.st_dev, st.st_ino)
    if ident in ancestors:
        raise OSError(errno.ELOOP, "Directory loop", path)
    ancestors = ancestors + (ident,)

    node = Node(name=name, path=path, is_dir=True, size=0, children=[])
    with os.scandir(path) as it:
        entries = list(it)

    for entry in entries:
        try:
            child = _build_node(entry.path, entry.name, stats, ancestors)
        except OSError as e:
            stats.skipped += 1
            logger.debug("Skipping %s: %s", entry.path, e)
            continue
        node.children.append(child)
        node.size += child.size

    stats.dirs += 1
    return node
