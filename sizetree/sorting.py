from __future__ import annotations
from typing import Tuple, Union
from .models import Node, SortKey, SortPolicy

def sort_key(node: Node, key: SortKey) -> Union[int, Tuple[bool, str]]:
    if key is SortKey.SIZE:
        return node.size
    # False sorts first, so directories lead.
    return (not node.is_dir, node.name.lower())

def sort_tree(root: Node, policy: SortPolicy) -> None:
    """Sort every directory's children in place, deepest levels first.

    Name order puts directories before files, then compares names
    case-insensitively. Size order is largest first with no type priority.
    ``policy.reverse`` flips the whole ordering, the directories-first rule
    included.
    """
    if not root.children:
        return
    for child in root.children:
        if child.is_dir:
            sort_tree(child, policy)

    descending = policy.key is SortKey.SIZE
    root.children.sort(key=lambda n: sort_key(n, policy.key),
                       reverse=descending != policy.reverse)
