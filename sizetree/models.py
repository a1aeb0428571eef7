from __future__ import annotations
import enum
from dataclasses import dataclass, field
from typing import Iterator, List

@dataclass
class Node:
    name: str
    path: str
    is_dir: bool
    size: int = 0
    children: List["Node"] = field(default_factory=list)

    @property
    def display_name(self) -> str:
        return self.name + "/" if self.is_dir else self.name

    def walk(self) -> Iterator["Node"]:
        """Yield this node and every descendant, depth-first pre-order."""
        stack = [self]
        while stack:
            n = stack.pop()
            yield n
            stack.extend(reversed(n.children))

class SortKey(enum.Enum):
    NAME = "name"
    SIZE = "size"

    @classmethod
    def parse(cls, value: str) -> "SortKey":
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError(f"Invalid sort method '{value}'. Use 'name' or 'size'") from None

@dataclass
class SortPolicy:
    key: SortKey = SortKey.NAME
    reverse: bool = False

@dataclass
class ScanStats:
    files: int = 0
    dirs: int = 0
    skipped: int = 0
    elapsed_sec: float = 0.0
