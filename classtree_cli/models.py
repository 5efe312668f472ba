"""Core data models shared by the scanners, the builder and the CLI."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple


class FileKind(str, Enum):
    LOGIC = "logic"
    MARKUP = "markup"


@dataclass(frozen=True)
class SourceFile:
    path: Path
    kind: FileKind

    @property
    def stem(self) -> str:
        return self.path.stem

    @property
    def is_logic(self) -> bool:
        return self.kind is FileKind.LOGIC


@dataclass(frozen=True)
class Entity:
    name: str
    file_path: Path


@dataclass(frozen=True)
class TagUsage:
    tag: str
    line: int
    context: str
    file_path: Optional[Path] = None

    @property
    def name(self) -> str:
        """Tag identifier without angle brackets and prefix (``<c-foo>`` -> ``foo``)."""
        inner = self.tag.strip("<>")
        _, sep, ident = inner.partition("-")
        return ident if sep else inner

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"tag": self.tag, "line": self.line, "context": self.context}
        if self.file_path is not None:
            payload["file_path"] = str(self.file_path)
        return payload


@dataclass
class HierarchyNode:
    """One entity materialised at a position of a built tree."""

    name: str
    file_path: Path
    children: List["HierarchyNode"] = field(default_factory=list)
    tags: List[TagUsage] = field(default_factory=list)

    @property
    def key(self) -> Tuple[str, Path]:
        return (self.name, self.file_path)

    def walk(self) -> Iterator["HierarchyNode"]:
        """Yield this node and all descendants, depth-first pre-order."""
        yield self
        for child in self.children:
            yield from child.walk()

    def find(self, name: str) -> Optional["HierarchyNode"]:
        for node in self.walk():
            if node.name == name:
                return node
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "file_path": str(self.file_path),
            "tags": [t.to_dict() for t in self.tags],
            "children": [c.to_dict() for c in self.children],
        }
