"""Discovery of direct descendants by inheritance and composition."""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence

from . import matchers
from .file_index import FileIndex
from .models import Entity, SourceFile

logger = logging.getLogger(__name__)

# A rule receives a logic file, its text and the parent name and returns the
# names of the children it nominates in that file.
ChildRule = Callable[[SourceFile, str, str], List[str]]


def inheritance_rule(file: SourceFile, text: str, parent: str) -> List[str]:
    """``class X extends Parent``; Python sources also match ``class X(Parent)``."""
    names = matchers.extends_matches(text, parent)
    if file.path.suffix == ".py":
        names.extend(matchers.python_base_matches(text, parent))
    return names


def composition_rule(file: SourceFile, text: str, parent: str) -> List[str]:
    """A file that mentions the parent is treated as one of its users.

    The child is named after the file, and a file never composes the entity
    it is named after.
    """
    if matchers.mentions(text, parent) and file.stem.lower() != parent.lower():
        return [file.stem]
    return []


DEFAULT_RULES: Sequence[ChildRule] = (inheritance_rule, composition_rule)


class RelationshipExtractor:
    """Applies each child rule to every logic file.

    Results are concatenated per file in index order and are not
    deduplicated here.
    """

    def __init__(self, index: FileIndex, rules: Optional[Sequence[ChildRule]] = None) -> None:
        self.index = index
        self.rules = tuple(rules) if rules is not None else tuple(DEFAULT_RULES)

    def children_of(self, parent: str) -> List[Entity]:
        found: List[Entity] = []
        if not parent:
            return found
        for file, text in self.index.iter_texts(self.index.logic_files()):
            for rule in self.rules:
                for name in rule(file, text, parent):
                    found.append(Entity(name=name, file_path=file.path))
        logger.debug("%d candidate children for %s", len(found), parent)
        return found
