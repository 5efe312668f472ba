"""Recursive construction of entity hierarchies."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, FrozenSet, List, Optional, Tuple

from .locator import EntityLocator
from .models import Entity, HierarchyNode
from .relationships import RelationshipExtractor
from .tag_scanner import TagUsageScanner

logger = logging.getLogger(__name__)

NodeKey = Tuple[str, Path]


@dataclass
class _BuildState:
    """Lookups memoised for the duration of one ``build`` call."""

    locations: Dict[str, Optional[Path]] = field(default_factory=dict)
    candidates: Dict[str, List[Entity]] = field(default_factory=dict)


class HierarchyBuilder:
    """Builds a tree rooted at a named entity, depth-first.

    A branch stops when a candidate resolves to one of its own ancestors, so
    mutually referencing entities produce a finite tree. The same entity may
    still appear under several different branches.
    """

    def __init__(
        self,
        locator: EntityLocator,
        extractor: RelationshipExtractor,
        scanner: TagUsageScanner,
    ) -> None:
        self.locator = locator
        self.extractor = extractor
        self.scanner = scanner

    def build(self, root_name: str) -> Optional[HierarchyNode]:
        """Return the tree for *root_name*, or ``None`` when it cannot be located."""
        state = _BuildState()
        root_path = self._locate(root_name, state)
        if root_path is None:
            logger.info("Could not build hierarchy: '%s' not found", root_name)
            return None
        return self._build_node(root_name, root_path, frozenset(), state)

    def _locate(self, name: str, state: _BuildState) -> Optional[Path]:
        if name not in state.locations:
            state.locations[name] = self.locator.locate(name)
        return state.locations[name]

    def _candidates(self, name: str, state: _BuildState) -> List[str]:
        if name not in state.candidates:
            state.candidates[name] = self.extractor.children_of(name)
        # Each name resolves to a single file, so fold repeats before recursing.
        names: List[str] = []
        for entity in state.candidates[name]:
            if entity.name not in names:
                names.append(entity.name)
        return names

    def _build_node(
        self,
        name: str,
        file_path: Path,
        ancestors: FrozenSet[NodeKey],
        state: _BuildState,
    ) -> HierarchyNode:
        node = HierarchyNode(name=name, file_path=file_path)
        self.scanner.scan_entity(node)

        lineage = ancestors | {node.key}
        sibling_keys = set()
        for child_name in self._candidates(name, state):
            child_path = self._locate(child_name, state)
            if child_path is None:
                continue
            key = (child_name, child_path)
            if key in lineage:
                logger.debug("Cycle: %s already an ancestor of %s", child_name, name)
                continue
            if key in sibling_keys:
                continue
            sibling_keys.add(key)
            node.children.append(self._build_node(child_name, child_path, lineage, state))
        return node
