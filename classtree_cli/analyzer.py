"""Facade coordinating the locator, extractor, scanners and builder."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Tuple

from . import matchers
from .config import ScanSettings
from .file_index import FileIndex
from .hierarchy import HierarchyBuilder
from .locator import EntityLocator
from .models import Entity, FileKind, HierarchyNode, TagUsage
from .relationships import RelationshipExtractor
from .tag_scanner import TagUsageIndex, TagUsageScanner

logger = logging.getLogger(__name__)


class ClassAnalyzer:
    """Entry point for every scan over a project tree.

    Each call works on a fresh :class:`FileIndex`, so results always reflect
    the files as they are on disk and nothing is remembered between calls.
    """

    def __init__(self, project_root: Path, settings: Optional[ScanSettings] = None) -> None:
        self.project_root = Path(project_root).resolve()
        self.settings = settings or ScanSettings()

    def _index(self) -> FileIndex:
        return FileIndex(self.project_root, self.settings)

    def _builder(self, index: FileIndex) -> HierarchyBuilder:
        return HierarchyBuilder(
            EntityLocator(index),
            RelationshipExtractor(index),
            TagUsageScanner(index),
        )

    def locate(self, name: str) -> Optional[Path]:
        return EntityLocator(self._index()).locate(name)

    def build_hierarchy(self, name: str) -> Optional[HierarchyNode]:
        return self._builder(self._index()).build(name)

    def classes_in_folder(self, folder: Optional[str] = None) -> List[Entity]:
        return EntityLocator(self._index()).list_folder_entities(folder or self.settings.default_folder)

    def all_tag_usages(self) -> List[TagUsage]:
        return TagUsageIndex(self._index()).scan_workspace()

    # ------------------------------------------------------------------
    # Root detection from an open file
    # ------------------------------------------------------------------

    def main_class_candidates(self, file_path: Path, selection: Optional[str] = None) -> List[str]:
        """Names to try, in order, as the root for a file open in an editor.

        A non-empty selection wins. Logic files offer their first declared
        class and then the file name; markup files offer the file name.
        """
        if selection and selection.strip():
            return [selection.strip()]

        index = self._index()
        kind = index.kind_of(file_path)
        if kind is FileKind.MARKUP:
            return [file_path.stem]
        if kind is not FileKind.LOGIC:
            return []

        names: List[str] = []
        declared = matchers.declared_classes(index.read_path(file_path))
        if declared:
            names.append(declared[0])
        if file_path.stem not in names:
            names.append(file_path.stem)
        return names

    def build_from_file(
        self,
        file_path: Path,
        selection: Optional[str] = None,
    ) -> Tuple[List[str], Optional[HierarchyNode]]:
        """Try each candidate root for *file_path*; return the names tried and the first tree built."""
        candidates = self.main_class_candidates(file_path, selection)
        builder = self._builder(self._index())
        for name in candidates:
            root = builder.build(name)
            if root is not None:
                return candidates, root
            logger.debug("Root candidate '%s' did not resolve", name)
        return candidates, None
