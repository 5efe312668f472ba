"""Find the file that declares an entity, and list entities inside a folder."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Set, Tuple

from . import matchers
from .file_index import FileIndex, ReadFailure
from .models import Entity, SourceFile

logger = logging.getLogger(__name__)


class EntityLocator:
    """Resolves bare entity names to their declaring file.

    Logic files declare an entity with ``class <name>``; markup files declare
    the component whose name equals the file name. Logic files are searched
    before markup files, each group in index order, and the first match wins.
    Callers must not rely on which of several candidates is returned.
    """

    def __init__(self, index: FileIndex) -> None:
        self.index = index

    def locate(self, name: str) -> Optional[Path]:
        if not name:
            return None
        for file in self.index.logic_files() + self.index.markup_files():
            if self._declares(file, name):
                logger.debug("Located %s in %s", name, file.path)
                return file.path
        logger.debug("No declaration found for %s", name)
        return None

    def _declares(self, file: SourceFile, name: str) -> bool:
        if not file.is_logic:
            return matchers.markup_name_matches(file.path, name)
        try:
            text = self.index.read(file)
        except ReadFailure as exc:
            logger.warning("Skipping %s", exc)
            return False
        return matchers.declares_class(text, name)

    def list_folder_entities(self, folder: str) -> List[Entity]:
        """Candidate entities in files under any directory named *folder*.

        Logic files contribute each declared class plus an entry named after
        the file; markup files contribute their own name when they use a
        custom tag. Results are unique by ``(name, path)`` in discovery order.
        """
        opener = matchers.tag_opener(self.index.settings.tag_prefix)
        seen: Set[Tuple[str, Path]] = set()
        result: List[Entity] = []

        def add(name: str, path: Path) -> None:
            if (name, path) not in seen:
                seen.add((name, path))
                result.append(Entity(name=name, file_path=path))

        files = self.index.all_files(path_filter=folder)
        for file, text in self.index.iter_texts(files):
            if file.is_logic:
                for class_name in matchers.declared_classes(text):
                    add(class_name, file.path)
                add(file.stem, file.path)
            elif opener in text:
                add(file.stem, file.path)

        if not result:
            logger.info("No entities found under folder '%s'", folder)
        return result
