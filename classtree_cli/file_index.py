"""Enumeration and reading of candidate source files under a project root."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from .config import ScanSettings
from .models import FileKind, SourceFile

logger = logging.getLogger(__name__)


class ReadFailure(OSError):
    """A single source file could not be read."""

    def __init__(self, path: Path, reason: object) -> None:
        super().__init__(f"Cannot read {path}: {reason}")
        self.path = path
        self.reason = reason


class FileIndex:
    """Lists source files by extension group and reads their text.

    Enumeration is sorted by path so repeated scans over an unchanged tree
    visit files in the same order. Text is cached for the lifetime of the
    instance; create a new index to observe file changes.
    """

    def __init__(self, project_root: Path, settings: Optional[ScanSettings] = None) -> None:
        self.project_root = Path(project_root).resolve()
        self.settings = settings or ScanSettings()
        self._texts: Dict[Path, str] = {}

    # ------------------------------------------------------------------
    # Enumeration
    # ------------------------------------------------------------------

    def kind_of(self, path: Path) -> Optional[FileKind]:
        ext = path.suffix.lower()
        if ext in self.settings.markup_extensions:
            return FileKind.MARKUP
        if ext in self.settings.logic_extensions:
            return FileKind.LOGIC
        return None

    def list_files(
        self,
        extensions: Sequence[str],
        path_filter: Optional[str] = None,
    ) -> List[SourceFile]:
        wanted = {ext.lower() for ext in extensions}
        files: List[SourceFile] = []
        for path in sorted(self.project_root.rglob("*")):
            if path.suffix.lower() not in wanted:
                continue
            try:
                if not path.is_file():
                    continue
            except OSError as exc:
                logger.warning("Skipping %s: %s", path, exc)
                continue
            rel_dirs = path.relative_to(self.project_root).parts[:-1]
            if any(part in self.settings.skip_dirs for part in rel_dirs):
                continue
            if path_filter and path_filter not in rel_dirs:
                continue
            kind = self.kind_of(path)
            if kind is None:
                continue
            files.append(SourceFile(path=path, kind=kind))
        return files

    def logic_files(self, path_filter: Optional[str] = None) -> List[SourceFile]:
        return self.list_files(self.settings.logic_extensions, path_filter)

    def markup_files(self, path_filter: Optional[str] = None) -> List[SourceFile]:
        return self.list_files(self.settings.markup_extensions, path_filter)

    def all_files(self, path_filter: Optional[str] = None) -> List[SourceFile]:
        return self.list_files(self.settings.all_extensions, path_filter)

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    def read(self, file: SourceFile) -> str:
        return self.read_path(file.path)

    def read_path(self, path: Path) -> str:
        cached = self._texts.get(path)
        if cached is not None:
            return cached
        try:
            text = path.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            raise ReadFailure(path, exc) from exc
        self._texts[path] = text
        return text

    def iter_texts(self, files: Iterable[SourceFile]) -> Iterator[Tuple[SourceFile, str]]:
        """Yield ``(file, text)`` pairs, skipping files that cannot be read."""
        for file in files:
            try:
                yield file, self.read(file)
            except ReadFailure as exc:
                logger.warning("Skipping %s", exc)
