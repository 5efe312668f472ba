"""Custom-tag evidence: per-entity scanning and the workspace-wide index."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import List, Optional

from . import matchers
from .file_index import FileIndex
from .models import FileKind, HierarchyNode, TagUsage

logger = logging.getLogger(__name__)


def scan_markup_text(text: str, prefix: str, file_path: Optional[Path] = None) -> List[TagUsage]:
    """One usage per custom-tag occurrence, sharing the line's number and text."""
    usages: List[TagUsage] = []
    for lineno, line in enumerate(text.split("\n"), start=1):
        tags = matchers.find_tags(line, prefix)
        if not tags:
            continue
        context = line.strip()
        usages.extend(
            TagUsage(tag=tag, line=lineno, context=context, file_path=file_path)
            for tag in tags
        )
    return usages


def scan_import_text(
    text: str,
    namespace: str,
    prefix: str,
    file_path: Optional[Path] = None,
) -> List[TagUsage]:
    """Synthesise tag usages from ``import x from '<namespace>/<ident>'`` lines."""
    usages: List[TagUsage] = []
    for lineno, line in enumerate(text.split("\n"), start=1):
        ident = matchers.imported_component(line, namespace)
        if ident is None:
            continue
        usages.append(TagUsage(
            tag=matchers.format_tag(prefix, matchers.kebab_case(ident)),
            line=lineno,
            context=line.strip(),
            file_path=file_path,
        ))
    return usages


class TagUsageScanner:
    """Attaches tag usages to a hierarchy node.

    Sources are the markup template next to the entity file (same directory,
    same name up to the first dot) and component imports in the entity's
    own logic file.
    """

    def __init__(self, index: FileIndex) -> None:
        self.index = index

    def adjacent_markup(self, file_path: Path) -> List[Path]:
        base = file_path.name.split(".")[0]
        candidates = [file_path.parent / f"{base}{ext}" for ext in self.index.settings.markup_extensions]
        return [p for p in candidates if p.is_file()]

    def scan_entity(self, node: HierarchyNode) -> None:
        settings = self.index.settings
        try:
            for markup_path in self.adjacent_markup(node.file_path):
                text = self.index.read_path(markup_path)
                node.tags.extend(scan_markup_text(text, settings.tag_prefix, markup_path))

            if self.index.kind_of(node.file_path) is FileKind.LOGIC:
                text = self.index.read_path(node.file_path)
                node.tags.extend(scan_import_text(
                    text, settings.import_namespace, settings.tag_prefix, node.file_path,
                ))
        except (OSError, re.error) as exc:
            logger.warning("Error finding custom tags for %s: %s", node.name, exc)


class TagUsageIndex:
    """Flat catalogue of every custom tag used in any markup file."""

    def __init__(self, index: FileIndex) -> None:
        self.index = index

    def scan_workspace(self) -> List[TagUsage]:
        prefix = self.index.settings.tag_prefix
        usages: List[TagUsage] = []
        for file, text in self.index.iter_texts(self.index.markup_files()):
            usages.extend(scan_markup_text(text, prefix, file.path))
        if not usages:
            logger.info("No custom <%s-*> tags found under %s", prefix, self.index.project_root)
        return usages
