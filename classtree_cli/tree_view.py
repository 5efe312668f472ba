"""Presentation of built hierarchies: tree rows, navigation targets, rich rendering."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional

from rich.markup import escape
from rich.tree import Tree

from .models import HierarchyNode, TagUsage

TAGS_SECTION_LABEL = "Custom Tags"


@dataclass(frozen=True)
class NavigationTarget:
    file_path: Path
    line: Optional[int] = None

    @property
    def command(self) -> str:
        return "open_file" if self.line is None else "open_file_at_line"

    def __str__(self) -> str:
        return str(self.file_path) if self.line is None else f"{self.file_path}:{self.line}"


class RowKind(str, Enum):
    ENTITY = "entity"
    TAG_SECTION = "tag_section"
    TAG_LEAF = "tag_leaf"


@dataclass(frozen=True)
class TreeRow:
    """One displayable row; ``kind`` tells entity, tag section and tag leaf apart."""

    kind: RowKind
    label: str
    expandable: bool
    description: str = ""
    tooltip: str = ""
    target: Optional[NavigationTarget] = None
    node: Optional[HierarchyNode] = None


def entity_row(node: HierarchyNode) -> TreeRow:
    return TreeRow(
        kind=RowKind.ENTITY,
        label=node.name,
        expandable=bool(node.children or node.tags),
        description=node.file_path.parent.name,
        tooltip=str(node.file_path),
        target=NavigationTarget(node.file_path),
        node=node,
    )


def tag_leaf_row(usage: TagUsage, owner: HierarchyNode) -> TreeRow:
    return TreeRow(
        kind=RowKind.TAG_LEAF,
        label=usage.name,
        expandable=False,
        description=f"Line {usage.line}",
        tooltip=usage.context,
        target=NavigationTarget(usage.file_path or owner.file_path, usage.line),
    )


def child_rows(row: TreeRow) -> List[TreeRow]:
    """Rows shown when *row* is expanded.

    An entity shows its tag section (if it has tags) followed by its child
    entities; a tag section shows one leaf per usage.
    """
    node = row.node
    if node is None or row.kind is RowKind.TAG_LEAF:
        return []
    if row.kind is RowKind.TAG_SECTION:
        return [tag_leaf_row(usage, node) for usage in node.tags]

    rows: List[TreeRow] = []
    if node.tags:
        rows.append(TreeRow(
            kind=RowKind.TAG_SECTION,
            label=TAGS_SECTION_LABEL,
            expandable=True,
            node=node,
        ))
    rows.extend(entity_row(child) for child in node.children)
    return rows


class HierarchyView:
    """Holds the single tree currently on display; each refresh replaces it."""

    def __init__(self) -> None:
        self._root: Optional[HierarchyNode] = None

    @property
    def root(self) -> Optional[HierarchyNode]:
        return self._root

    def refresh(self, root: Optional[HierarchyNode]) -> None:
        self._root = root

    def top_rows(self) -> List[TreeRow]:
        return [entity_row(self._root)] if self._root is not None else []


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

_ICONS = {
    RowKind.ENTITY: "[bold cyan]◆[/bold cyan]",
    RowKind.TAG_SECTION: "[magenta]#[/magenta]",
    RowKind.TAG_LEAF: "[green]<>[/green]",
}


def _row_label(row: TreeRow, show_paths: bool) -> str:
    text = f"{_ICONS[row.kind]} {escape(row.label)}"
    if row.description:
        text += f" [dim]{escape(row.description)}[/dim]"
    if row.kind is RowKind.TAG_LEAF:
        text += f"  [dim italic]{escape(row.tooltip)}[/dim italic]"
    elif row.kind is RowKind.ENTITY and show_paths and row.target is not None:
        text += f"\n[dim]{escape(str(row.target))}[/dim]"
    return text


def _attach(branch: Tree, row: TreeRow, show_paths: bool) -> None:
    sub = branch.add(_row_label(row, show_paths))
    for child in child_rows(row):
        _attach(sub, child, show_paths)


def render_tree(root: HierarchyNode, show_paths: bool = False) -> Tree:
    """Fully expanded ``rich`` tree for *root*."""
    top = entity_row(root)
    tree = Tree(_row_label(top, show_paths), guide_style="dim")
    for child in child_rows(top):
        _attach(tree, child, show_paths)
    return tree


def group_usages_by_tag(usages: List[TagUsage]) -> Dict[str, List[TagUsage]]:
    """Usages keyed by normalised tag name, in first-seen order."""
    groups: Dict[str, List[TagUsage]] = {}
    for usage in usages:
        groups.setdefault(usage.name, []).append(usage)
    return groups
