"""Tests for presentation rows, navigation targets and rendering."""

from pathlib import Path

from rich.console import Console

from classtree_cli.models import HierarchyNode, TagUsage
from classtree_cli.tree_view import (
    TAGS_SECTION_LABEL,
    HierarchyView,
    NavigationTarget,
    RowKind,
    child_rows,
    entity_row,
    group_usages_by_tag,
    render_tree,
)


def _sample_tree(base: Path) -> HierarchyNode:
    leaf = HierarchyNode(name="Leaf", file_path=base / "leaf" / "leaf.js")
    root = HierarchyNode(
        name="Root",
        file_path=base / "root" / "root.js",
        children=[leaf],
        tags=[
            TagUsage(tag="<c-badge>", line=3, context="<c-badge></c-badge>", file_path=base / "root" / "root.html"),
            TagUsage(tag="<c-icon>", line=1, context="import icon from 'c/icon';"),
        ],
    )
    return root


def test_navigation_target_commands(temp_dir: Path):
    assert NavigationTarget(temp_dir / "a.js").command == "open_file"
    target = NavigationTarget(temp_dir / "a.js", 7)
    assert target.command == "open_file_at_line"
    assert str(target).endswith("a.js:7")


def test_find_searches_descendants(temp_dir: Path):
    root = _sample_tree(temp_dir)

    assert root.find("Root") is root
    assert root.find("Leaf") is root.children[0]
    assert root.find("Ghost") is None


def test_entity_row(temp_dir: Path):
    root = _sample_tree(temp_dir)

    row = entity_row(root)

    assert row.kind is RowKind.ENTITY
    assert row.label == "Root"
    assert row.description == "root"
    assert row.expandable
    assert row.target == NavigationTarget(root.file_path)
    assert not entity_row(root.children[0]).expandable


def test_tag_section_precedes_children(temp_dir: Path):
    rows = child_rows(entity_row(_sample_tree(temp_dir)))

    assert [(r.kind, r.label) for r in rows] == [
        (RowKind.TAG_SECTION, TAGS_SECTION_LABEL),
        (RowKind.ENTITY, "Leaf"),
    ]


def test_tag_leaves_navigate_to_line(temp_dir: Path):
    root = _sample_tree(temp_dir)
    section = child_rows(entity_row(root))[0]

    leaves = child_rows(section)

    assert [(l.label, l.description) for l in leaves] == [("badge", "Line 3"), ("icon", "Line 1")]
    assert leaves[0].target == NavigationTarget(temp_dir / "root" / "root.html", 3)
    # Usages without their own file fall back to the entity's file.
    assert leaves[1].target == NavigationTarget(root.file_path, 1)
    assert leaves[0].tooltip == "<c-badge></c-badge>"
    assert child_rows(leaves[0]) == []


def test_no_tag_section_without_tags(temp_dir: Path):
    node = HierarchyNode(name="Lonely", file_path=temp_dir / "lonely.js")

    assert child_rows(entity_row(node)) == []


def test_view_holds_last_tree(temp_dir: Path):
    view = HierarchyView()
    assert view.top_rows() == []

    first = _sample_tree(temp_dir)
    second = HierarchyNode(name="Other", file_path=temp_dir / "other.js")
    view.refresh(first)
    view.refresh(second)

    assert view.root is second
    assert [r.label for r in view.top_rows()] == ["Other"]


def test_render_tree_includes_rows(temp_dir: Path):
    console = Console(record=True, width=120)

    console.print(render_tree(_sample_tree(temp_dir)))
    text = console.export_text()

    for expected in ("Root", "Leaf", TAGS_SECTION_LABEL, "badge", "Line 3"):
        assert expected in text


def test_group_usages_by_tag_keeps_first_seen_order(temp_dir: Path):
    usages = [
        TagUsage(tag="<c-b>", line=1, context="", file_path=temp_dir / "x.html"),
        TagUsage(tag="<c-a>", line=2, context="", file_path=temp_dir / "x.html"),
        TagUsage(tag="<c-b>", line=5, context="", file_path=temp_dir / "y.html"),
    ]

    groups = group_usages_by_tag(usages)

    assert list(groups) == ["b", "a"]
    assert [u.line for u in groups["b"]] == [1, 5]
