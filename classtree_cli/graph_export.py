"""Hierarchy export helpers for Graphviz DOT and JSON outputs."""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional, Set, Tuple

from .models import HierarchyNode


def hierarchy_to_dot(root: HierarchyNode, project_root: Optional[Path] = None) -> str:
    lines = ["digraph ClassHierarchy {"]
    lines.append("  rankdir=TB;")
    lines.append("  node [shape=box];")

    declared: Set[str] = set()
    edges: List[Tuple[str, str]] = []
    for node in root.walk():
        node_id = _node_id(node)
        if node_id not in declared:
            declared.add(node_id)
            label = f"{node.name}\\n{_display_path(node.file_path, project_root)}"
            if node.tags:
                label += f"\\n{len(node.tags)} tag usage(s)"
            lines.append(f'  "{_esc(node_id)}" [label="{_esc(label)}"];')
        for child in node.children:
            edge = (node_id, _node_id(child))
            if edge not in edges:
                edges.append(edge)

    for src, dst in edges:
        lines.append(f'  "{_esc(src)}" -> "{_esc(dst)}";')
    lines.append("}")
    return "\n".join(lines)


def export_dot(root: HierarchyNode, output_file: Path, project_root: Optional[Path] = None) -> None:
    output_file.write_text(hierarchy_to_dot(root, project_root), encoding="utf-8")


def export_json(root: HierarchyNode, output_file: Path) -> None:
    output_file.write_text(json.dumps(root.to_dict(), indent=2), encoding="utf-8")


def _node_id(node: HierarchyNode) -> str:
    return f"{node.name}@{node.file_path.as_posix()}"


def _display_path(path: Path, project_root: Optional[Path]) -> str:
    if project_root is not None:
        try:
            return path.relative_to(project_root).as_posix()
        except ValueError:
            pass
    return path.name


def _esc(text: str) -> str:
    return text.replace('"', '\\"')
