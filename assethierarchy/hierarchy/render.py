"""Mini README: Plain-text outline of a hierarchy for console output."""

from __future__ import annotations

from typing import List, Optional

from .models import CategoryNode, HierarchyResult

INDENT = "  "


def _render_category(node: CategoryNode, depth: int, lines: List[str], file_index) -> None:
    lines.append(
        f"{INDENT * depth}[{node.label}] ({node.asset_count} direct, {node.total_asset_count} total)"
    )
    for child in node.children:
        _render_category(child, depth + 1, lines, file_index)
    for leaf in node.assets:
        flags = ""
        if file_index is not None:
            marks = []
            if file_index.has_model(leaf.record.key):
                marks.append("model")
            if file_index.has_panorama(leaf.record.key):
                marks.append("panorama")
            if marks:
                flags = f" <{', '.join(marks)}>"
        lines.append(f"{INDENT * (depth + 1)}- {leaf.record.display_name} ({leaf.record.key}){flags}")


def render_tree(result: HierarchyResult, file_index: Optional[object] = None) -> str:
    """Return an indented outline with categories before their assets."""

    lines: List[str] = []
    for root in result.roots:
        _render_category(root, 0, lines, file_index)
    if result.orphans:
        lines.append(f"Unclassified ({len(result.orphans)})")
        for record in result.orphans:
            lines.append(f"{INDENT}- {record.display_name} ({record.key})")
    return "\n".join(lines)
