"""Serialization - export a LineageResult to JSON dicts, CSV and text.

This module provides functions to serialize the graph, the per-root
hierarchies and the positioned layout for external renderers.
"""

from __future__ import annotations

import csv
import io
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from rootline.graph import HierarchyNode
    from rootline.layout import ForestLayout
    from rootline.pipeline import LineageResult


def serialize_layout(layout: ForestLayout) -> dict[str, Any]:
    """Serialize a ForestLayout to a JSON-compatible dict.

    Args:
        layout: The stacked forest layout.

    Returns:
        Dict with canvas dimensions, band height and one entry per tree.
    """
    settings = layout.settings
    return {
        "canvas": {"width": settings.canvas_width, "height": settings.canvas_height},
        "node_width": settings.node_width,
        "node_height": settings.node_height,
        "band_height": layout.band_height,
        "trees": [
            {
                "index": tree.index,
                "root": tree.root.id,
                "offset": tree.offset,
                "extent": list(tree.extent),
                "nodes": tree.root.to_dict(),
            }
            for tree in layout.trees
        ],
    }


def serialize_result(result: LineageResult) -> dict[str, Any]:
    """Serialize a LineageResult to a JSON-compatible dict.

    Returns:
        Dict with graph, roots, hierarchies, layout and metadata.
    """
    return {
        "graph": result.graph.to_dict(),
        "roots": list(result.roots),
        "hierarchies": [tree.to_dict() for tree in result.hierarchies],
        "layout": serialize_layout(result.layout),
        "metadata": {
            "node_count": result.graph.node_count(),
            "link_count": result.graph.link_count(),
            "root_count": len(result.roots),
        },
    }


def to_csv(layout: ForestLayout) -> str:
    """Generate a CSV of node positions, one row per positioned node.

    A node repeated under several parents or roots gets one row per copy.
    """
    output = io.StringIO()
    writer = csv.writer(output, quoting=csv.QUOTE_MINIMAL)
    writer.writerow(["tree", "id", "parent", "depth", "x", "y", "canvas_x", "canvas_y"])

    for tree in layout.trees:
        rows = [(tree.root, None)]
        rows.extend((child, parent) for parent, child in tree.root.links())
        for node, parent in rows:
            writer.writerow(
                [
                    tree.index,
                    node.id,
                    "" if parent is None else parent.id,
                    node.depth,
                    node.x,
                    node.y,
                    node.canvas_x,
                    node.canvas_y,
                ]
            )

    return output.getvalue()


def to_text(hierarchies: list[HierarchyNode]) -> str:
    """Render hierarchies as an indented tree, one root per block."""
    lines: list[str] = []
    for root in hierarchies:
        stack = [(root, 0)]
        while stack:
            node, indent = stack.pop()
            marker = "-" if node.is_leaf else "+"
            lines.append(f"{'  ' * indent}{marker} {node.id}")
            stack.extend((child, indent + 1) for child in reversed(node.children))
        lines.append("")
    return "\n".join(lines)


__all__ = [
    "serialize_layout",
    "serialize_result",
    "to_csv",
    "to_text",
]
