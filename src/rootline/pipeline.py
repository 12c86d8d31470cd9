"""Lineage pipeline - table columns to a laid-out forest.

build_lineage() is pure and total: it either returns a complete result or
raises a LineageError. run_pipeline() is the non-fatal boundary used by
hosts that must keep running: it logs the error and returns None so no
partial graph is ever rendered.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Sequence

from rootline.config import ConfigLoader
from rootline.errors import LineageError
from rootline.graph import HierarchyNode, LineageGraph, build_forest, extract_graph, find_roots
from rootline.layout import ForestLayout, LayoutSettings, layout_forest
from rootline.table import Table, select_columns

logger = logging.getLogger(__name__)


@dataclass
class LineageResult:
    """Everything a renderer needs for one input.

    Attributes:
        graph: Deduplicated nodes and links.
        roots: Root ids in first-seen order.
        hierarchies: One tree per root.
        layout: Positioned, stacked trees.
    """

    graph: LineageGraph
    roots: list[Any]
    hierarchies: list[HierarchyNode]
    layout: ForestLayout


def build_lineage(
    parent_values: Sequence[Any],
    child_values: Sequence[Any],
    settings: LayoutSettings | None = None,
    multi_parent: str = "duplicate",
) -> LineageResult:
    """Run extraction, root finding, hierarchy building and layout.

    Raises:
        DataIntegrityError: Mismatched columns or rejected multi-parent node.
        CycleDetectedError: The parent/child links contain a cycle.
    """
    graph = extract_graph(parent_values, child_values, multi_parent=multi_parent)
    roots = find_roots(graph)
    hierarchies = build_forest(graph, roots)
    layout = layout_forest(hierarchies, settings)
    logger.debug(
        "Built lineage: %d nodes, %d links, %d roots",
        graph.node_count(),
        graph.link_count(),
        len(roots),
    )
    return LineageResult(graph=graph, roots=roots, hierarchies=hierarchies, layout=layout)


def lineage_from_table(
    table: Table,
    config: ConfigLoader,
    parent_column: str | None = None,
    child_column: str | None = None,
) -> LineageResult:
    """Build a lineage from ``table`` using the configured columns.

    Explicit ``parent_column``/``child_column`` win over ``columns.*``.
    """
    parents, children = select_columns(
        table,
        parent_column or config.get("columns.parent"),
        child_column or config.get("columns.child"),
        null_values=config.get("columns.null_values", [""]),
    )
    return build_lineage(
        parents,
        children,
        settings=LayoutSettings.from_dict(config.get("layout", {})),
        multi_parent=config.get("graph.multi_parent", "duplicate"),
    )


def run_pipeline(
    table: Table,
    config: ConfigLoader,
    parent_column: str | None = None,
    child_column: str | None = None,
) -> LineageResult | None:
    """Like lineage_from_table(), but report errors instead of raising.

    Returns:
        The result, or None when the input could not form a lineage.
    """
    try:
        return lineage_from_table(table, config, parent_column, child_column)
    except LineageError as e:
        logger.error("Lineage not built from %s: %s", table.source, e)
        return None
