"""Edge extraction - turn parent/child columns into a LineageGraph."""

from __future__ import annotations

import logging
from typing import Any, Sequence

from rootline.errors import DataIntegrityError
from rootline.graph.relations import LineageGraph, Link

logger = logging.getLogger(__name__)

MULTI_PARENT_POLICIES = ("duplicate", "reject")
IDENTIFIER_TYPES = (str, int, float, bool)


def _check_identifier(value: Any, row: int, column: str) -> None:
    if not isinstance(value, IDENTIFIER_TYPES):
        raise DataIntegrityError(
            f"Row {row}: {column} value {value!r} is not a valid identifier "
            f"(expected str, int, float or bool, got {type(value).__name__})"
        )


def extract_graph(
    parent_values: Sequence[Any],
    child_values: Sequence[Any],
    multi_parent: str = "duplicate",
) -> LineageGraph:
    """Build the deduplicated node set and link list from two aligned columns.

    For each row the child is registered as a node. When the parent is not
    None it is registered too and a ``parent -> child`` link is emitted;
    a None parent marks the child as a root candidate and emits nothing.
    Rows whose child is None carry no entity and are skipped.

    Args:
        parent_values: Parent column, None for rows without a parent.
        child_values: Child column, aligned with ``parent_values`` by index.
        multi_parent: "duplicate" keeps every link (a child with several
            parents is repeated under each), "reject" raises instead.

    Returns:
        LineageGraph with nodes in first-seen order and links in row order.

    Raises:
        DataIntegrityError: If the columns differ in length, a cell is not a
            str/int/float/bool identifier, or a child has more than one
            parent under the "reject" policy.
        ValueError: If ``multi_parent`` is not a known policy.
    """
    if multi_parent not in MULTI_PARENT_POLICIES:
        raise ValueError(f"Unknown multi-parent policy: {multi_parent}")

    if len(parent_values) != len(child_values):
        raise DataIntegrityError(
            f"Parent column has {len(parent_values)} values but child column "
            f"has {len(child_values)}"
        )

    # dict keys give O(1) dedup while keeping insertion order
    nodes: dict[Any, None] = {}
    links: list[Link] = []
    parents_by_child: dict[Any, list[Any]] = {}

    for row, (parent, child) in enumerate(zip(parent_values, child_values)):
        if child is None:
            continue
        _check_identifier(child, row, "child")
        if parent is not None:
            _check_identifier(parent, row, "parent")
        nodes.setdefault(child, None)
        if parent is None:
            continue
        nodes.setdefault(parent, None)
        links.append(Link(source=parent, target=child))
        parents_by_child.setdefault(child, []).append(parent)

    if multi_parent == "reject":
        for child, parents in parents_by_child.items():
            distinct = list(dict.fromkeys(parents))
            if len(distinct) > 1:
                raise DataIntegrityError(
                    f"Node {child!r} has multiple parents: "
                    + ", ".join(repr(p) for p in distinct)
                )

    logger.debug("Extracted %d nodes and %d links", len(nodes), len(links))
    return LineageGraph(nodes=list(nodes), links=links)
