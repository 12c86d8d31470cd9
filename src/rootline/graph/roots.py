"""Root finding - nodes that never appear as a link target."""

from __future__ import annotations

from rootline.graph.relations import Identifier, LineageGraph


def find_roots(graph: LineageGraph) -> list[Identifier]:
    """Return the ids of nodes with no incoming link.

    Isolated nodes are roots too (single-node trees). Output follows the
    graph's first-seen node order so layout offsets are reproducible.
    """
    targets = set(graph.iter_targets())
    return [node_id for node_id in graph.nodes if node_id not in targets]
