"""Graph module - lineage graph construction.

Exports:
- Link: Directed parent -> child edge
- LineageGraph: Deduplicated nodes plus ordered links
- extract_graph: Build a LineageGraph from parent/child columns
- find_roots: Node ids with no incoming link
- HierarchyNode / HierarchyKind: Per-root tree nodes
- build_hierarchy / build_forest: Expand roots into trees
"""

from rootline.graph.extract import extract_graph
from rootline.graph.hierarchy import (
    HierarchyKind,
    HierarchyNode,
    build_forest,
    build_hierarchy,
    find_cycle,
)
from rootline.graph.relations import LineageGraph, Link
from rootline.graph.roots import find_roots

__all__ = [
    "Link",
    "LineageGraph",
    "extract_graph",
    "find_roots",
    "HierarchyKind",
    "HierarchyNode",
    "build_hierarchy",
    "build_forest",
    "find_cycle",
]
