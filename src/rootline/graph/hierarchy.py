"""
Hierarchy building for lineage trees.

Expands each root into a nested tree by following outgoing links:
- HierarchyNode: immutable tree node, explicitly LEAF or BRANCH
- build_hierarchy: expand one root from a link list
- build_forest: expand every root of a graph, rejecting cycles
- find_cycle: locate a cycle among a set of nodes
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Iterator, Mapping, Sequence

from rootline.errors import CycleDetectedError
from rootline.graph.relations import Identifier, LineageGraph, Link
from rootline.graph.roots import find_roots

ChildrenIndex = Mapping[Identifier, Sequence[Identifier]]

_EXHAUSTED = object()


class HierarchyKind(Enum):
    """Shape of a hierarchy node."""

    LEAF = "leaf"
    BRANCH = "branch"


@dataclass(frozen=True)
class HierarchyNode:
    """A node of one root's tree.

    A node with no outgoing links is a LEAF and has an empty ``children``
    tuple; a BRANCH always has at least one child. The dict form keeps the
    ``"children": None`` convention for leaves.

    Attributes:
        id: The node identifier.
        children: Child nodes in link order.
    """

    id: Identifier
    children: tuple[HierarchyNode, ...] = ()

    @property
    def kind(self) -> HierarchyKind:
        return HierarchyKind.BRANCH if self.children else HierarchyKind.LEAF

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def walk(self) -> Iterator[HierarchyNode]:
        """Iterate this node and its descendants in pre-order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def size(self) -> int:
        """Return the number of nodes in this subtree."""
        return sum(1 for _ in self.walk())

    def to_dict(self) -> dict[str, Any]:
        """Serialize to ``{id, children}`` with ``children`` None for leaves."""
        return {
            "id": self.id,
            "children": [child.to_dict() for child in self.children] if self.children else None,
        }


@dataclass
class _Frame:
    node_id: Identifier
    child_ids: Sequence[Identifier]
    position: int = 0
    built: list[HierarchyNode] = field(default_factory=list)


def build_children_index(links: Iterable[Link]) -> dict[Identifier, list[Identifier]]:
    """Build source id -> [target ids] mapping in link order."""
    index: dict[Identifier, list[Identifier]] = {}
    for link in links:
        index.setdefault(link.source, []).append(link.target)
    return index


def _expand(root_id: Identifier, index: ChildrenIndex) -> HierarchyNode:
    """Expand ``root_id`` using an explicit stack instead of recursion.

    Deep lineages would otherwise hit the interpreter recursion limit.
    ``on_path`` holds the ids of the current root-to-node path; meeting one
    of them again means the links loop back.
    """
    stack = [_Frame(root_id, index.get(root_id, ()))]
    path: list[Identifier] = [root_id]
    on_path = {root_id}

    while True:
        frame = stack[-1]
        if frame.position < len(frame.child_ids):
            child_id = frame.child_ids[frame.position]
            frame.position += 1
            if child_id in on_path:
                start = path.index(child_id)
                raise CycleDetectedError(child_id, path[start:] + [child_id])
            stack.append(_Frame(child_id, index.get(child_id, ())))
            path.append(child_id)
            on_path.add(child_id)
            continue

        stack.pop()
        path.pop()
        on_path.discard(frame.node_id)
        node = HierarchyNode(id=frame.node_id, children=tuple(frame.built))
        if not stack:
            return node
        stack[-1].built.append(node)


def build_hierarchy(root_id: Identifier, links: Sequence[Link]) -> HierarchyNode:
    """Build the tree hanging from ``root_id``.

    Args:
        root_id: Identifier of the tree root.
        links: The full link list of the graph.

    Returns:
        HierarchyNode for ``root_id``; children follow link order.

    Raises:
        CycleDetectedError: If a path from the root revisits one of its own
            ancestors.
    """
    return _expand(root_id, build_children_index(links))


def find_cycle(index: ChildrenIndex, start_ids: Iterable[Identifier]) -> list[Identifier] | None:
    """Find a cycle reachable from any of ``start_ids``.

    Uses an iterative three-colour DFS.

    Returns:
        The cycle as a closed path (first id repeated at the end), or None.
    """
    done: set[Identifier] = set()
    for start in start_ids:
        if start in done:
            continue
        path: list[Identifier] = [start]
        on_path = {start}
        iterators = [iter(index.get(start, ()))]
        while iterators:
            child = next(iterators[-1], _EXHAUSTED)
            if child is _EXHAUSTED:
                iterators.pop()
                finished = path.pop()
                on_path.discard(finished)
                done.add(finished)
                continue
            if child in on_path:
                return path[path.index(child) :] + [child]
            if child in done:
                continue
            path.append(child)
            on_path.add(child)
            iterators.append(iter(index.get(child, ())))
    return None


def build_forest(
    graph: LineageGraph,
    roots: Sequence[Identifier] | None = None,
) -> list[HierarchyNode]:
    """Build one hierarchy per root, in root order.

    A node reachable from two roots appears in both trees. A node reachable
    from no root can only sit on or below a cycle (a pure cycle has no root
    at all), so that case is reported as a cycle too.

    Args:
        graph: The extracted lineage graph.
        roots: Root ids; computed with find_roots() when omitted.

    Returns:
        List of HierarchyNode trees.

    Raises:
        CycleDetectedError: If the links contain a cycle.
    """
    if roots is None:
        roots = find_roots(graph)
    index = build_children_index(graph.links)

    trees = [_expand(root_id, index) for root_id in roots]

    reached = {node.id for tree in trees for node in tree.walk()}
    unreached = [node_id for node_id in graph.nodes if node_id not in reached]
    if unreached:
        cycle = find_cycle(index, unreached)
        if cycle is not None:
            raise CycleDetectedError(cycle[0], cycle)
        raise CycleDetectedError(unreached[0])

    return trees
