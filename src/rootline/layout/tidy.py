"""Tidy tree layout.

Positions one hierarchy with the Buchheim/Walker linear-time variant of
the Reingold-Tilford algorithm, using the same separation rule and node
size convention as d3's ``tree().nodeSize([dx, dy])``:

- siblings are placed left to right in child order
- a parent sits midway between its first and last child
- neighbouring subtrees never overlap (siblings 1 unit apart, cousins 2)
- the root is at sibling coordinate 0, depth coordinate 0
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterator

from rootline.graph.hierarchy import HierarchyNode


@dataclass
class PositionedNode:
    """A hierarchy node with layout coordinates.

    Attributes:
        id: The node identifier.
        x: Sibling-axis coordinate, relative to the tree root.
        y: Depth-axis coordinate (``depth * node_width``).
        depth: Distance from the tree root.
        offset: Sibling-axis shift applied to the whole tree on the canvas.
        children: Positioned children in hierarchy order.
    """

    id: Any
    x: float
    y: float
    depth: int
    offset: float = 0.0
    children: tuple[PositionedNode, ...] = ()

    @property
    def canvas_x(self) -> float:
        """Horizontal drawing position (depth runs left to right)."""
        return self.y

    @property
    def canvas_y(self) -> float:
        """Vertical drawing position, including the tree offset."""
        return self.x + self.offset

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def descendants(self) -> Iterator[PositionedNode]:
        """Iterate this node and its descendants in pre-order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def links(self) -> Iterator[tuple[PositionedNode, PositionedNode]]:
        """Iterate (parent, child) pairs of this subtree in pre-order."""
        for node in self.descendants():
            for child in node.children:
                yield node, child

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "x": self.x,
            "y": self.y,
            "depth": self.depth,
            "canvas_x": self.canvas_x,
            "canvas_y": self.canvas_y,
            "children": [child.to_dict() for child in self.children] if self.children else None,
        }


class _WalkerNode:
    """Mutable bookkeeping for one node during the layout walks."""

    __slots__ = (
        "source",
        "parent",
        "children",
        "depth",
        "index",
        "ancestor",
        "default_ancestor",
        "prelim",
        "mod",
        "change",
        "shift",
        "thread",
        "x",
    )

    def __init__(
        self,
        source: HierarchyNode | None,
        parent: _WalkerNode | None,
        index: int,
        depth: int,
    ) -> None:
        self.source = source
        self.parent = parent
        self.children: list[_WalkerNode] = []
        self.depth = depth
        self.index = index
        self.ancestor: _WalkerNode = self
        self.default_ancestor: _WalkerNode | None = None
        self.prelim = 0.0
        self.mod = 0.0
        self.change = 0.0
        self.shift = 0.0
        self.thread: _WalkerNode | None = None
        self.x = 0.0


Separation = Callable[[_WalkerNode, _WalkerNode], float]


def default_separation(a: _WalkerNode, b: _WalkerNode) -> float:
    """One unit between siblings, two between cousins."""
    return 1.0 if a.parent is b.parent else 2.0


def _next_left(v: _WalkerNode) -> _WalkerNode | None:
    return v.children[0] if v.children else v.thread


def _next_right(v: _WalkerNode) -> _WalkerNode | None:
    return v.children[-1] if v.children else v.thread


def _move_subtree(wm: _WalkerNode, wp: _WalkerNode, shift: float) -> None:
    change = shift / (wp.index - wm.index)
    wp.change -= change
    wp.shift += shift
    wm.change += change
    wp.prelim += shift
    wp.mod += shift


def _execute_shifts(v: _WalkerNode) -> None:
    shift = 0.0
    change = 0.0
    for w in reversed(v.children):
        w.prelim += shift
        w.mod += shift
        change += w.change
        shift += w.shift + change


def _next_ancestor(vim: _WalkerNode, v: _WalkerNode, ancestor: _WalkerNode) -> _WalkerNode:
    return vim.ancestor if vim.ancestor.parent is v.parent else ancestor


def _apportion(
    v: _WalkerNode,
    w: _WalkerNode | None,
    ancestor: _WalkerNode,
    separation: Separation,
) -> _WalkerNode:
    """Push subtree ``v`` right until it clears its left siblings' contours."""
    if w is None:
        return ancestor

    vip = vop = v
    vim: _WalkerNode | None = w
    vom = v.parent.children[0]
    sip = vip.mod
    sop = vop.mod
    sim = w.mod
    som = vom.mod

    vim = _next_right(vim)
    vip_next = _next_left(vip)
    while vim is not None and vip_next is not None:
        vip = vip_next
        vom = _next_left(vom)
        vop = _next_right(vop)
        vop.ancestor = v
        shift = vim.prelim + sim - vip.prelim - sip + separation(vim, vip)
        if shift > 0:
            _move_subtree(_next_ancestor(vim, v, ancestor), v, shift)
            sip += shift
            sop += shift
        sim += vim.mod
        sip += vip.mod
        som += vom.mod
        sop += vop.mod
        vim = _next_right(vim)
        vip_next = _next_left(vip)

    if vim is not None and _next_right(vop) is None:
        vop.thread = vim
        vop.mod += sim - sop
    if vip_next is not None and _next_left(vom) is None:
        vom.thread = vip_next
        vom.mod += sip - som
        ancestor = v
    return ancestor


def _first_walk(v: _WalkerNode, separation: Separation) -> None:
    siblings = v.parent.children
    w = siblings[v.index - 1] if v.index else None
    if v.children:
        _execute_shifts(v)
        midpoint = (v.children[0].prelim + v.children[-1].prelim) / 2
        if w is not None:
            v.prelim = w.prelim + separation(v, w)
            v.mod = v.prelim - midpoint
        else:
            v.prelim = midpoint
    elif w is not None:
        v.prelim = w.prelim + separation(v, w)
    v.parent.default_ancestor = _apportion(
        v, w, v.parent.default_ancestor or siblings[0], separation
    )


def _wrap(root: HierarchyNode) -> tuple[_WalkerNode, list[_WalkerNode]]:
    """Wrap ``root`` under a virtual parent.

    Returns the wrapped root and its nodes in pre-order with children
    visited right to left; reversing that list yields a post-order in
    which left siblings come first.
    """
    virtual = _WalkerNode(None, None, 0, -1)
    top = _WalkerNode(root, virtual, 0, 0)
    virtual.children = [top]

    order: list[_WalkerNode] = []
    stack = [top]
    while stack:
        node = stack.pop()
        order.append(node)
        node.children = [
            _WalkerNode(child, node, i, node.depth + 1)
            for i, child in enumerate(node.source.children)
        ]
        stack.extend(node.children)
    return top, order


def layout_tree(
    root: HierarchyNode,
    node_height: float = 100,
    node_width: float = 200,
    offset: float = 0.0,
    separation: Separation = default_separation,
) -> PositionedNode:
    """Assign tidy-tree coordinates to every node of ``root``.

    Args:
        root: The hierarchy to lay out.
        node_height: Sibling-axis distance for one separation unit.
        node_width: Depth-axis distance between levels.
        offset: Sibling-axis shift stored on every positioned node.
        separation: Separation rule between neighbouring nodes, in units.

    Returns:
        PositionedNode tree mirroring ``root``.
    """
    top, pre_order = _wrap(root)
    post_order = pre_order[::-1]

    for node in post_order:
        _first_walk(node, separation)

    top.parent.mod = -top.prelim
    for node in pre_order:
        node.x = node.prelim + node.parent.mod
        node.mod += node.parent.mod

    # pre_order lists parents before children and children right to left,
    # so post_order builds every child before its parent
    built: dict[int, PositionedNode] = {}
    for node in post_order:
        positioned = PositionedNode(
            id=node.source.id,
            x=node.x * node_height,
            y=node.depth * node_width,
            depth=node.depth,
            offset=offset,
            children=tuple(built.pop(id(child)) for child in node.children),
        )
        built[id(node)] = positioned
    return built[id(top)]
