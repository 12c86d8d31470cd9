"""Forest layout - lay out every root tree and stack them on one canvas.

Each tree is positioned independently with layout_tree(), then tree ``k``
of ``N`` is shifted along the sibling axis by ``k * canvas_height / N``.
Every tree gets an equal band regardless of its size.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterator, Sequence

from rootline.graph.hierarchy import HierarchyNode
from rootline.layout.tidy import PositionedNode, layout_tree

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LayoutSettings:
    """Spacing and canvas constants for the forest layout.

    Attributes:
        node_width: Depth-axis spacing between levels.
        node_height: Sibling-axis spacing between nodes.
        canvas_width: Drawing width.
        canvas_height: Drawing height, split into one band per tree.
    """

    node_width: float = 200
    node_height: float = 100
    canvas_width: float = 1000
    canvas_height: float = 600

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LayoutSettings:
        """Build settings from a ``[layout]`` config table, ignoring unknown keys."""
        keys = ("node_width", "node_height", "canvas_width", "canvas_height")
        return cls(**{key: data[key] for key in keys if key in data})


@dataclass
class TreeLayout:
    """One laid-out root tree.

    Attributes:
        index: Position of the tree in root order.
        offset: Sibling-axis shift applied to the tree.
        root: The positioned root node.
    """

    index: int
    offset: float
    root: PositionedNode

    def nodes(self) -> Iterator[PositionedNode]:
        return self.root.descendants()

    @property
    def min_x(self) -> float:
        return min(node.x for node in self.nodes())

    @property
    def max_x(self) -> float:
        return max(node.x for node in self.nodes())

    @property
    def extent(self) -> tuple[float, float]:
        """Offset-adjusted (low, high) range along the sibling axis."""
        return self.min_x + self.offset, self.max_x + self.offset

    @property
    def span(self) -> float:
        return self.max_x - self.min_x


@dataclass
class ForestLayout:
    """All root trees stacked on a shared canvas."""

    settings: LayoutSettings
    trees: list[TreeLayout] = field(default_factory=list)

    @property
    def band_height(self) -> float:
        """Sibling-axis band given to each tree."""
        if not self.trees:
            return float(self.settings.canvas_height)
        return self.settings.canvas_height / len(self.trees)

    def all_nodes(self) -> Iterator[PositionedNode]:
        for tree in self.trees:
            yield from tree.nodes()

    def overlapping_pairs(self) -> list[tuple[int, int]]:
        """Return index pairs of trees whose offset-adjusted ranges intersect."""
        pairs = []
        extents = [tree.extent for tree in self.trees]
        for i, (low_i, high_i) in enumerate(extents):
            for j in range(i + 1, len(extents)):
                low_j, high_j = extents[j]
                if low_i <= high_j and low_j <= high_i:
                    pairs.append((i, j))
        return pairs


def layout_forest(
    hierarchies: Sequence[HierarchyNode],
    settings: LayoutSettings | None = None,
) -> ForestLayout:
    """Lay out each hierarchy and stack the results.

    Args:
        hierarchies: One tree per root, in root order.
        settings: Spacing and canvas constants (defaults when omitted).

    Returns:
        ForestLayout with one TreeLayout per hierarchy.
    """
    settings = settings or LayoutSettings()
    forest = ForestLayout(settings=settings)
    if not hierarchies:
        return forest

    band = settings.canvas_height / len(hierarchies)
    for index, hierarchy in enumerate(hierarchies):
        root = layout_tree(
            hierarchy,
            node_height=settings.node_height,
            node_width=settings.node_width,
            offset=index * band,
        )
        tree = TreeLayout(index=index, offset=index * band, root=root)
        if tree.span >= band:
            logger.warning(
                "Tree %r spans %.1f units, wider than its %.1f unit band; "
                "it may overlap neighbouring trees",
                hierarchy.id,
                tree.span,
                band,
            )
        forest.trees.append(tree)

    return forest
