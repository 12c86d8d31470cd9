"""Layout module - tidy tree positioning and forest stacking.

Exports:
- PositionedNode: Hierarchy node with coordinates
- layout_tree: Tidy-tree layout of one hierarchy
- LayoutSettings: Spacing and canvas constants
- TreeLayout: One positioned root tree with its offset
- ForestLayout: All trees stacked on a canvas
- layout_forest: Lay out and stack a list of hierarchies
"""

from rootline.layout.forest import ForestLayout, LayoutSettings, TreeLayout, layout_forest
from rootline.layout.tidy import PositionedNode, layout_tree

__all__ = [
    "PositionedNode",
    "layout_tree",
    "LayoutSettings",
    "TreeLayout",
    "ForestLayout",
    "layout_forest",
]
