"""HTML Generator for lineage diagrams.

This module draws a ForestLayout as an SVG page: curved links, node
circles and labels, with wheel zoom and drag pan. Uses a Jinja2 template.
The generator only reads the layout it is given; all geometry comes from
rootline.layout.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterator

from jinja2 import Environment, PackageLoader, select_autoescape

from rootline import __version__
from rootline.config.defaults import DEFAULT_CONFIG

if TYPE_CHECKING:
    from rootline.layout import ForestLayout, PositionedNode, TreeLayout


@dataclass
class NodeMark:
    """A node circle and its label."""

    label: str
    cx: float
    cy: float
    label_dy: int


@dataclass
class LinkMark:
    """A curved link between two nodes."""

    path: str


@dataclass
class TreeMarks:
    """Everything drawn for one root tree."""

    root: str
    offset: float
    links: list[LinkMark]
    nodes: list[NodeMark]


def _breadth_first(root: PositionedNode) -> Iterator[PositionedNode]:
    queue = deque([root])
    while queue:
        node = queue.popleft()
        yield node
        queue.extend(node.children)


def link_path(source: PositionedNode, target: PositionedNode) -> str:
    """Cubic Bezier from ``source`` to ``target`` with horizontal tangents."""
    sx, sy = source.canvas_x, source.canvas_y
    tx, ty = target.canvas_x, target.canvas_y
    mid = (sx + tx) / 2
    return f"M{sx:g},{sy:g}C{mid:g},{sy:g} {mid:g},{ty:g} {tx:g},{ty:g}"


class HTMLGenerator:
    """Generates an interactive HTML lineage view from a ForestLayout.

    Args:
        layout: The stacked forest layout to draw.
        render: ``[render]`` config table (colours, radius, font size).
        title: Page title.
        version: Version string for display (defaults to package version).
    """

    def __init__(
        self,
        layout: ForestLayout,
        render: dict[str, Any] | None = None,
        title: str = "Lineage",
        version: str | None = None,
    ) -> None:
        self.layout = layout
        self.render = render or {}
        self.title = title
        self.version = version if version is not None else __version__

    def generate(self) -> str:
        """Generate the complete HTML document.

        Returns:
            Complete HTML document as string.
        """
        env = Environment(
            loader=PackageLoader("rootline.html", "templates"),
            autoescape=select_autoescape(["html", "xml", "j2"]),
        )
        template = env.get_template("lineage.html.j2")

        settings = self.layout.settings
        return template.render(
            title=self.title,
            width=settings.canvas_width,
            height=settings.canvas_height,
            trees=[self._build_marks(tree) for tree in self.layout.trees],
            style=self._style(),
            version=self.version,
        )

    def _style(self) -> dict[str, Any]:
        style = dict(DEFAULT_CONFIG["render"])
        style.update(self.render)
        return style

    def _build_marks(self, tree: TreeLayout) -> TreeMarks:
        ordered = list(_breadth_first(tree.root))
        links = [
            LinkMark(path=link_path(parent, child))
            for parent in ordered
            for child in parent.children
        ]
        # Labels alternate above/below so neighbours at one depth don't collide
        nodes = [
            NodeMark(
                label=str(node.id),
                cx=node.canvas_x,
                cy=node.canvas_y,
                label_dy=-15 if i % 2 == 0 else 20,
            )
            for i, node in enumerate(ordered)
        ]
        return TreeMarks(root=str(tree.root.id), offset=tree.offset, links=links, nodes=nodes)
