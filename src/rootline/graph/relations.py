"""Relations - Nodes and links of the lineage graph.

This module defines the flat graph produced from table rows:
- Link: A directed parent -> child edge
- LineageGraph: Deduplicated node ids plus ordered links
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Hashable, Iterator

Identifier = Hashable


@dataclass(frozen=True)
class Link:
    """A directed edge from a parent identifier to a child identifier.

    Attributes:
        source: The parent identifier.
        target: The child identifier.
    """

    source: Identifier
    target: Identifier

    def to_dict(self) -> dict[str, Any]:
        return {"source": self.source, "target": self.target}


@dataclass
class LineageGraph:
    """Deduplicated nodes and row-ordered links.

    Node ids keep first-seen order so every downstream step (root order,
    layout offsets, serialized output) is reproducible for identical input.

    Attributes:
        nodes: Distinct identifiers in first-seen order.
        links: One Link per row with a non-null parent, in row order.
    """

    nodes: list[Identifier] = field(default_factory=list)
    links: list[Link] = field(default_factory=list)

    def iter_targets(self) -> Iterator[Identifier]:
        """Iterate link targets (with repeats)."""
        for link in self.links:
            yield link.target

    def node_count(self) -> int:
        return len(self.nodes)

    def link_count(self) -> int:
        return len(self.links)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the ``{nodes: [{id}], links: [{source, target}]}`` shape."""
        return {
            "nodes": [{"id": node_id} for node_id in self.nodes],
            "links": [link.to_dict() for link in self.links],
        }
