"""Error types raised by the lineage pipeline.

All errors derive from LineageError (a ValueError) so callers can report
them uniformly and skip rendering without crashing the host.
"""

from __future__ import annotations

from typing import Any, Sequence


class LineageError(ValueError):
    """Base class for all lineage pipeline errors."""


class ConfigurationError(LineageError):
    """Parent/child column not configured, or absent from the bound data."""


class DataIntegrityError(LineageError):
    """Column data that cannot form a lineage (e.g. mismatched lengths)."""


class CycleDetectedError(LineageError):
    """A parent/child chain loops back on itself.

    Attributes:
        node_id: The node at which the cycle closes.
        path: Identifiers from the first cycle member back to node_id.
    """

    def __init__(self, node_id: Any, path: Sequence[Any] = ()) -> None:
        self.node_id = node_id
        self.path = list(path)
        message = f"cycle detected at node {node_id!r}"
        if self.path:
            message += ": " + " -> ".join(str(p) for p in self.path)
        super().__init__(message)
