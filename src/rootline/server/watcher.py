"""Table watcher - recompute the lineage when the table file changes.

Each refresh either replaces the cached result with a complete new one
or leaves the previous result untouched and records the error. There is
no partial update.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path

from rootline.config import ConfigLoader
from rootline.errors import LineageError
from rootline.pipeline import LineageResult, lineage_from_table
from rootline.table import load_table

logger = logging.getLogger(__name__)


class TableWatcher:
    """Holds the latest good LineageResult for a table file.

    Example:
        watcher = TableWatcher(Path("lineage.csv"), load_config())
        watcher.refresh()
        if watcher.result:
            draw(watcher.result.layout)
    """

    def __init__(
        self,
        table_path: Path,
        config: ConfigLoader,
        parent_column: str | None = None,
        child_column: str | None = None,
    ) -> None:
        self.table_path = table_path
        self.config = config
        self.parent_column = parent_column
        self.child_column = child_column
        self.result: LineageResult | None = None
        self.last_error: str | None = None
        self.build_count = 0
        self.build_time: float | None = None
        self._signature: tuple[int, int] | None = None

    def _current_signature(self) -> tuple[int, int] | None:
        try:
            stat = self.table_path.stat()
        except FileNotFoundError:
            return None
        return stat.st_mtime_ns, stat.st_size

    def refresh(self, force: bool = False) -> bool:
        """Recompute if the table changed since the last attempt.

        Args:
            force: Recompute even if the file looks unchanged.

        Returns:
            True if a new result replaced the cached one.
        """
        signature = self._current_signature()
        if signature is None:
            logger.info("Waiting for table %s", self.table_path)
            self.last_error = f"Table file not found: {self.table_path}"
            return False
        if signature == self._signature and not force:
            return False
        self._signature = signature

        try:
            table = load_table(self.table_path)
            result = lineage_from_table(table, self.config, self.parent_column, self.child_column)
        except LineageError as e:
            logger.error("Keeping previous lineage, rebuild failed: %s", e)
            self.last_error = str(e)
            return False

        self.result = result
        self.last_error = None
        self.build_count += 1
        self.build_time = time.time()
        logger.info(
            "Rebuilt lineage from %s (%d nodes, %d roots)",
            self.table_path,
            result.graph.node_count(),
            len(result.roots),
        )
        return True

    def status(self) -> dict:
        return {
            "table": str(self.table_path),
            "has_result": self.result is not None,
            "build_count": self.build_count,
            "build_time": self.build_time,
            "last_error": self.last_error,
        }
