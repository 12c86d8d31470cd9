"""Table sources - load tabular data and select the parent/child columns.

Supported formats:
- ``.csv``: header row, one record per line; empty cells are null
- ``.json``: a list of row objects, or an object mapping column name to
  an array of values
"""

from __future__ import annotations

import csv
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Mapping, Sequence

from rootline.errors import ConfigurationError, DataIntegrityError


@dataclass
class Table:
    """Column-oriented table.

    Attributes:
        columns: Column name -> list of cell values.
        source: Where the table was loaded from, for messages.
    """

    columns: dict[str, list[Any]] = field(default_factory=dict)
    source: str = "<memory>"

    @classmethod
    def from_rows(cls, rows: Iterable[Mapping[str, Any]], source: str = "<memory>") -> Table:
        """Build a table from row mappings; missing cells become None."""
        rows = list(rows)
        names: dict[str, None] = {}
        for row in rows:
            for name in row:
                names.setdefault(str(name), None)
        columns = {name: [row.get(name) for row in rows] for name in names}
        return cls(columns=columns, source=source)

    def column_names(self) -> list[str]:
        return list(self.columns)

    def row_count(self) -> int:
        lengths = {len(values) for values in self.columns.values()}
        return max(lengths) if lengths else 0


def _normalize(value: Any, null_values: Sequence[Any]) -> Any:
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
    if value in null_values:
        return None
    return value


def load_table(path: Path) -> Table:
    """Load a CSV or JSON table from ``path``.

    Raises:
        ConfigurationError: If the file is missing, unreadable, or in an
            unsupported format.
    """
    if not path.is_file():
        raise ConfigurationError(f"Table file not found: {path}")

    suffix = path.suffix.lower()
    if suffix not in (".csv", ".json"):
        raise ConfigurationError(
            f"Unsupported table format '{suffix}' for {path} (use .csv or .json)"
        )

    try:
        if suffix == ".csv":
            return _load_csv(path)
        return _load_json(path)
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"Cannot read {path}: {e}") from e


def _load_csv(path: Path) -> Table:
    with open(path, newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        if reader.fieldnames is None:
            return Table(source=str(path))
        columns: dict[str, list[Any]] = {name: [] for name in reader.fieldnames}
        for row in reader:
            for name in reader.fieldnames:
                columns[name].append(row.get(name))
    return Table(columns=columns, source=str(path))


def _load_json(path: Path) -> Table:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in {path}: {e}") from e

    if isinstance(data, list):
        if not all(isinstance(row, dict) for row in data):
            raise ConfigurationError(f"{path}: expected a list of row objects")
        return Table.from_rows(data, source=str(path))
    if isinstance(data, dict):
        columns = {}
        for name, values in data.items():
            if not isinstance(values, list):
                raise ConfigurationError(f"{path}: column '{name}' is not an array")
            columns[str(name)] = values
        return Table(columns=columns, source=str(path))
    raise ConfigurationError(f"{path}: expected a JSON array or object")


def select_columns(
    table: Table,
    parent_column: str | None,
    child_column: str | None,
    null_values: Sequence[Any] = ("",),
) -> tuple[list[Any], list[Any]]:
    """Return the parent and child value sequences of ``table``.

    Args:
        table: The loaded table.
        parent_column: Name of the parent column.
        child_column: Name of the child column.
        null_values: Cell values (after stripping) that mean "no value".

    Returns:
        (parent_values, child_values) with null cells mapped to None.

    Raises:
        ConfigurationError: If a column is not configured or absent.
        DataIntegrityError: If the two columns differ in length.
    """
    if not parent_column or not child_column:
        raise ConfigurationError(
            "Parent or child column not configured. "
            "Set columns.parent and columns.child, or pass --parent/--child."
        )

    missing = [str(c) for c in (parent_column, child_column) if str(c) not in table.columns]
    if missing:
        available = ", ".join(table.column_names()) or "(none)"
        raise ConfigurationError(
            f"Column(s) {', '.join(missing)} missing from {table.source}. "
            f"Available columns: {available}"
        )

    parents = [_normalize(v, null_values) for v in table.columns[str(parent_column)]]
    children = [_normalize(v, null_values) for v in table.columns[str(child_column)]]
    if len(parents) != len(children):
        raise DataIntegrityError(
            f"Column '{parent_column}' has {len(parents)} values but "
            f"'{child_column}' has {len(children)} in {table.source}"
        )
    return parents, children
