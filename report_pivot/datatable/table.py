"""
Ordered table of report rows.

Row order is significant: filters such as the pivot keep the source order
row for row.
"""

from __future__ import annotations

import json
from typing import Any, Iterable, Iterator, Mapping, Optional, Sequence

from django.core.serializers.json import DjangoJSONEncoder

from ..utils import _json_sanitize
from .row import LABEL_COLUMN, Row

SUBTABLE_KEY = "subtable"
METADATA_KEY = "metadata"


class DataTable:
    def __init__(
        self,
        rows: Optional[Iterable[Row]] = None,
        *,
        metadata: Optional[Mapping[str, Any]] = None,
    ):
        self._rows: list[Row] = list(rows or [])
        self._metadata: dict[str, Any] = dict(metadata or {})

    def __repr__(self) -> str:
        return f"DataTable(rows={len(self._rows)})"

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[Row]:
        return iter(self._rows)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DataTable):
            return NotImplemented
        return self._rows == other._rows and self._metadata == other._metadata

    # Rows ----------------------------------------------------------------

    def add_row(self, row: Row) -> Row:
        self._rows.append(row)
        return row

    def add_rows(self, rows: Iterable[Row]) -> None:
        self._rows.extend(rows)

    def get_rows(self) -> list[Row]:
        return list(self._rows)

    def get_row_count(self) -> int:
        return len(self._rows)

    def set_rows(self, rows: Iterable[Row]) -> None:
        """Replace every row while keeping this table instance."""
        self._rows = list(rows)

    def get_row_from_label(self, label: Any) -> Optional[Row]:
        for row in self._rows:
            if row.label == label:
                return row
        return None

    def get_column(self, name: str) -> list[Any]:
        return [row.get_column(name) for row in self._rows]

    # Metadata ------------------------------------------------------------

    def get_metadata(self, name: Optional[str] = None, default: Any = None) -> Any:
        if name is None:
            return dict(self._metadata)
        return self._metadata.get(name, default)

    def set_metadata(self, name: str, value: Any) -> None:
        self._metadata[name] = value

    # Filters -------------------------------------------------------------

    def filter(self, filter_class: Any, *args: Any, **kwargs: Any) -> None:
        """
        Instantiate ``filter_class(self, *args, **kwargs)`` and apply it to
        this table.
        """

        table_filter = filter_class(self, *args, **kwargs)
        table_filter.apply(self)

    # Serialization -------------------------------------------------------

    def to_rows(self) -> list[dict[str, Any]]:
        return [row.to_dict() for row in self._rows]

    def to_json(self) -> str:
        return json.dumps(_json_sanitize(self.to_rows()), cls=DjangoJSONEncoder)

    @classmethod
    def from_rows(cls, payload: Sequence[Mapping[str, Any]]) -> "DataTable":
        """
        Build a table from a list of row dicts.

        A row dict may carry a nested ``subtable`` list and a ``metadata``
        mapping; every other key is a column. Raises ``ValueError`` for
        entries that are not mappings or have no label.
        """

        table = cls()
        for index, item in enumerate(payload or []):
            if not isinstance(item, Mapping):
                raise ValueError(f"Row {index} is not a mapping: {type(item).__name__}")
            columns = {
                key: value
                for key, value in item.items()
                if key not in (SUBTABLE_KEY, METADATA_KEY)
            }
            if LABEL_COLUMN not in columns:
                raise ValueError(f"Row {index} has no '{LABEL_COLUMN}' column.")
            subtable = None
            if isinstance(item.get(SUBTABLE_KEY), list):
                subtable = cls.from_rows(item[SUBTABLE_KEY])
            metadata = item.get(METADATA_KEY)
            table.add_row(
                Row(
                    columns,
                    metadata=metadata if isinstance(metadata, Mapping) else None,
                    subtable=subtable,
                )
            )
        return table


__all__ = ["DataTable"]
