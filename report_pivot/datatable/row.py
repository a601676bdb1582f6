"""
Row of a report table.

A row is a label plus metric columns, optional metadata (``segment``,
``segmentValue``, urls, logos...) and at most one subtable that breaks the
row down by a secondary dimension.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping, Optional

if TYPE_CHECKING:
    from .table import DataTable

# Marker written in pivot cells that have no value. Distinct from 0.
ABSENT = None

LABEL_COLUMN = "label"

_UNSET = object()


class Row:
    def __init__(
        self,
        columns: Optional[Mapping[str, Any]] = None,
        *,
        label: Any = _UNSET,
        metadata: Optional[Mapping[str, Any]] = None,
        subtable: Optional["DataTable"] = None,
    ):
        self._columns: dict[str, Any] = dict(columns or {})
        # Without an explicit label, the "label" entry of columns is the label.
        if label is _UNSET:
            label = self._columns.pop(LABEL_COLUMN, None)
        self._label = label
        self._metadata: dict[str, Any] = dict(metadata or {})
        self._subtable = subtable

    def __repr__(self) -> str:
        return f"Row(label={self.label!r}, columns={self.get_metrics()!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Row):
            return NotImplemented
        return (
            self._label == other._label
            and self._columns == other._columns
            and self._metadata == other._metadata
            and self._subtable == other._subtable
        )

    @property
    def label(self) -> Any:
        return self._label

    # Columns -------------------------------------------------------------

    def get_metrics(self) -> dict[str, Any]:
        """Metric columns. The label is not one of them."""
        return dict(self._columns)

    def has_column(self, name: str) -> bool:
        return name in self._columns

    def get_column(self, name: str, default: Any = ABSENT) -> Any:
        return self._columns.get(name, default)

    def set_column(self, name: str, value: Any) -> None:
        self._columns[name] = value

    # Metadata ------------------------------------------------------------

    def get_metadata(self, name: Optional[str] = None, default: Any = None) -> Any:
        if name is None:
            return dict(self._metadata)
        return self._metadata.get(name, default)

    def set_metadata(self, name: str, value: Any) -> None:
        self._metadata[name] = value

    # Subtable ------------------------------------------------------------

    @property
    def subtable(self) -> Optional["DataTable"]:
        return self._subtable

    def set_subtable(self, subtable: Optional["DataTable"]) -> None:
        self._subtable = subtable

    def remove_subtable(self) -> None:
        self._subtable = None

    def to_dict(self) -> dict[str, Any]:
        """Render the row as a plain dict with the label first."""
        rendered: dict[str, Any] = {}
        if self._label is not None:
            rendered[LABEL_COLUMN] = self._label
        # A metric named like the label column cannot share the flat dict.
        for name, value in self._columns.items():
            rendered.setdefault(name, value)
        return rendered


__all__ = ["Row", "ABSENT", "LABEL_COLUMN"]
