"""
Column space of a pivot table.
"""

from __future__ import annotations

from typing import Any, Iterator, Optional


class ColumnAccumulator:
    """
    Distinct column labels in first-seen order, optionally capped.

    Once ``limit`` labels are registered, new labels are rejected while the
    existing ones keep resolving to their slot. A negative limit means no cap.
    """

    def __init__(self, limit: int = -1):
        self.limit = limit
        self._labels: list[Any] = []
        self._index: dict[Any, int] = {}

    def __len__(self) -> int:
        return len(self._labels)

    def __contains__(self, label: Any) -> bool:
        return label in self._index

    def __iter__(self) -> Iterator[Any]:
        return iter(self._labels)

    @property
    def labels(self) -> list[Any]:
        return list(self._labels)

    def is_full(self) -> bool:
        return 0 <= self.limit <= len(self._labels)

    def index_of(self, label: Any) -> Optional[int]:
        return self._index.get(label)

    def register(self, label: Any) -> Optional[int]:
        """Return the slot of ``label``, or ``None`` when the space is full."""
        index = self._index.get(label)
        if index is not None:
            return index
        if self.is_full():
            return None
        index = len(self._labels)
        self._labels.append(label)
        self._index[label] = index
        return index


__all__ = ["ColumnAccumulator"]
