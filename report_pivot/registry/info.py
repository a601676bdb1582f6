"""
Dimension and Report descriptors.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from ..segment import build_segment_condition

DEFAULT_METRIC = "nb_visits"


@dataclass(frozen=True)
class Dimension:
    """A way of splitting report data, e.g. ``UserCountry.City``."""

    module: str
    name: str
    segment: Optional[str] = None
    label: str = ""

    @property
    def id(self) -> str:
        return f"{self.module}.{self.name}"

    def has_segment(self) -> bool:
        return bool(self.segment)

    def segment_expression(self, value: Any) -> str:
        """Segment condition selecting the visits whose dimension equals ``value``."""
        if not self.segment:
            raise ValueError(f"Dimension '{self.id}' has no segment.")
        return build_segment_condition(self.segment, value)


@dataclass(frozen=True)
class Report:
    """
    A report served by a plugin.

    ``dimension`` is the id of the dimension of the report rows,
    ``subtable_dimension`` the id of the dimension each row's subtable is
    broken down by. ``action`` is the API method name (``getKeywords``) while
    ``name`` is the display name used in messages (``Referrers_Keywords``).
    """

    module: str
    action: str
    name: str = ""
    dimension: Optional[str] = None
    subtable_dimension: Optional[str] = None
    default_metric: str = DEFAULT_METRIC

    @property
    def id(self) -> str:
        return f"{self.module}.{self.name or self.action}"

    @property
    def api_method(self) -> str:
        return f"{self.module}.{self.action}"

    def has_subtable(self) -> bool:
        return bool(self.subtable_dimension)


__all__ = ["DEFAULT_METRIC", "Dimension", "Report"]
