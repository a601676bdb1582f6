"""
Segment expression helpers.

A segment condition reads ``<segment name>==<url encoded value>``; conditions
are AND-combined with ``;``. OR (``,``) binds tighter than AND, so combining
never needs grouping.
"""

from __future__ import annotations

from typing import Any, Optional
from urllib.parse import quote

AND_DELIMITER = ";"
OR_DELIMITER = ","
MATCH_OPERATOR = "=="


def encode_segment_value(value: Any) -> str:
    return quote(str(value), safe="")


def build_segment_condition(segment_name: str, value: Any) -> str:
    return f"{segment_name}{MATCH_OPERATOR}{encode_segment_value(value)}"


def combine_segments(*segments: Optional[str]) -> str:
    """AND-combine segment expressions, skipping empty ones."""
    parts = [segment.strip() for segment in segments if segment and segment.strip()]
    return AND_DELIMITER.join(parts)


__all__ = [
    "AND_DELIMITER",
    "OR_DELIMITER",
    "MATCH_OPERATOR",
    "encode_segment_value",
    "build_segment_condition",
    "combine_segments",
]
