"""
Utility functions for the pivot module.

Request parameters usually reach the library as strings (query strings, form
inputs), these helpers normalize them and make table payloads JSON friendly.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional
from uuid import UUID

from django.utils.encoding import force_str
from django.utils.functional import Promise

from .types import PivotError


def _coerce_int(value: Any, *, default: int) -> int:
    """
    Coerce a request value to an integer.

    ``pivotByColumnLimit`` arrives as a string when it comes from a query
    string. Empty values fall back to ``default``.
    """

    if value is None:
        return default

    if isinstance(value, bool):
        return default

    if isinstance(value, int):
        return value

    if isinstance(value, float):
        return int(value)

    if isinstance(value, str):
        cleaned = value.strip()
        if cleaned == "":
            return default
        try:
            return int(cleaned)
        except ValueError:
            try:
                return int(float(cleaned))
            except ValueError as exc:
                raise PivotError(
                    f"Invalid column limit '{value}'. Expected an integer."
                ) from exc

    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise PivotError(
            f"Invalid column limit '{value}'. Expected an integer."
        ) from exc


def _coerce_bool(value: Any, *, default: bool, strict: bool = False) -> bool:
    """
    Coerce a request value to a boolean.

    Unrecognized strings fall back to ``default``, or raise ``PivotError``
    when ``strict`` is set.
    """

    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    cleaned = str(value).strip().lower()
    if cleaned in {"1", "true", "yes", "on"}:
        return True
    if cleaned in {"0", "false", "no", "off", ""}:
        return False
    if strict:
        raise PivotError(f"Invalid boolean value '{value}'. Expected true or false.")
    return default


def _coerce_optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    cleaned = str(value).strip()
    return cleaned or None


def _json_sanitize(value: Any) -> Any:
    """
    Convert values to JSON-serializable primitives.

    ``None`` is kept as is: it is the absent-cell marker of pivot tables and
    must survive serialization without being turned into ``0`` or ``False``.
    """

    if value is None or isinstance(value, (str, int, float, bool)):
        return value

    if isinstance(value, Promise):
        return force_str(value)

    if isinstance(value, (datetime, date)):
        return value.isoformat()

    if isinstance(value, Decimal):
        try:
            return float(value)
        except Exception:
            return str(value)

    if isinstance(value, UUID):
        return str(value)

    if isinstance(value, dict):
        return {
            str(_json_sanitize(key)): _json_sanitize(item)
            for key, item in value.items()
        }

    if isinstance(value, (list, tuple, set)):
        return [_json_sanitize(item) for item in value]

    return force_str(value)


__all__ = [
    "_coerce_int",
    "_coerce_bool",
    "_coerce_optional_str",
    "_json_sanitize",
]
