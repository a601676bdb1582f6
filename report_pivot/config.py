"""Configuration helpers for pivots and breakdown fetching."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from django.conf import settings as django_settings

from .defaults import LIBRARY_DEFAULTS, merge_settings
from .utils import _coerce_bool, _coerce_int, _coerce_optional_str

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PivotSettings:
    enable_fetch_by_segment: bool = False
    default_column_limit: int = 10
    max_fetch_workers: int = 1


@dataclass(frozen=True)
class ApiSettings:
    base_url: Optional[str] = None
    token_auth: Optional[str] = None
    timeout_seconds: int = 30
    max_retries: int = 2
    retry_backoff_seconds: float = 0.5
    retry_statuses: list[int] = field(
        default_factory=lambda: [429, 500, 502, 503, 504]
    )
    default_params: dict[str, Any] = field(default_factory=dict)


def _get_section(name: str) -> dict[str, Any]:
    defaults = LIBRARY_DEFAULTS.get(name, {})
    external = getattr(django_settings, "REPORT_PIVOT", None)
    if not isinstance(external, dict):
        return dict(defaults)
    section = external.get(name)
    if not isinstance(section, dict):
        return dict(defaults)
    return merge_settings(defaults, section)


def get_pivot_settings() -> PivotSettings:
    config = _get_section("pivot_settings")
    return PivotSettings(
        enable_fetch_by_segment=_coerce_bool(
            config.get("enable_fetch_by_segment"), default=False
        ),
        default_column_limit=_coerce_int(
            config.get("default_column_limit"), default=10
        ),
        max_fetch_workers=max(1, _coerce_int(config.get("max_fetch_workers"), default=1)),
    )


def get_api_settings() -> ApiSettings:
    config = _get_section("api_settings")
    default_params = config.get("default_params")
    return ApiSettings(
        base_url=_coerce_optional_str(config.get("base_url")),
        token_auth=_coerce_optional_str(config.get("token_auth")),
        timeout_seconds=int(config.get("timeout_seconds", 30) or 30),
        max_retries=int(config.get("max_retries", 2) or 0),
        retry_backoff_seconds=float(config.get("retry_backoff_seconds", 0.5) or 0),
        retry_statuses=_normalize_int_list(config.get("retry_statuses")),
        default_params=dict(default_params) if isinstance(default_params, dict) else {},
    )


def _normalize_int_list(raw_values: Any) -> list[int]:
    if not isinstance(raw_values, (list, tuple, set)):
        return []
    normalized: list[int] = []
    for value in raw_values:
        try:
            normalized.append(int(value))
        except (TypeError, ValueError):
            logger.warning("Ignoring invalid retry status: %r", value)
    return normalized


__all__ = [
    "PivotSettings",
    "ApiSettings",
    "get_pivot_settings",
    "get_api_settings",
]
