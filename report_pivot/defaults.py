"""
Default configuration for the report-pivot library.

The goal of this module is to expose a single source of truth for every
setting that the library actually consumes. Each section mirrors one of the
dataclasses defined in ``report_pivot.config``.
"""

from __future__ import annotations

from typing import Any

LIBRARY_VERSION = "0.1.0"


# --------------------------------------------------------------------------- #
# Library-wide defaults (grouped by feature area)
# --------------------------------------------------------------------------- #
LIBRARY_DEFAULTS: dict[str, Any] = {
    "pivot_settings": {
        # Fetching one breakdown per row is expensive, it stays opt-in.
        "enable_fetch_by_segment": False,
        "default_column_limit": 10,
        "max_fetch_workers": 1,
    },
    "api_settings": {
        "base_url": None,
        "token_auth": None,
        "timeout_seconds": 30,
        "max_retries": 2,
        "retry_backoff_seconds": 0.5,
        "retry_statuses": [429, 500, 502, 503, 504],
        "default_params": {},
    },
}


# --------------------------------------------------------------------------- #
# Helper functions
# --------------------------------------------------------------------------- #
def merge_settings(*settings_dicts: dict[str, Any]) -> dict[str, Any]:
    """
    Merge multiple settings dictionaries with deep merging for nested dicts.
    Later dictionaries override earlier ones.
    """
    result: dict[str, Any] = {}
    for settings_dict in settings_dicts:
        for key, value in settings_dict.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = merge_settings(result[key], value)
            else:
                result[key] = value
    return result


__all__ = [
    "LIBRARY_VERSION",
    "LIBRARY_DEFAULTS",
    "merge_settings",
]
