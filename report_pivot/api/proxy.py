"""
Local API dispatch.

``ApiProxy`` answers ``Module.action`` API calls with the data of the plugin
that serves the report. The pivot filter uses it to fetch one breakdown table
per row.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Mapping, Optional

from ..datatable import DataTable
from ..types import FetchError

if TYPE_CHECKING:
    from ..registry import ReportRegistry

logger = logging.getLogger(__name__)


class ApiProxy:
    def __init__(self, registry: Optional["ReportRegistry"] = None):
        self._registry = registry

    @property
    def registry(self) -> "ReportRegistry":
        if self._registry is None:
            from ..registry import report_registry

            self._registry = report_registry
        return self._registry

    def call(self, method: str, parameters: Optional[Mapping[str, Any]] = None) -> DataTable:
        report = self.registry.get_report(method)
        if report is None:
            raise FetchError(f"Unknown API method '{method}'.")
        plugin = self.registry.get_plugin_for_report(report)
        if plugin is None:
            raise FetchError(f"No plugin serves '{method}'.")

        try:
            data = plugin.get_report_data(report, dict(parameters or {}))
        except FetchError:
            raise
        except Exception as exc:
            raise FetchError(f"Request to '{method}' failed: {exc}") from exc
        return _to_table(method, data)

    def fetch(
        self,
        method: str,
        segment: str,
        params: Optional[Mapping[str, Any]] = None,
    ) -> DataTable:
        """Fetch ``method`` restricted to ``segment``."""
        parameters = dict(params or {})
        parameters["segment"] = segment
        logger.debug("Fetching %s for segment %s", method, segment)
        return self.call(method, parameters)


def _to_table(method: str, data: Any) -> DataTable:
    if isinstance(data, DataTable):
        return data
    if isinstance(data, list):
        try:
            return DataTable.from_rows(data)
        except ValueError as exc:
            raise FetchError(f"Malformed response for '{method}': {exc}") from exc
    raise FetchError(
        f"Unexpected response for '{method}': {type(data).__name__}"
    )


__all__ = ["ApiProxy"]
