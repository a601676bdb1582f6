"""
ReportRegistry implementation.

Resolves dimension and report identifiers against what the enabled plugins
declare.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Optional

from ..types import InvalidDimensionError, UnknownReportError
from .info import Dimension, Report

if TYPE_CHECKING:
    from ..plugins.base import BasePlugin, PluginManager

logger = logging.getLogger(__name__)


class ReportRegistry:
    """
    Index of the reports and dimensions contributed by plugins.

    The index is built lazily from the plugin manager and rebuilt whenever
    the manager loads or unloads a plugin.
    """

    def __init__(self, manager: Optional["PluginManager"] = None):
        self._manager = manager
        self._dimensions: dict[str, Dimension] = {}
        self._reports: dict[str, Report] = {}
        self._report_plugins: dict[str, "BasePlugin"] = {}
        self._lock = threading.Lock()
        self._built_version: Optional[int] = None

    @property
    def manager(self) -> "PluginManager":
        if self._manager is None:
            from ..plugins.base import plugin_manager

            self._manager = plugin_manager
        return self._manager

    def refresh(self) -> None:
        with self._lock:
            self._built_version = None

    def _ensure_built(self) -> None:
        manager = self.manager
        manager.load_plugins()
        if self._built_version == manager.version:
            return
        with self._lock:
            if self._built_version == manager.version:
                return
            self._dimensions.clear()
            self._reports.clear()
            self._report_plugins.clear()
            for plugin in manager.get_enabled_plugins():
                for dimension in plugin.get_dimensions():
                    if dimension.id in self._dimensions:
                        logger.warning(
                            "Dimension '%s' declared twice, keeping the first declaration",
                            dimension.id,
                        )
                        continue
                    self._dimensions[dimension.id] = dimension
                for report in plugin.get_reports():
                    if report.api_method in self._reports:
                        logger.warning(
                            "Report '%s' declared twice, keeping the first declaration",
                            report.api_method,
                        )
                        continue
                    self._reports[report.api_method] = report
                    self._report_plugins[report.api_method] = plugin
            self._built_version = manager.version
            logger.debug(
                "Report registry built: %s reports, %s dimensions",
                len(self._reports),
                len(self._dimensions),
            )

    # Dimensions ----------------------------------------------------------

    def get_dimensions(self) -> list[Dimension]:
        self._ensure_built()
        return list(self._dimensions.values())

    def get_dimension(self, dimension_id: Optional[str]) -> Optional[Dimension]:
        if not dimension_id:
            return None
        self._ensure_built()
        return self._dimensions.get(dimension_id)

    def resolve_dimension(self, dimension_id: str) -> Dimension:
        dimension = self.get_dimension(dimension_id)
        if dimension is None:
            raise InvalidDimensionError(f"Invalid dimension '{dimension_id}'.")
        return dimension

    # Reports -------------------------------------------------------------

    def get_reports(self) -> list[Report]:
        self._ensure_built()
        return list(self._reports.values())

    def get_report(self, report_id: Optional[str]) -> Optional[Report]:
        if not report_id:
            return None
        self._ensure_built()
        return self._reports.get(report_id)

    def resolve_report(self, report_id: str) -> Report:
        report = self.get_report(report_id)
        if report is None:
            raise UnknownReportError(f"Unable to find report '{report_id}'.")
        return report

    def get_report_for_dimension(self, dimension_id: str) -> Optional[Report]:
        """First report, in plugin load order, whose rows are ``dimension_id``."""
        self._ensure_built()
        for report in self._reports.values():
            if report.dimension == dimension_id:
                return report
        return None

    def get_plugin_for_report(self, report: Report) -> Optional["BasePlugin"]:
        self._ensure_built()
        return self._report_plugins.get(report.api_method)


__all__ = ["ReportRegistry"]
