"""
Dimension/report registry.

Plugins declare ``Dimension`` and ``Report`` descriptors; the registry answers
the questions a pivot needs: does this dimension exist, which report serves
it, what is a report's subtable dimension.
"""

from typing import Optional

from .info import DEFAULT_METRIC, Dimension, Report
from .registry import ReportRegistry

__all__ = [
    "DEFAULT_METRIC",
    "Dimension",
    "Report",
    "ReportRegistry",
    "report_registry",
    "get_report_registry",
    "resolve_report",
    "resolve_dimension",
    "get_report_for_dimension",
]

# Global registry instance
report_registry = ReportRegistry()


def get_report_registry() -> ReportRegistry:
    return report_registry


def resolve_report(report_id: str) -> Report:
    """Resolve a report using the global registry."""
    return report_registry.resolve_report(report_id)


def resolve_dimension(dimension_id: str) -> Dimension:
    """Resolve a dimension using the global registry."""
    return report_registry.resolve_dimension(dimension_id)


def get_report_for_dimension(dimension_id: str) -> Optional[Report]:
    return report_registry.get_report_for_dimension(dimension_id)
