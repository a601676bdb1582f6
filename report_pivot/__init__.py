"""
Pivot report tables by a secondary dimension.

Usage:
    from report_pivot import DataTable, PivotByDimension

    table.filter(
        PivotByDimension,
        "Referrers.getKeywords",
        "Referrers.SearchEngine",
        "nb_visits",
    )
"""

from .datatable import ABSENT, DataTable, Row
from .defaults import LIBRARY_VERSION
from .filters import ColumnAccumulator, PivotByDimension
from .postprocessor import apply_pivot_by
from .registry import Dimension, Report, ReportRegistry
from .types import (
    FetchError,
    InvalidDimensionError,
    PivotError,
    UnknownReportError,
    UnsupportedPivotError,
)

__version__ = LIBRARY_VERSION

__all__ = [
    "__version__",
    # Tables
    "ABSENT",
    "DataTable",
    "Row",
    # Filters
    "ColumnAccumulator",
    "PivotByDimension",
    "apply_pivot_by",
    # Registry
    "Dimension",
    "Report",
    "ReportRegistry",
    # Errors
    "PivotError",
    "InvalidDimensionError",
    "UnknownReportError",
    "UnsupportedPivotError",
    "FetchError",
]
