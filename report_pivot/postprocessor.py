"""
Apply the pivot requested through API parameters.

``pivotBy`` names the dimension to pivot by, ``pivotByColumn`` the metric to
show and ``pivotByColumnLimit`` the maximum number of columns. Other request
parameters (idSite, period, date, segment) are forwarded to the per-row
fetches.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Mapping, Optional

from .config import get_pivot_settings
from .datatable import DataTable
from .filters import PivotByDimension
from .utils import _coerce_int

if TYPE_CHECKING:
    from .api import ApiProxy
    from .registry import ReportRegistry

logger = logging.getLogger(__name__)

PIVOT_PARAMETERS = ("pivotBy", "pivotByColumn", "pivotByColumnLimit")
RESERVED_PARAMETERS = ("module", "method", "format", "token_auth")


def apply_pivot_by(
    table: DataTable,
    report_id: str,
    request: Mapping[str, Any],
    *,
    registry: Optional["ReportRegistry"] = None,
    api_proxy: Optional["ApiProxy"] = None,
) -> DataTable:
    pivot_by = request.get("pivotBy")
    if not pivot_by:
        return table

    settings = get_pivot_settings()
    column_limit = _coerce_int(
        request.get("pivotByColumnLimit"), default=settings.default_column_limit
    )
    request_params = {
        key: value
        for key, value in request.items()
        if key not in PIVOT_PARAMETERS and key not in RESERVED_PARAMETERS
    }

    logger.debug("Applying pivotBy=%s to %s", pivot_by, report_id)
    table.filter(
        PivotByDimension,
        report_id,
        str(pivot_by),
        request.get("pivotByColumn") or None,
        column_limit,
        settings.enable_fetch_by_segment,
        registry=registry,
        api_proxy=api_proxy,
        request_params=request_params,
    )
    return table


__all__ = ["apply_pivot_by", "PIVOT_PARAMETERS"]
