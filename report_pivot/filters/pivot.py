"""
Pivot a report by a secondary dimension.

Turns a report whose rows are values of one dimension into a table whose
columns are values of another dimension, e.g. keywords by search engine:

    label      Google  Bing  DuckDuckGo
    keyword 1  10      None  None
    keyword 2  4       6     None

Each row's breakdown comes either from the row's own subtable, when the
report's subtable dimension is the pivot dimension, or from one extra API
request per row restricted to a segment matching that row.
"""

from __future__ import annotations

import logging
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from typing import TYPE_CHECKING, Any, Iterable, Iterator, Mapping, Optional

from ..config import get_pivot_settings
from ..datatable import ABSENT, DataTable, Row
from ..segment import combine_segments
from ..types import UnsupportedPivotError
from ..utils import _coerce_bool, _coerce_int
from .columns import ColumnAccumulator

if TYPE_CHECKING:
    from ..api import ApiProxy
    from ..registry import ReportRegistry

logger = logging.getLogger(__name__)

STRATEGY_SUBTABLE = "subtable"
STRATEGY_FETCH = "fetch"


class PivotByDimension:
    """
    Pivot filter.

    All validation happens in the constructor, before any row is read:
    an unknown dimension or report, or a combination that cannot be pivoted,
    raises immediately and leaves the table untouched.

    Args:
        table: Table that will be pivoted (its segment metadata scopes fetches)
        report: Source report API method, e.g. ``Referrers.getKeywords``
        pivot_by_dimension: Dimension id, e.g. ``Referrers.SearchEngine``
        pivot_column: Metric written in the cells, defaults to the report's
            default metric
        column_limit: Maximum number of columns, negative for no limit
        fetch_by_segment: Allow one API request per row when the report's
            subtables are not broken down by the pivot dimension
        registry: Report registry, defaults to the global one
        api_proxy: Breakdown fetcher, defaults to the process-wide proxy
        request_params: Parameters forwarded to every fetch (idSite, period,
            date, segment...)
        max_workers: Number of concurrent fetches, defaults to
            ``pivot_settings.max_fetch_workers``
    """

    def __init__(
        self,
        table: DataTable,
        report: str,
        pivot_by_dimension: str,
        pivot_column: Optional[str] = None,
        column_limit: Any = -1,
        fetch_by_segment: Any = True,
        *,
        registry: Optional["ReportRegistry"] = None,
        api_proxy: Optional["ApiProxy"] = None,
        request_params: Optional[Mapping[str, Any]] = None,
        max_workers: Optional[int] = None,
    ):
        if registry is None:
            from ..registry import report_registry as registry

        self.table = table
        self.registry = registry
        self._api_proxy = api_proxy
        self.request_params = dict(request_params or {})
        self.column_limit = _coerce_int(column_limit, default=-1)
        self.fetch_by_segment = _coerce_bool(fetch_by_segment, default=True, strict=True)
        if max_workers is None:
            max_workers = get_pivot_settings().max_fetch_workers
        self.max_workers = max(1, int(max_workers))

        self.pivot_dimension = registry.resolve_dimension(pivot_by_dimension)
        self.report = registry.resolve_report(report)
        self.report_dimension = registry.get_dimension(self.report.dimension)
        self.pivot_dimension_report = registry.get_report_for_dimension(
            self.pivot_dimension.id
        )

        self.strategy = self._select_strategy()
        self.pivot_column = pivot_column or self.report.default_metric

        logger.debug(
            "Pivoting %s by %s using %s (column=%s, limit=%s)",
            self.report.api_method,
            self.pivot_dimension.id,
            self.strategy,
            self.pivot_column,
            self.column_limit,
        )

    @property
    def api_proxy(self) -> "ApiProxy":
        if self._api_proxy is None:
            from ..api import get_api_proxy

            self._api_proxy = get_api_proxy()
        return self._api_proxy

    def _select_strategy(self) -> str:
        report_id = self.report.id

        if self.report.subtable_dimension == self.pivot_dimension.id:
            return STRATEGY_SUBTABLE

        if not self.fetch_by_segment:
            if not self.report.subtable_dimension:
                raise UnsupportedPivotError(
                    f"Unsupported pivot: report '{report_id}' has no subtable dimension."
                )
            raise UnsupportedPivotError(
                f"Unsupported pivot: the subtable dimension for '{report_id}' does not "
                "match the requested pivotBy dimension."
            )

        if self.pivot_dimension_report is None:
            raise UnsupportedPivotError(
                "Unsupported pivot: No report for pivot dimension "
                f"'{self.pivot_dimension.id}'."
            )

        # Rows are selected through the segment of the report's own dimension.
        if self.report_dimension is None or not self.report_dimension.has_segment():
            raise UnsupportedPivotError(
                f"Unsupported pivot: No segment for dimension of report '{report_id}'."
            )
        if not self.pivot_dimension.has_segment():
            raise UnsupportedPivotError(
                "Unsupported pivot: No segment for dimension of report "
                f"'{self.pivot_dimension_report.id}'."
            )

        return STRATEGY_FETCH

    def apply(self, table: DataTable) -> None:
        """Replace the rows of ``table`` with their pivoted counterparts."""
        rows = table.get_rows()
        columns = ColumnAccumulator(self.column_limit)
        row_values: list[dict[Any, Any]] = []

        for breakdown in self._get_breakdowns(table, rows):
            values: dict[Any, Any] = {}
            for column_row in breakdown.get_rows():
                label = column_row.label
                if columns.register(label) is None:
                    continue
                values[label] = column_row.get_column(self.pivot_column, ABSENT)
            row_values.append(values)

        labels = columns.labels
        table.set_rows(
            self._build_pivot_row(row, values, labels)
            for row, values in zip(rows, row_values)
        )

    def _build_pivot_row(self, row: Row, values: Mapping[Any, Any], labels: list[Any]) -> Row:
        cells = {label: values.get(label, ABSENT) for label in labels}
        return Row(cells, label=row.label, metadata=row.get_metadata())

    # Breakdowns ----------------------------------------------------------

    def _get_breakdowns(self, table: DataTable, rows: list[Row]) -> Iterable[DataTable]:
        if self.strategy == STRATEGY_SUBTABLE:
            return (row.subtable or DataTable() for row in rows)

        enclosing_segment = self.request_params.get("segment") or table.get_metadata("segment")
        segments = [self.get_row_segment(row, enclosing_segment) for row in rows]
        if self.max_workers > 1 and len(segments) > 1:
            return self._fetch_concurrently(segments)
        return self._fetch_sequentially(segments)

    def get_row_segment(self, row: Row, enclosing_segment: Optional[str] = None) -> str:
        """Segment selecting the data of ``row``, within ``enclosing_segment``."""
        segment = row.get_metadata("segment")
        if not segment:
            value = row.get_metadata("segmentValue")
            if value is None:
                value = row.label
            segment = self.report_dimension.segment_expression(value)
        return combine_segments(enclosing_segment, segment)

    def _fetch_breakdown(self, segment: str) -> DataTable:
        params = {
            key: value for key, value in self.request_params.items() if key != "segment"
        }
        return self.api_proxy.fetch(self.pivot_dimension_report.api_method, segment, params)

    def _fetch_sequentially(self, segments: list[str]) -> Iterator[DataTable]:
        for segment in segments:
            yield self._fetch_breakdown(segment)

    def _fetch_concurrently(self, segments: list[str]) -> list[DataTable]:
        workers = min(self.max_workers, len(segments))
        executor = ThreadPoolExecutor(max_workers=workers)
        try:
            futures = [executor.submit(self._fetch_breakdown, segment) for segment in segments]
            done, _ = wait(futures, return_when=FIRST_EXCEPTION)
            for future in futures:
                if future in done and future.exception() is not None:
                    raise future.exception()
            return [future.result() for future in futures]
        finally:
            # Queued fetches are dropped, running ones are not waited for.
            executor.shutdown(wait=False, cancel_futures=True)


__all__ = ["PivotByDimension", "STRATEGY_SUBTABLE", "STRATEGY_FETCH"]
