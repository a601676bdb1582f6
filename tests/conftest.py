"""
Shared fixtures: plugin loading, fake breakdown fetcher and report tables.
"""

import pytest

from report_pivot.api import ApiProxy, reset_api_proxy, set_api_proxy
from report_pivot.datatable import DataTable, Row
from report_pivot.plugins.base import plugin_manager
from report_pivot.types import FetchError


class FakeApiProxy(ApiProxy):
    """
    Records every fetch. The n-th fetch returns n rows labelled ``col 0`` to
    ``col n-1`` so each fetched table is different.
    """

    def __init__(self, fail_on_call=None):
        super().__init__()
        self.calls = []
        self.fail_on_call = fail_on_call

    def call(self, method, parameters=None):
        self.calls.append((method, dict(parameters or {})))
        if self.fail_on_call is not None and len(self.calls) == self.fail_on_call:
            raise FetchError(f"Request to '{method}' failed: backend unavailable")
        table = DataTable()
        for i in range(len(self.calls)):
            table.add_row(
                Row({"label": f"col {i}", "nb_visits": (i + 1) * 2, "nb_actions": (i + 1) * 3})
            )
        return table

    @property
    def segments(self):
        return [parameters.get("segment") for _, parameters in self.calls]


@pytest.fixture
def load_plugins():
    def _load(*names, **configs):
        plugin_manager.reset()
        plugin_manager.load_plugins(
            {f"tests.plugins.{name}Plugin": configs.get(name, {}) for name in names}
        )

    yield _load
    plugin_manager.reset()


@pytest.fixture
def api_proxy():
    proxy = FakeApiProxy()
    set_api_proxy(proxy)
    yield proxy
    reset_api_proxy()


def _subtable(*rows):
    return DataTable(Row(columns) for columns in rows)


@pytest.fixture
def make_table():
    def _make(add_subtables=False):
        row1 = Row({"label": "row 1", "nb_visits": 10, "nb_actions": 15})
        row2 = Row({"label": "row 2", "nb_visits": 13, "nb_actions": 18})
        row3 = Row({"label": "row 3", "nb_visits": 20, "nb_actions": 25})
        if add_subtables:
            row1.set_subtable(_subtable({"label": "col 1", "nb_visits": 1, "nb_actions": 2}))
            row2.set_subtable(
                _subtable(
                    {"label": "col 1", "nb_visits": 3, "nb_actions": 4},
                    {"label": "col 2", "nb_visits": 5, "nb_actions": 6},
                )
            )
            row3.set_subtable(
                _subtable(
                    {"label": "col 2", "nb_visits": 7, "nb_actions": 8},
                    {"label": "col 3", "nb_visits": 9, "nb_actions": 31},
                    {"label": "col 4", "nb_visits": 32, "nb_actions": 33},
                )
            )
        return DataTable([row1, row2, row3])

    return _make
