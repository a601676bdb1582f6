"""
Unit tests for pivots requested through API parameters.
"""

import pytest
from django.test import override_settings

from report_pivot.postprocessor import apply_pivot_by
from report_pivot.types import UnsupportedPivotError

pytestmark = pytest.mark.unit


def test_tables_are_untouched_without_pivot_by(load_plugins, make_table):
    load_plugins("Referrers")
    table = make_table(True)
    expected = table.to_rows()

    assert apply_pivot_by(table, "Referrers.getKeywords", {"idSite": 1}) is table
    assert table.to_rows() == expected


def test_pivot_by_parameters_are_applied(load_plugins, make_table):
    load_plugins("Referrers")
    table = make_table(True)

    apply_pivot_by(
        table,
        "Referrers.getKeywords",
        {"pivotBy": "Referrers.SearchEngine", "pivotByColumn": "nb_actions", "pivotByColumnLimit": "2"},
    )

    assert table.to_rows() == [
        {"label": "row 1", "col 1": 2, "col 2": None},
        {"label": "row 2", "col 1": 4, "col 2": 6},
        {"label": "row 3", "col 1": None, "col 2": 8},
    ]


def test_default_column_limit_comes_from_settings(load_plugins, make_table):
    load_plugins("Referrers")
    table = make_table(True)

    with override_settings(REPORT_PIVOT={"pivot_settings": {"default_column_limit": 1}}):
        apply_pivot_by(table, "Referrers.getKeywords", {"pivotBy": "Referrers.SearchEngine"})

    assert table.to_rows() == [
        {"label": "row 1", "col 1": 1},
        {"label": "row 2", "col 1": 3},
        {"label": "row 3", "col 1": None},
    ]


def test_fetch_by_segment_is_disabled_by_default(load_plugins, make_table):
    load_plugins("Referrers", "UserCountry")

    with override_settings(REPORT_PIVOT={}):
        with pytest.raises(UnsupportedPivotError, match="does not match"):
            apply_pivot_by(make_table(), "Referrers.getKeywords", {"pivotBy": "UserCountry.City"})


def test_request_parameters_are_forwarded_to_fetches(load_plugins, make_table, api_proxy):
    load_plugins("Referrers", "UserCountry")
    table = make_table()

    with override_settings(REPORT_PIVOT={"pivot_settings": {"enable_fetch_by_segment": True}}):
        apply_pivot_by(
            table,
            "Referrers.getKeywords",
            {
                "module": "API",
                "method": "Referrers.getKeywords",
                "idSite": "1",
                "period": "month",
                "date": "2024-01-01",
                "segment": "deviceType==desktop",
                "pivotBy": "UserCountry.City",
                "pivotByColumnLimit": "-1",
            },
        )

    assert len(api_proxy.calls) == 3
    method, parameters = api_proxy.calls[0]
    assert method == "UserCountry.getCity"
    assert parameters == {
        "idSite": "1",
        "period": "month",
        "date": "2024-01-01",
        "segment": "deviceType==desktop;referrerKeyword==row%201",
    }
    assert table.to_rows()[2] == {"label": "row 3", "col 0": 2, "col 1": 4, "col 2": 6}
