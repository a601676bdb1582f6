import pytest
from django.test import override_settings

from report_pivot.config import get_api_settings, get_pivot_settings

pytestmark = pytest.mark.unit


def test_pivot_settings_defaults():
    with override_settings(REPORT_PIVOT={}):
        settings = get_pivot_settings()

    assert settings.enable_fetch_by_segment is False
    assert settings.default_column_limit == 10
    assert settings.max_fetch_workers == 1


def test_pivot_settings_are_merged_over_defaults():
    with override_settings(
        REPORT_PIVOT={"pivot_settings": {"enable_fetch_by_segment": "true", "max_fetch_workers": 0}}
    ):
        settings = get_pivot_settings()

    assert settings.enable_fetch_by_segment is True
    assert settings.default_column_limit == 10
    assert settings.max_fetch_workers == 1


def test_api_settings_normalization():
    with override_settings(
        REPORT_PIVOT={
            "api_settings": {
                "base_url": "  ",
                "retry_statuses": ["503", "oops", 429],
                "default_params": {"idSite": 3},
            }
        }
    ):
        settings = get_api_settings()

    assert settings.base_url is None
    assert settings.retry_statuses == [503, 429]
    assert settings.default_params == {"idSite": 3}
    assert settings.timeout_seconds == 30
