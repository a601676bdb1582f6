import pytest
from django.apps import apps
from django.test import override_settings

from report_pivot.plugins.base import plugin_manager

pytestmark = pytest.mark.unit


def test_ready_loads_plugins_from_settings():
    plugin_manager.reset()
    try:
        with override_settings(REPORT_PIVOT_PLUGINS={"tests.plugins.ReferrersPlugin": {}}):
            apps.get_app_config("report_pivot").ready()

        assert plugin_manager.is_plugin_loaded("Referrers")
    finally:
        plugin_manager.reset()
