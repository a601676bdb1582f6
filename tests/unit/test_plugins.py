"""
Unit tests for plugin loading.
"""

import pytest
from django.test import override_settings

from report_pivot.plugins import PluginManager

pytestmark = pytest.mark.unit


def test_load_plugins_reads_settings_once():
    manager = PluginManager()

    with override_settings(REPORT_PIVOT_PLUGINS={"tests.plugins.ReferrersPlugin": {}}):
        manager.load_plugins()
    with override_settings(REPORT_PIVOT_PLUGINS={"tests.plugins.UserCountryPlugin": {}}):
        manager.load_plugins()

    assert [plugin.get_name() for plugin in manager.get_plugins()] == ["Referrers"]


def test_reload_plugins_reads_settings_again():
    manager = PluginManager()
    manager.load_plugins({"tests.plugins.ReferrersPlugin": {}})

    with override_settings(REPORT_PIVOT_PLUGINS={"tests.plugins.UserCountryPlugin": {}}):
        manager.reload_plugins()

    assert [plugin.get_name() for plugin in manager.get_plugins()] == ["UserCountry"]


def test_bad_plugin_paths_are_skipped_when_loading_in_bulk():
    manager = PluginManager()

    manager.load_plugins(
        {
            "tests.plugins.DoesNotExist": {},
            "report_pivot.datatable.DataTable": {},
            "tests.plugins.ReferrersPlugin": {},
        }
    )

    assert manager.get_plugin("Referrers") is not None
    assert len(manager.get_plugins()) == 1


def test_load_plugin_raises_for_non_plugin_class():
    manager = PluginManager()

    with pytest.raises(ValueError, match="must inherit from BasePlugin"):
        manager.load_plugin("report_pivot.datatable.DataTable", {})


def test_plugin_config_is_passed_to_the_plugin():
    manager = PluginManager()
    manager.load_plugins({"tests.plugins.UserCountryPlugin": {"rows": [{"label": "Paris"}]}})

    plugin = manager.get_plugin("UserCountry")
    assert plugin.config == {"rows": [{"label": "Paris"}]}
    assert plugin.get_version() == "1.0.0"


def test_version_changes_when_plugins_change():
    manager = PluginManager()
    initial = manager.version

    manager.load_plugins({"tests.plugins.ReferrersPlugin": {}})
    loaded = manager.version
    manager.unload_plugin("Referrers")

    assert initial < loaded < manager.version
    assert manager.unload_plugin("Referrers") is False
