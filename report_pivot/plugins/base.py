"""
Base plugin architecture for the report registry.
"""

import logging
import threading
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Union

from django.conf import settings
from django.utils.module_loading import import_string

if TYPE_CHECKING:
    from ..datatable import DataTable
    from ..registry.info import Dimension, Report

logger = logging.getLogger(__name__)


class BasePlugin(ABC):
    """
    Base class for report plugins.

    A plugin groups the reports and dimensions of one feature area
    (referrers, geolocation, custom variables...) and serves the data of its
    reports:
    - ``get_dimensions`` declares the dimensions the plugin owns
    - ``get_reports`` declares the reports the plugin serves
    - ``get_report_data`` returns a report table for API parameters
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the plugin.

        Args:
            config: Plugin configuration dictionary
        """
        self.config = config or {}
        self.enabled = self.config.get('enabled', True)
        self.name = self.__class__.__name__

    @abstractmethod
    def get_name(self) -> str:
        """Return the plugin name."""
        return self.name

    def get_version(self) -> str:
        """Return the plugin version."""
        return getattr(self, 'VERSION', '1.0.0')

    def is_enabled(self) -> bool:
        """Check if plugin is enabled."""
        return self.enabled

    def get_dimensions(self) -> List["Dimension"]:
        """Dimensions declared by this plugin."""
        return []

    def get_reports(self) -> List["Report"]:
        """Reports served by this plugin."""
        return []

    def get_report_data(
        self, report: "Report", parameters: Mapping[str, Any]
    ) -> Union["DataTable", List[Dict[str, Any]]]:
        """
        Return the data of ``report`` for the given API parameters.

        Args:
            report: One of the reports returned by ``get_reports``
            parameters: API parameters (idSite, period, date, segment...)

        Returns:
            A DataTable or a list of row dicts
        """
        raise NotImplementedError(
            f"Plugin {self.get_name()} does not serve data for '{report.api_method}'"
        )


class PluginManager:
    """
    Manages report plugins.

    ``version`` changes every time the set of loaded plugins changes so that
    indexes built from the plugins know when to rebuild.
    """

    def __init__(self):
        self._plugins: Dict[str, BasePlugin] = {}
        self._loaded = False
        self._version = 0
        self._lock = threading.RLock()

    @property
    def version(self) -> int:
        return self._version

    def load_plugins(self, plugin_configs: Optional[Mapping[str, Dict[str, Any]]] = None) -> None:
        """
        Load plugins.

        Args:
            plugin_configs: Mapping of plugin class path to plugin configuration.
                Defaults to the REPORT_PIVOT_PLUGINS Django setting, which is
                only read once.
        """
        with self._lock:
            if plugin_configs is None:
                if self._loaded:
                    return
                plugin_configs = getattr(settings, 'REPORT_PIVOT_PLUGINS', {}) or {}

            for plugin_path, config in plugin_configs.items():
                try:
                    self.load_plugin(plugin_path, config or {})
                except Exception as e:
                    logger.error(f"Failed to load plugin '{plugin_path}': {e}")

            self._loaded = True
            logger.info(f"Loaded {len(self._plugins)} plugins")

    def load_plugin(self, plugin_path: str, config: Dict[str, Any]) -> None:
        """
        Load a single plugin.

        Args:
            plugin_path: Python path to plugin class
            config: Plugin configuration
        """
        try:
            plugin_class = import_string(plugin_path)

            if not isinstance(plugin_class, type) or not issubclass(plugin_class, BasePlugin):
                raise ValueError(f"Plugin {plugin_path} must inherit from BasePlugin")

            self.register_plugin(plugin_class(config))

        except Exception as e:
            logger.error(f"Error loading plugin {plugin_path}: {e}")
            raise

    def register_plugin(self, plugin: BasePlugin) -> None:
        """Register an already instantiated plugin."""
        with self._lock:
            if plugin.is_enabled():
                self._plugins[plugin.get_name()] = plugin
                self._version += 1
                logger.info(f"Loaded plugin: {plugin.get_name()} v{plugin.get_version()}")
            else:
                logger.info(f"Plugin {plugin.get_name()} is disabled")

    def get_plugin(self, name: str) -> Optional[BasePlugin]:
        """
        Get a plugin by name.

        Args:
            name: Plugin name

        Returns:
            Plugin instance or None
        """
        return self._plugins.get(name)

    def get_plugins(self) -> List[BasePlugin]:
        """Get all loaded plugins."""
        return list(self._plugins.values())

    def get_enabled_plugins(self) -> List[BasePlugin]:
        """Get all enabled plugins."""
        return [plugin for plugin in self._plugins.values() if plugin.is_enabled()]

    def is_plugin_loaded(self, name: str) -> bool:
        return name in self._plugins

    def unload_plugin(self, name: str) -> bool:
        """
        Unload a plugin.

        Args:
            name: Plugin name

        Returns:
            True if plugin was unloaded, False if not found
        """
        with self._lock:
            if name in self._plugins:
                del self._plugins[name]
                self._version += 1
                logger.info(f"Unloaded plugin: {name}")
                return True
            return False

    def reset(self) -> None:
        """Forget every plugin; the next ``load_plugins()`` reads settings again."""
        with self._lock:
            self._plugins.clear()
            self._loaded = False
            self._version += 1

    def reload_plugins(self) -> None:
        """Reload all plugins."""
        self.reset()
        self.load_plugins()


# Global plugin manager instance
plugin_manager = PluginManager()
