"""
Report plugins.
"""

from .base import BasePlugin, PluginManager, plugin_manager

__all__ = ["BasePlugin", "PluginManager", "plugin_manager"]
