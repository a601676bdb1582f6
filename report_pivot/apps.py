"""
Django app configuration for the report-pivot library.

Loads the report plugins declared in the REPORT_PIVOT_PLUGINS setting once
Django is ready.
"""

import logging

from django.apps import AppConfig as BaseAppConfig
from django.conf import settings

logger = logging.getLogger(__name__)


class AppConfig(BaseAppConfig):
    """Django app configuration for report-pivot."""

    name = "report_pivot"
    verbose_name = "Report Pivot"
    label = "report_pivot"

    def ready(self):
        """Initialize the application after Django has loaded."""
        try:
            from .plugins.base import plugin_manager

            plugin_manager.load_plugins()
        except Exception as e:
            logger.error(f"Error initializing report plugins: {e}")
            # Don't raise in production to avoid breaking the app
            if getattr(settings, "DEBUG", False):
                raise
