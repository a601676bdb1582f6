"""
Base settings for projects using report-pivot.
Users import * from this file in their project's settings.py.
"""

import copy
import os
from pathlib import Path

from report_pivot.defaults import LIBRARY_DEFAULTS

# This BASE_DIR is a placeholder; the project's settings.py will redefine it
# relative to itself.
BASE_DIR = Path(os.getcwd())

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = os.environ.get(
    "DJANGO_SECRET_KEY", "django-insecure-report-pivot-default-key-change-me"
)

DEBUG = os.environ.get("DJANGO_DEBUG", "False").lower() == "true"

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "report_pivot",
]

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "db.sqlite3",
    }
}

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

# Load library defaults into Django settings
REPORT_PIVOT = copy.deepcopy(LIBRARY_DEFAULTS)
REPORT_PIVOT["api_settings"]["base_url"] = os.environ.get("REPORT_PIVOT_API_URL") or None
REPORT_PIVOT["api_settings"]["token_auth"] = os.environ.get("REPORT_PIVOT_TOKEN_AUTH") or None

# Plugins contributing reports and dimensions: {"dotted.path.Plugin": {config}}
REPORT_PIVOT_PLUGINS = {}

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "handlers": {
        "console": {"class": "logging.StreamHandler"},
    },
    "loggers": {
        "report_pivot": {
            "handlers": ["console"],
            "level": os.environ.get("REPORT_PIVOT_LOG_LEVEL", "INFO"),
        },
    },
}
