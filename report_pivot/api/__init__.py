"""
API dispatch used to fetch breakdown tables.

``get_api_proxy()`` returns the process-wide proxy: an ``HttpApiProxy`` when
``REPORT_PIVOT["api_settings"]["base_url"]`` is configured, a local
``ApiProxy`` dispatching to plugins otherwise. Tests swap it with
``set_api_proxy()``.
"""

import threading
from typing import Optional

from ..config import get_api_settings
from .http import HttpApiProxy
from .proxy import ApiProxy

_API_PROXY: Optional[ApiProxy] = None
_API_PROXY_LOCK = threading.Lock()


def get_api_proxy() -> ApiProxy:
    global _API_PROXY
    if _API_PROXY is not None:
        return _API_PROXY
    with _API_PROXY_LOCK:
        if _API_PROXY is None:
            settings = get_api_settings()
            if settings.base_url:
                _API_PROXY = HttpApiProxy.from_settings(settings)
            else:
                _API_PROXY = ApiProxy()
    return _API_PROXY


def set_api_proxy(proxy: ApiProxy) -> None:
    global _API_PROXY
    with _API_PROXY_LOCK:
        _API_PROXY = proxy


def reset_api_proxy() -> None:
    global _API_PROXY
    with _API_PROXY_LOCK:
        _API_PROXY = None


__all__ = [
    "ApiProxy",
    "HttpApiProxy",
    "get_api_proxy",
    "set_api_proxy",
    "reset_api_proxy",
]
