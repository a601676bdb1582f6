"""
Remote API dispatch over HTTP.

Requests the JSON API of a remote analytics server, e.g.
``GET https://stats.example.com/index.php?module=API&method=UserCountry.getCity
&format=json&segment=referrerKeyword==foo&idSite=1&period=day&date=today``.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Iterable, Mapping, Optional

import requests

from ..config import ApiSettings, get_api_settings
from ..datatable import DataTable
from ..types import FetchError
from .proxy import ApiProxy, _to_table

logger = logging.getLogger(__name__)


class HttpApiProxy(ApiProxy):
    def __init__(
        self,
        base_url: str,
        *,
        token_auth: Optional[str] = None,
        timeout_seconds: int = 30,
        max_retries: int = 2,
        retry_backoff_seconds: float = 0.5,
        retry_statuses: Iterable[int] = (429, 500, 502, 503, 504),
        default_params: Optional[Mapping[str, Any]] = None,
        session: Optional[requests.Session] = None,
    ):
        super().__init__()
        self.base_url = base_url
        self.token_auth = token_auth
        self.timeout_seconds = timeout_seconds
        self.max_retries = max(0, int(max_retries))
        self.retry_backoff_seconds = retry_backoff_seconds
        self.retry_statuses = set(retry_statuses)
        self.default_params = dict(default_params or {})
        self.session = session or requests.Session()

    @classmethod
    def from_settings(cls, settings: Optional[ApiSettings] = None) -> "HttpApiProxy":
        settings = settings or get_api_settings()
        if not settings.base_url:
            raise FetchError("api_settings.base_url is not configured.")
        return cls(
            settings.base_url,
            token_auth=settings.token_auth,
            timeout_seconds=settings.timeout_seconds,
            max_retries=settings.max_retries,
            retry_backoff_seconds=settings.retry_backoff_seconds,
            retry_statuses=settings.retry_statuses,
            default_params=settings.default_params,
        )

    def _build_query(self, method: str, parameters: Mapping[str, Any]) -> dict[str, Any]:
        query = dict(self.default_params)
        query.update({key: value for key, value in parameters.items() if value is not None})
        query.update({"module": "API", "method": method, "format": "json"})
        if self.token_auth:
            query["token_auth"] = self.token_auth
        return query

    def call(self, method: str, parameters: Optional[Mapping[str, Any]] = None) -> DataTable:
        query = self._build_query(method, parameters or {})
        max_attempts = self.max_retries + 1
        attempt = 0

        while True:
            attempt += 1
            try:
                response = self.session.get(
                    self.base_url, params=query, timeout=self.timeout_seconds
                )
            except requests.RequestException as exc:
                if attempt < max_attempts:
                    self._sleep_before_retry(method, attempt, exc)
                    continue
                raise FetchError(
                    f"Request to '{method}' failed after {attempt} attempts: {exc}"
                ) from exc

            if response.ok:
                break
            if response.status_code in self.retry_statuses and attempt < max_attempts:
                self._sleep_before_retry(method, attempt, f"status {response.status_code}")
                continue
            raise FetchError(
                f"Request to '{method}' failed with status {response.status_code}."
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise FetchError(f"Invalid JSON returned for '{method}'.") from exc

        if isinstance(payload, dict) and payload.get("result") == "error":
            raise FetchError(str(payload.get("message") or f"Request to '{method}' failed."))
        return _to_table(method, payload)

    def _sleep_before_retry(self, method: str, attempt: int, reason: Any) -> None:
        delay = self.retry_backoff_seconds * (2 ** (attempt - 1))
        logger.warning(
            "Request to '%s' failed (%s), retrying in %.2fs (attempt %s/%s)",
            method,
            reason,
            delay,
            attempt,
            self.max_retries + 1,
        )
        if delay > 0:
            time.sleep(delay)


__all__ = ["HttpApiProxy"]
