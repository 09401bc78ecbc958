"""HTTP client for the Google Apps Script spreadsheet web app.

The web app exposes a single URL. Reads are ``GET ?action=<name>&...`` and
writes are ``POST`` with a JSON body that carries ``action``. Apps Script
only answers CORS-simple requests, so the body goes out as ``text/plain``.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Mapping, Optional

import requests

from ..core.constants import DEFAULT_GAS_TIMEOUT_SECONDS
from ..core.logging_config import get_logger
from .errors import GasAPIError, GasErrorCode

log = get_logger(__name__)


@dataclass
class GasConfig:
    api_url: str
    timeout: float = DEFAULT_GAS_TIMEOUT_SECONDS
    name: str = "gas"


class GasClient:
    """Thin request/response wrapper; one instance per deployed web app."""

    def __init__(self, config: GasConfig, *, session: Optional[requests.Session] = None):
        self._config = config
        self._session = session or requests.Session()

    @property
    def name(self) -> str:
        return self._config.name

    def is_configured(self) -> bool:
        return bool(self._config.api_url)

    def get(self, action: str, params: Optional[Mapping[str, Any]] = None) -> dict:
        self._require_configured()
        query = {"action": action}
        for key, value in (params or {}).items():
            if value is None:
                continue
            query[key] = str(value).lower() if isinstance(value, bool) else str(value)

        log.debug("%s GET action=%s", self.name, action)
        return self._send("GET", action, params=query)

    def post(self, action: str, payload: Optional[Mapping[str, Any]] = None) -> dict:
        self._require_configured()
        body = {"action": action, **dict(payload or {})}

        log.debug("%s POST action=%s", self.name, action)
        return self._send(
            "POST",
            action,
            data=json.dumps(body, default=str),
            headers={"Content-Type": "text/plain"},
        )

    def health(self, action: str, params: Optional[Mapping[str, Any]] = None) -> bool:
        """True when the web app answers ``action`` successfully. Never raises."""
        if not self.is_configured():
            return False
        try:
            return self.get(action, params).get("success") is True
        except GasAPIError:
            return False

    def _require_configured(self) -> None:
        if not self.is_configured():
            raise GasAPIError(
                GasErrorCode.API_NOT_CONFIGURED,
                f"{self.name} API URL not configured. Please set it in your environment.",
            )

    def _send(self, method: str, action: str, **kwargs) -> dict:
        try:
            response = self._session.request(method, self._config.api_url, timeout=self._config.timeout, **kwargs)
        except requests.Timeout:
            log.warning("%s %s timed out", self.name, action)
            raise GasAPIError(GasErrorCode.TIMEOUT, "Request timed out. Please try again.") from None
        except requests.RequestException as e:
            log.warning("%s %s network error: %s", self.name, action, e)
            raise GasAPIError(GasErrorCode.NETWORK_ERROR, f"Network error: {e}") from e

        if not response.ok:
            log.warning("%s %s returned HTTP %s", self.name, action, response.status_code)
            raise GasAPIError(GasErrorCode.SERVER_ERROR, f"HTTP error! status: {response.status_code}")

        try:
            data = response.json()
        except ValueError:
            raise GasAPIError(GasErrorCode.INVALID_RESPONSE, "Backend returned a non-JSON response") from None

        if not isinstance(data, dict):
            raise GasAPIError(GasErrorCode.INVALID_RESPONSE, "Backend returned an unexpected payload", details=data)
        return data
