"""Shared single-attempt HTTP client wrapper with a bounded timeout."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

import requests
from requests import Response, Session
from requests.exceptions import JSONDecodeError, RequestException

logger = logging.getLogger(__name__)


class HTTPClientError(RuntimeError):
    """Raised when the HTTP client cannot satisfy a request."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass(frozen=True)
class HTTPClientConfig:
    """Configuration for the shared HTTP client."""

    base_url: str
    timeout: float = 5.0


class HTTPClient:
    """Small HTTP client issuing exactly one attempt per request."""

    def __init__(
        self,
        config: HTTPClientConfig,
        session: Optional[Session] = None,
    ) -> None:
        self._config = config
        self._session = session or requests.Session()

    def get(self, path: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        url = self._build_url(path)
        try:
            response = self._session.get(url, params=params, timeout=self._config.timeout)
        except RequestException as exc:
            logger.debug("HTTP request to %s failed: %s", url, exc)
            raise HTTPClientError(f"Failed to fetch {url}: {exc}") from exc
        return self._handle_response(response)

    def close(self) -> None:
        self._session.close()

    def _build_url(self, path: str) -> str:
        base = self._config.base_url.rstrip("/")
        suffix = path.lstrip("/")
        return f"{base}/{suffix}"

    @staticmethod
    def _handle_response(response: Response) -> Any:
        status = response.status_code
        if status >= 400:
            detail = _error_detail(response)
            kind = "Server error" if status >= 500 else "Client error"
            raise HTTPClientError(f"{kind} {status}: {detail}", status_code=status)

        try:
            return response.json()
        except (JSONDecodeError, ValueError) as exc:
            raise HTTPClientError("Invalid JSON response", status_code=status) from exc


def _error_detail(response: Response) -> str:
    """Prefer the upstream ``error``/``message`` field, then the reason phrase."""

    try:
        body = response.json()
    except (JSONDecodeError, ValueError):
        body = None

    if isinstance(body, dict):
        for key in ("error", "message"):
            value = body.get(key)
            if value:
                return str(value)

    reason = getattr(response, "reason", None)
    if isinstance(reason, str) and reason:
        return reason
    return "Failed to fetch"
