from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from app.providers.http_client import HTTPClient, HTTPClientConfig, HTTPClientError

logger = logging.getLogger(__name__)


class ArgentinaDatosError(RuntimeError):
    """Raised when the ArgentinaDatos API returns an error or unusable response."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ArgentinaDatosClientConfig:
    """Configuration parameters for the ArgentinaDatos client."""

    def __init__(self, base_url: str, timeout: float) -> None:
        self.base_url = base_url
        self.timeout = timeout


class ArgentinaDatosClient:
    """HTTP client for api.argentinadatos.com built on the shared wrapper."""

    def __init__(
        self,
        config: ArgentinaDatosClientConfig,
        client: Optional[HTTPClient] = None,
    ) -> None:
        self._config = config
        self._client = client or HTTPClient(
            HTTPClientConfig(base_url=config.base_url, timeout=config.timeout)
        )

    def get(self, path: str) -> Dict[str, Any]:
        try:
            payload = self._client.get(path)
        except HTTPClientError as exc:
            raise ArgentinaDatosError(str(exc), status_code=exc.status_code) from exc

        if not isinstance(payload, dict):
            raise ArgentinaDatosError(
                f"ArgentinaDatos response for '{path}' is not a JSON object"
            )

        if payload.get("error"):
            raise ArgentinaDatosError(f"ArgentinaDatos error payload: {payload['error']}")

        return payload
