"""ArgentinaDatos quotation provider implementation."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date
from typing import Any

from app.providers.base import BaseQuoteProvider, ProviderError, QuoteUnavailableError
from app.providers.schemas import Currency, RateQuote
from app.utils.datetime import format_path

from .argentinadatos_client import (
    ArgentinaDatosClient,
    ArgentinaDatosClientConfig,
    ArgentinaDatosError,
)

DEFAULT_BASE_URL = "https://api.argentinadatos.com/v1"


class ArgentinaDatosProvider(BaseQuoteProvider):
    """Provider that fetches daily peso quotes from ArgentinaDatos."""

    name = "argentinadatos"

    def __init__(self, client: ArgentinaDatosClient) -> None:
        self._client = client

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> ArgentinaDatosProvider:
        client_config = cls._build_client_config(config)
        return cls(ArgentinaDatosClient(client_config))

    def get_quote(self, currency: Currency, day: date) -> RateQuote:
        path = self.quote_path(currency, day)
        try:
            payload = self._client.get(path)
        except ArgentinaDatosError as exc:
            raise ProviderError(str(exc), status_code=exc.status_code) from exc

        quote = RateQuote(buy=payload.get("compra"), sell=payload.get("venta"))
        if quote.is_empty:
            raise QuoteUnavailableError(
                f"Quote for {currency.value} on {day.isoformat()} has no numeric 'compra'/'venta'"
            )
        return quote

    @staticmethod
    def quote_path(currency: Currency, day: date) -> str:
        return f"/{currency.endpoint}/{format_path(day)}"

    @classmethod
    def _build_client_config(cls, config: Mapping[str, Any]) -> ArgentinaDatosClientConfig:
        base_url_value = config.get("ARGENTINADATOS_API_BASE_URL")
        if not isinstance(base_url_value, str) or not base_url_value.strip():
            base_url = DEFAULT_BASE_URL
        else:
            base_url = base_url_value
        timeout = float(config.get("REQUEST_TIMEOUT_SECONDS", 5))
        return ArgentinaDatosClientConfig(base_url=base_url, timeout=timeout)
