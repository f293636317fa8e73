from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest
import responses

from app.providers import (
    ArgentinaDatosProvider,
    Currency,
    ProviderError,
    QuoteUnavailableError,
)
from app.providers.argentinadatos_provider import DEFAULT_BASE_URL

DAY = date(2024, 5, 3)


@pytest.fixture()
def provider():
    return ArgentinaDatosProvider.from_config(
        {"ARGENTINADATOS_API_BASE_URL": DEFAULT_BASE_URL, "REQUEST_TIMEOUT_SECONDS": 1}
    )


@pytest.mark.parametrize(
    ("currency", "path"),
    [
        (Currency.USD_BLUE, "/cotizaciones/dolares/blue/2024/05/03"),
        (Currency.USD_OFICIAL, "/cotizaciones/dolares/oficial/2024/05/03"),
        (Currency.EUR, "/cotizaciones/eur/2024/05/03"),
    ],
)
def test_quote_path_zero_pads_date(currency, path):
    assert ArgentinaDatosProvider.quote_path(currency, DAY) == path


@responses.activate
def test_get_quote_maps_compra_and_venta(provider):
    responses.add(
        responses.GET,
        f"{DEFAULT_BASE_URL}/cotizaciones/dolares/oficial/2024/05/03",
        json={"compra": 871.5, "venta": 911.5},
        status=200,
    )

    quote = provider.get_quote(Currency.USD_OFICIAL, DAY)

    assert quote.buy == Decimal("871.5")
    assert quote.sell == Decimal("911.5")


@responses.activate
def test_get_quote_keeps_single_numeric_field(provider):
    responses.add(
        responses.GET,
        f"{DEFAULT_BASE_URL}/cotizaciones/eur/2024/05/03",
        json={"compra": 950, "venta": None},
        status=200,
    )

    quote = provider.get_quote(Currency.EUR, DAY)

    assert quote.buy == Decimal("950")
    assert quote.sell is None


@responses.activate
def test_get_quote_raises_unavailable_without_numeric_fields(provider):
    responses.add(
        responses.GET,
        f"{DEFAULT_BASE_URL}/cotizaciones/eur/2024/05/03",
        json={"compra": "n/a"},
        status=200,
    )

    with pytest.raises(QuoteUnavailableError):
        provider.get_quote(Currency.EUR, DAY)


@responses.activate
def test_get_quote_translates_http_errors(provider):
    responses.add(
        responses.GET,
        f"{DEFAULT_BASE_URL}/cotizaciones/dolares/blue/2024/05/03",
        json={"error": "Not found"},
        status=404,
    )

    with pytest.raises(ProviderError) as exc_info:
        provider.get_quote(Currency.USD_BLUE, DAY)

    assert not isinstance(exc_info.value, QuoteUnavailableError)
    assert exc_info.value.status_code == 404
    assert "Not found" in str(exc_info.value)


def test_from_config_falls_back_to_default_base_url():
    provider = ArgentinaDatosProvider.from_config({"ARGENTINADATOS_API_BASE_URL": "  "})

    assert provider._client._config.base_url == DEFAULT_BASE_URL  # type: ignore[attr-defined]
