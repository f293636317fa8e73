from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from app.providers import ArgentinaDatosProvider, BaseQuoteProvider, Currency, ProviderError
from app.providers.mock import MockQuoteProvider
from app.providers.registry import (
    get_provider,
    init_provider,
    list_providers,
    register_provider,
    reset_registry,
)


@pytest.fixture(autouse=True)
def _reset_providers():
    reset_registry()
    yield
    reset_registry()


def test_default_provider_is_mock(monkeypatch):
    monkeypatch.delenv("QUOTE_PROVIDER", raising=False)
    provider = get_provider()
    assert isinstance(provider, MockQuoteProvider)

    quote = provider.get_quote(Currency.USD_BLUE, date(2024, 5, 14))
    assert quote.buy == Decimal("1201.4")
    assert quote.sell == Decimal("1221.4")


def test_get_provider_respects_environment(monkeypatch):
    class AlternateProvider(MockQuoteProvider):
        name = "alternate"

    register_provider("alternate", AlternateProvider)
    monkeypatch.setenv("QUOTE_PROVIDER", "alternate")

    provider = get_provider()
    assert isinstance(provider, AlternateProvider)


def test_get_provider_unknown_name_raises():
    with pytest.raises(ProviderError, match="does-not-exist"):
        get_provider("does-not-exist")


def test_register_provider_rejects_empty_name():
    with pytest.raises(ValueError):
        register_provider("", MockQuoteProvider)


def test_argentinadatos_factory_reads_app_config(app):
    app.config["ARGENTINADATOS_API_BASE_URL"] = "https://proxy.example.com/v1"
    with app.app_context():
        provider = get_provider("argentinadatos")

    assert isinstance(provider, ArgentinaDatosProvider)
    assert provider._client._config.base_url == "https://proxy.example.com/v1"  # type: ignore[attr-defined]


def test_init_provider_attaches_to_app(app):
    provider = init_provider(app)
    assert isinstance(provider, BaseQuoteProvider)
    assert app.extensions["quote_provider"] is provider
    assert list_providers() == ["argentinadatos", "mock"]
