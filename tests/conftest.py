"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Iterator
from datetime import date

import pytest

from app import create_app
from app.providers.base import BaseQuoteProvider, ProviderError, QuoteUnavailableError
from app.providers.registry import reset_registry
from app.providers.schemas import Currency, RateQuote

# Wednesday; the history walk starts on Tuesday 2024-05-14.
FIXED_TODAY = date(2024, 5, 15)


class StubQuoteProvider(BaseQuoteProvider):
    """Provider serving canned quotes and failures keyed by (currency, date)."""

    name = "stub"

    def __init__(self, quotes=None, failures=None, default=None):
        self.quotes = dict(quotes or {})
        self.failures = dict(failures or {})
        self.default = default
        self.calls: list[tuple[Currency, date]] = []

    def get_quote(self, currency: Currency, day: date) -> RateQuote:
        self.calls.append((currency, day))
        for key in ((currency, day), currency):
            if key in self.failures:
                raise self.failures[key]
        if (currency, day) in self.quotes:
            return self.quotes[(currency, day)]
        if self.default is not None:
            return self.default
        raise QuoteUnavailableError(f"No quote for {currency.value} on {day.isoformat()}")


@pytest.fixture()
def app() -> Iterator:
    """Fresh Flask application per test; the history store is per app."""

    reset_registry()
    flask_app = create_app("testing")
    yield flask_app
    reset_registry()


@pytest.fixture()
def client(app):
    """Provide a Flask test client."""

    with app.test_client() as client:
        yield client


@pytest.fixture()
def stub_provider() -> StubQuoteProvider:
    return StubQuoteProvider(default=RateQuote(buy=1000, sell=1050))


@pytest.fixture()
def server_error() -> ProviderError:
    return ProviderError("Server error 500: Internal Server Error", status_code=500)
