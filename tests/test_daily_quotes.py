from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest
from conftest import FIXED_TODAY, StubQuoteProvider

from app.errors import ValidationError
from app.i18n import Translator
from app.providers.base import ProviderError
from app.providers.schemas import CURRENCIES, Currency, RateQuote
from app.services.daily_quotes import fetch_daily_quotes, validate_quote_date
from app.services.notifications import NotificationService

MIN_DATE = date(2000, 1, 1)
DAY = date(2024, 5, 10)


def fetch(provider, day=DAY, *, locale="en", notifier=None):
    return fetch_daily_quotes(
        provider,
        day,
        translator=Translator(locale),
        min_date=MIN_DATE,
        notifier=notifier,
        today=lambda: FIXED_TODAY,
    )


def test_fetch_daily_quotes_returns_every_currency():
    provider = StubQuoteProvider(default=RateQuote(buy=1000, sell=1040))

    result = fetch(provider)

    assert list(result.quotes) == list(CURRENCIES)
    assert result.quotes[Currency.EUR].sell == Decimal("1040")
    assert result.quote_date == DAY
    assert result.errors == []


def test_missing_and_failing_currencies_are_reported_separately(server_error):
    provider = StubQuoteProvider(
        quotes={(Currency.USD_BLUE, DAY): RateQuote(buy=1, sell=2)},
        failures={Currency.EUR: server_error},
    )

    result = fetch(provider)

    assert result.quotes[Currency.USD_BLUE] == RateQuote(buy=1, sell=2)
    assert result.quotes[Currency.USD_OFICIAL] is None
    assert result.quotes[Currency.EUR] is None
    assert result.errors == [
        "No exchange rate data found for USD (Official) on 05/10/2024.",
        "EUR (Official) API (05/10/2024): Server error 500: Internal Server Error",
    ]


def test_total_failure_notifies_once():
    provider = StubQuoteProvider(
        failures={currency: ProviderError("Failed to fetch") for currency in CURRENCIES}
    )
    notifier = NotificationService()

    result = fetch(provider, notifier=notifier, locale="es")

    assert not result.has_data
    assert result.quote_date is None
    toast = notifier.state.toasts[0]
    assert toast.title == "Errores de API"
    assert toast.description.count("\n") == 2


def test_future_date_is_rejected_with_toast():
    notifier = NotificationService()

    with pytest.raises(ValidationError) as exc_info:
        validate_quote_date(
            date(2024, 5, 16),
            today=FIXED_TODAY,
            min_date=MIN_DATE,
            translator=Translator("en"),
            notifier=notifier,
        )

    assert exc_info.value.status_code == 422
    assert exc_info.value.message == "Cannot select future dates."
    assert exc_info.value.payload["field"] == "date"
    assert notifier.state.toasts[0].title == "Invalid Date"


def test_date_before_minimum_is_rejected():
    with pytest.raises(ValidationError, match="01/01/2000"):
        validate_quote_date(
            date(1999, 12, 31), today=FIXED_TODAY, min_date=MIN_DATE, translator=Translator("en")
        )


def test_today_is_accepted():
    assert (
        validate_quote_date(FIXED_TODAY, today=FIXED_TODAY, min_date=MIN_DATE, translator=Translator())
        == FIXED_TODAY
    )
