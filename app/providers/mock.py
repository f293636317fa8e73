"""Mock provider implementation for testing and local development."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from .base import BaseQuoteProvider
from .schemas import Currency, RateQuote

BASE_PRICES: dict[Currency, Decimal] = {
    Currency.USD_BLUE: Decimal("1200.00"),
    Currency.USD_OFICIAL: Decimal("950.00"),
    Currency.EUR: Decimal("1030.00"),
}
SPREAD = Decimal("20.00")


class MockQuoteProvider(BaseQuoteProvider):
    """Deterministic provider returning synthetic quotes derived from the date."""

    name = "mock"

    def get_quote(self, currency: Currency, day: date) -> RateQuote:
        # Small day-of-month drift keeps consecutive days distinguishable.
        drift = Decimal(day.day) / Decimal("10")
        buy = BASE_PRICES[currency] + drift
        return RateQuote(buy=buy, sell=buy + SPREAD)
