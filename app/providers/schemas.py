"""Dataclasses describing normalized quotation payloads and table state."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Literal, Mapping

from app.utils.datetime import format_iso, parse_iso_date


class Currency(str, Enum):
    """Currencies quoted against the Argentine peso."""

    USD_BLUE = "USD_BLUE"
    USD_OFICIAL = "USD_OFICIAL"
    EUR = "EUR"

    @property
    def slug(self) -> str:
        return self.value.lower().replace("_", "-")

    @property
    def endpoint(self) -> str:
        return CURRENCY_ENDPOINTS[self]

    @property
    def rank(self) -> int:
        return CURRENCY_RANK[self]

    @property
    def filter_key(self) -> str:
        return self.value.lower()

    @property
    def label_key(self) -> str:
        return CURRENCY_LABEL_KEYS[self]

    @classmethod
    def parse(cls, value: str | Currency) -> Currency:
        if isinstance(value, Currency):
            return value
        normalized = str(value).strip().upper().replace("-", "_")
        try:
            return cls(normalized)
        except ValueError as exc:
            raise ValueError(f"Unknown currency '{value}'") from exc


CURRENCIES: tuple[Currency, ...] = (Currency.USD_BLUE, Currency.USD_OFICIAL, Currency.EUR)

CURRENCY_RANK: Dict[Currency, int] = {
    Currency.USD_BLUE: 1,
    Currency.USD_OFICIAL: 2,
    Currency.EUR: 3,
}

CURRENCY_ENDPOINTS: Dict[Currency, str] = {
    Currency.USD_BLUE: "cotizaciones/dolares/blue",
    Currency.USD_OFICIAL: "cotizaciones/dolares/oficial",
    Currency.EUR: "cotizaciones/eur",
}

CURRENCY_LABEL_KEYS: Dict[Currency, str] = {
    Currency.USD_BLUE: "usdBlueLabel",
    Currency.USD_OFICIAL: "usdOficialLabel",
    Currency.EUR: "eurLabel",
}

SortKey = Literal["date", "currency"]
SortDirection = Literal["asc", "desc"]

SORT_KEYS: tuple[str, ...] = ("date", "currency")
SORT_DIRECTIONS: tuple[str, ...] = ("asc", "desc")
DEFAULT_SORT_DIRECTIONS: Dict[str, str] = {"date": "desc", "currency": "asc"}


def coerce_rate(value: Any) -> Decimal | None:
    """Return ``value`` as a Decimal when it is a finite JSON number, else None."""

    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, Decimal) and not value.is_finite():
        return None
    return Decimal(str(value))


@dataclass(frozen=True)
class RateQuote:
    """Buy/sell price of one currency on one day; either side may be missing."""

    buy: Decimal | None = None
    sell: Decimal | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "buy", coerce_rate(self.buy))
        object.__setattr__(self, "sell", coerce_rate(self.sell))

    @classmethod
    def empty(cls) -> RateQuote:
        return cls(buy=None, sell=None)

    @property
    def is_empty(self) -> bool:
        return self.buy is None and self.sell is None


@dataclass(frozen=True)
class HistoricalRateEntry:
    """One row of the history table, keyed by ``<isoDate>-<currencySlug>``."""

    date: date
    currency: Currency
    rate: RateQuote = field(default_factory=RateQuote.empty)

    def __post_init__(self) -> None:
        object.__setattr__(self, "date", parse_iso_date(self.date))
        object.__setattr__(self, "currency", Currency.parse(self.currency))
        if not isinstance(self.rate, RateQuote):
            raise TypeError("rate must be a RateQuote instance")

    @property
    def id(self) -> str:
        return f"{format_iso(self.date)}-{self.currency.slug}"

    @property
    def iso_date(self) -> str:
        return format_iso(self.date)


@dataclass(frozen=True)
class SortState:
    key: SortKey = "date"
    direction: SortDirection = "desc"

    def __post_init__(self) -> None:
        if self.key not in SORT_KEYS:
            raise ValueError(f"Unknown sort key '{self.key}'")
        if self.direction not in SORT_DIRECTIONS:
            raise ValueError(f"Unknown sort direction '{self.direction}'")


@dataclass(frozen=True)
class FilterState:
    """Per-currency visibility toggles; every currency is shown by default."""

    usd_blue: bool = True
    usd_oficial: bool = True
    eur: bool = True

    def allows(self, currency: Currency) -> bool:
        return bool(getattr(self, currency.filter_key))

    def updated(self, flags: Mapping[str, bool | None]) -> FilterState:
        values = self.as_dict()
        for key, flag in flags.items():
            if key not in values:
                raise ValueError(f"Unknown filter '{key}'")
            if flag is not None:
                values[key] = bool(flag)
        return FilterState(**values)

    def as_dict(self) -> Dict[str, bool]:
        return {
            "usd_blue": self.usd_blue,
            "usd_oficial": self.usd_oficial,
            "eur": self.eur,
        }


@dataclass(frozen=True)
class DailyQuotes:
    """Quotes for every currency on a single selected date."""

    requested_date: date
    quotes: Dict[Currency, RateQuote | None]
    quote_date: date | None = None
    errors: List[str] = field(default_factory=list)

    @property
    def has_data(self) -> bool:
        return any(quote is not None for quote in self.quotes.values())
