"""Provider interfaces and data structures for peso quotation sources."""

from .argentinadatos_client import (
    ArgentinaDatosClient,
    ArgentinaDatosClientConfig,
    ArgentinaDatosError,
)
from .argentinadatos_provider import ArgentinaDatosProvider
from .base import BaseQuoteProvider, ProviderError, QuoteUnavailableError
from .schemas import (
    CURRENCIES,
    Currency,
    DailyQuotes,
    FilterState,
    HistoricalRateEntry,
    RateQuote,
    SortState,
)

__all__ = [
    "ArgentinaDatosClient",
    "ArgentinaDatosClientConfig",
    "ArgentinaDatosError",
    "ArgentinaDatosProvider",
    "BaseQuoteProvider",
    "CURRENCIES",
    "Currency",
    "DailyQuotes",
    "FilterState",
    "HistoricalRateEntry",
    "ProviderError",
    "QuoteUnavailableError",
    "RateQuote",
    "SortState",
]
