"""Abstract interface for peso quotation providers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date

from .schemas import Currency, RateQuote


class ProviderError(Exception):
    """Raised when an upstream provider cannot fulfill a request."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class QuoteUnavailableError(ProviderError):
    """The upstream answered, but without a numeric buy or sell price."""


class BaseQuoteProvider(ABC):
    """Defines the interface all quotation providers must implement."""

    name: str

    @abstractmethod
    def get_quote(self, currency: Currency, day: date) -> RateQuote:
        """Retrieve the buy/sell quote for ``currency`` on ``day``.

        Raises:
            ProviderError: If the upstream has no usable data for that day.
        """
