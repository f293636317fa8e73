"""Aggregate recent business-day quotes into a rectangular history table."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Sequence
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from datetime import date
from time import perf_counter

from app.logging import quote_log_extra
from app.providers.base import BaseQuoteProvider, ProviderError
from app.providers.schemas import CURRENCIES, Currency, HistoricalRateEntry, RateQuote
from app.utils.datetime import business_days_back, format_iso, local_today, yesterday

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 4


class HistoryCancelled(Exception):
    """Raised when an aggregation run is cancelled before it completes."""


class HistoricalRateAggregator:
    """Walk back over business days and look up every currency for each day.

    Every (day, currency) lookup is isolated: upstream errors, malformed
    bodies and unexpected exceptions all become an entry with an empty
    :class:`RateQuote`, so a run over ``d`` days always yields
    ``d * len(currencies)`` entries.
    """

    def __init__(
        self,
        provider: BaseQuoteProvider,
        *,
        today: Callable[[], date] = local_today,
        max_workers: int = DEFAULT_MAX_WORKERS,
        currencies: Sequence[Currency] = CURRENCIES,
    ) -> None:
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self._provider = provider
        self._today = today
        self._max_workers = max_workers
        self._currencies = tuple(currencies)

    @property
    def provider_name(self) -> str:
        return getattr(self._provider, "name", self._provider.__class__.__name__)

    def business_days(self, lookback_business_days: int, min_date: date) -> list[date]:
        if lookback_business_days < 0:
            raise ValueError("lookback_business_days cannot be negative")
        return business_days_back(yesterday(self._today()), lookback_business_days, min_date)

    def fetch_history(
        self,
        lookback_business_days: int,
        min_date: date,
        *,
        cancel_event: threading.Event | None = None,
    ) -> list[HistoricalRateEntry]:
        """Return one entry per (business day, currency), most recent day first."""

        days = self.business_days(lookback_business_days, min_date)
        if not days:
            return []

        tasks = [(day, currency) for day in days for currency in self._currencies]
        results: dict[tuple[date, Currency], HistoricalRateEntry] = {}

        with ThreadPoolExecutor(
            max_workers=min(self._max_workers, len(tasks)),
            thread_name_prefix="history-lookup",
        ) as executor:
            futures: dict[Future[HistoricalRateEntry], tuple[date, Currency]] = {
                executor.submit(self._lookup, day, currency, cancel_event): (day, currency)
                for day, currency in tasks
            }
            for future in as_completed(futures):
                day, currency = futures[future]
                if cancel_event is not None and cancel_event.is_set():
                    for pending in futures:
                        pending.cancel()
                    raise HistoryCancelled("History aggregation cancelled")
                try:
                    results[(day, currency)] = future.result()
                except Exception as exc:
                    logger.error(
                        "Lookup for %s on %s failed unexpectedly: %s",
                        currency.value,
                        format_iso(day),
                        exc,
                        exc_info=True,
                    )
                    results[(day, currency)] = HistoricalRateEntry(date=day, currency=currency)

        return [results[task] for task in tasks]

    def _lookup(
        self,
        day: date,
        currency: Currency,
        cancel_event: threading.Event | None = None,
    ) -> HistoricalRateEntry:
        if cancel_event is not None and cancel_event.is_set():
            return HistoricalRateEntry(date=day, currency=currency)

        start = perf_counter()
        try:
            quote = self._provider.get_quote(currency, day)
        except ProviderError as exc:
            logger.info(
                "No %s quote for %s: %s",
                currency.value,
                format_iso(day),
                exc,
                extra=quote_log_extra(
                    provider=self.provider_name,
                    currency=currency.value,
                    quote_date=format_iso(day),
                    status="missing",
                    duration_ms=(perf_counter() - start) * 1000,
                    error=str(exc),
                ),
            )
            return HistoricalRateEntry(date=day, currency=currency)

        if not isinstance(quote, RateQuote):
            quote = RateQuote.empty()

        logger.debug(
            "Fetched %s quote for %s",
            currency.value,
            format_iso(day),
            extra=quote_log_extra(
                provider=self.provider_name,
                currency=currency.value,
                quote_date=format_iso(day),
                status="success",
                duration_ms=(perf_counter() - start) * 1000,
            ),
        )
        return HistoricalRateEntry(date=day, currency=currency, rate=quote)
