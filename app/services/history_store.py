"""In-memory history table state and the refresh routine that rebuilds it."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from functools import partial
from time import perf_counter
from typing import Callable, cast

from app.i18n import Translator
from app.logging import history_log_extra
from app.providers.base import BaseQuoteProvider
from app.providers.registry import get_provider
from app.providers.schemas import FilterState, HistoricalRateEntry, SortState
from app.services.history_aggregator import HistoricalRateAggregator, HistoryCancelled
from app.services.history_table import build_history_view, request_sort
from app.services.notifications import NotificationService
from app.utils.datetime import local_today, parse_iso_date, utc_now

logger = logging.getLogger(__name__)

HISTORY_STORE_KEY = "history_store"
HISTORY_AGGREGATOR_KEY = "history_aggregator"


class HistoryStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    POPULATED = "populated"
    EMPTY = "empty"


@dataclass(frozen=True)
class HistorySnapshot:
    """Immutable copy of the store handed to readers."""

    status: HistoryStatus
    generation: int
    entries: tuple[HistoricalRateEntry, ...]
    sort_state: SortState
    filter_state: FilterState
    last_refreshed: datetime | None = None
    last_error: str | None = None

    def view(self) -> list[HistoricalRateEntry]:
        return build_history_view(self.entries, self.sort_state, self.filter_state)


@dataclass
class HistoryStore:
    """Holds the current history table for one application.

    Each refresh calls :meth:`begin` to obtain a generation token; results are
    only committed while that token is still the latest, so a slow superseded
    run can never overwrite a newer one.
    """

    status: HistoryStatus = HistoryStatus.IDLE
    generation: int = 0
    entries: tuple[HistoricalRateEntry, ...] = ()
    sort_state: SortState = field(default_factory=SortState)
    filter_state: FilterState = field(default_factory=FilterState)
    last_refreshed: datetime | None = None
    last_error: str | None = None
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)
    _cancel_event: threading.Event | None = field(default=None, repr=False)

    def begin(self) -> tuple[int, threading.Event]:
        """Start a run, cancelling any run still in flight."""

        with self._lock:
            if self._cancel_event is not None:
                self._cancel_event.set()
            self.generation += 1
            self.status = HistoryStatus.LOADING
            self._cancel_event = threading.Event()
            return self.generation, self._cancel_event

    def commit(self, token: int, entries: list[HistoricalRateEntry]) -> bool:
        with self._lock:
            if token != self.generation:
                return False
            self.entries = tuple(entries)
            self.status = HistoryStatus.POPULATED if entries else HistoryStatus.EMPTY
            self.last_refreshed = utc_now()
            self.last_error = None
            self._cancel_event = None
            return True

    def abandon(self, token: int, error: str) -> bool:
        """Leave a failed current run in a well-defined, empty state."""

        with self._lock:
            if token != self.generation:
                return False
            self.entries = ()
            self.status = HistoryStatus.EMPTY
            self.last_error = error
            self._cancel_event = None
            return True

    def cancel(self) -> None:
        """Drop any in-flight run; its results will be discarded."""

        with self._lock:
            if self._cancel_event is not None:
                self._cancel_event.set()
                self._cancel_event = None
            self.generation += 1
            if self.status == HistoryStatus.LOADING:
                self.status = HistoryStatus.EMPTY if not self.entries else HistoryStatus.POPULATED

    def request_sort(self, key: str) -> SortState:
        with self._lock:
            self.sort_state = request_sort(self.sort_state, key)
            return self.sort_state

    def set_filters(self, **flags: bool | None) -> FilterState:
        with self._lock:
            self.filter_state = self.filter_state.updated(flags)
            return self.filter_state

    def snapshot(self) -> HistorySnapshot:
        with self._lock:
            return HistorySnapshot(
                status=self.status,
                generation=self.generation,
                entries=self.entries,
                sort_state=self.sort_state,
                filter_state=self.filter_state,
                last_refreshed=self.last_refreshed,
                last_error=self.last_error,
            )


def run_history_refresh(
    store: HistoryStore,
    aggregator: HistoricalRateAggregator,
    *,
    lookback_business_days: int,
    min_date: date,
    notifier: NotificationService | None = None,
    translate: Callable[..., str] | None = None,
) -> HistorySnapshot:
    """Rebuild the table from scratch and commit it if still current."""

    translate = translate or Translator().translate
    token, cancel_event = store.begin()
    start = perf_counter()
    try:
        entries = aggregator.fetch_history(
            lookback_business_days, min_date, cancel_event=cancel_event
        )
    except HistoryCancelled:
        logger.info(
            "History refresh superseded",
            extra=history_log_extra(status="cancelled", generation=token),
        )
        return store.snapshot()
    except Exception as exc:
        logger.exception(
            "History refresh failed",
            extra=history_log_extra(
                status="error",
                generation=token,
                duration_ms=(perf_counter() - start) * 1000,
                error=str(exc),
            ),
        )
        if store.abandon(token, str(exc)) and notifier is not None:
            notifier.notify(
                "error",
                translate("historyErrorTitle"),
                translate("historyErrorDescription", {"error": str(exc)}),
            )
        return store.snapshot()

    committed = store.commit(token, entries)
    failed = sum(1 for entry in entries if entry.rate.is_empty)
    logger.info(
        "History refresh %s",
        "completed" if committed else "discarded",
        extra=history_log_extra(
            status="success" if committed else "stale",
            generation=token,
            days=len({entry.date for entry in entries}),
            entries=len(entries),
            failed=failed,
            duration_ms=(perf_counter() - start) * 1000,
        ),
    )
    return store.snapshot()


def build_aggregator(app, provider: BaseQuoteProvider | None = None) -> HistoricalRateAggregator:
    provider = provider or app.extensions.get("quote_provider")
    if provider is None:
        with app.app_context():
            provider = get_provider(app.config.get("QUOTE_PROVIDER"))
    timezone = app.config.get("APP_TIMEZONE", "America/Argentina/Buenos_Aires")
    return HistoricalRateAggregator(
        provider,
        today=partial(local_today, timezone),
        max_workers=int(app.config.get("HISTORY_MAX_WORKERS", 4)),
    )


def init_history(app) -> HistoryStore:
    """Attach an empty history store and an aggregator to the Flask app."""

    store = HistoryStore()
    app.extensions[HISTORY_STORE_KEY] = store
    app.extensions[HISTORY_AGGREGATOR_KEY] = build_aggregator(app)
    return store


def get_history_store(app) -> HistoryStore:
    store = app.extensions.get(HISTORY_STORE_KEY)
    if store is None:
        store = init_history(app)
    return cast(HistoryStore, store)


def refresh_history(app, translator: Translator | None = None) -> HistorySnapshot:
    """Run one aggregation using the app's configuration and collaborators."""

    store = get_history_store(app)
    aggregator = cast(HistoricalRateAggregator, app.extensions[HISTORY_AGGREGATOR_KEY])
    translator = translator or Translator(app.config.get("DEFAULT_LOCALE", "en"))
    return run_history_refresh(
        store,
        aggregator,
        lookback_business_days=int(app.config.get("HISTORY_LOOKBACK_DAYS", 10)),
        min_date=parse_iso_date(app.config.get("HISTORY_MIN_DATE", "2000-01-01")),
        notifier=app.extensions.get("notifications"),
        translate=translator.translate,
    )
