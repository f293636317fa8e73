from __future__ import annotations

import threading
from datetime import date

from conftest import FIXED_TODAY, StubQuoteProvider

from app.i18n import Translator
from app.providers.schemas import Currency, HistoricalRateEntry, RateQuote
from app.services.history_aggregator import HistoricalRateAggregator
from app.services.history_store import (
    HistoryStatus,
    HistoryStore,
    get_history_store,
    refresh_history,
    run_history_refresh,
)
from app.services.notifications import NotificationService

MIN_DATE = date(2000, 1, 1)


def make_entry(day=date(2024, 5, 14), currency=Currency.USD_BLUE):
    return HistoricalRateEntry(date=day, currency=currency, rate=RateQuote(buy=1, sell=2))


class ExplodingAggregator:
    def fetch_history(self, lookback_business_days, min_date, *, cancel_event=None):
        raise RuntimeError("calendar unavailable")


def test_store_starts_idle():
    snapshot = HistoryStore().snapshot()

    assert snapshot.status == HistoryStatus.IDLE
    assert snapshot.entries == ()
    assert snapshot.generation == 0


def test_begin_and_commit_populate_store():
    store = HistoryStore()
    token, _ = store.begin()
    assert store.status == HistoryStatus.LOADING

    assert store.commit(token, [make_entry()])
    assert store.status == HistoryStatus.POPULATED
    assert store.last_refreshed is not None


def test_commit_with_no_entries_is_empty():
    store = HistoryStore()
    token, _ = store.begin()

    store.commit(token, [])

    assert store.status == HistoryStatus.EMPTY


def test_superseded_run_is_discarded_and_cancelled():
    store = HistoryStore()
    old_token, old_event = store.begin()
    new_token, new_event = store.begin()

    assert old_event.is_set()
    assert not new_event.is_set()
    assert not store.commit(old_token, [make_entry()])
    assert store.status == HistoryStatus.LOADING
    assert store.commit(new_token, [make_entry(currency=Currency.EUR)])
    assert [entry.currency for entry in store.entries] == [Currency.EUR]


def test_cancel_drops_in_flight_run():
    store = HistoryStore()
    token, event = store.begin()

    store.cancel()

    assert event.is_set()
    assert store.status == HistoryStatus.EMPTY
    assert not store.commit(token, [make_entry()])


def test_sort_and_filter_state_survive_refresh():
    store = HistoryStore()
    store.request_sort("currency")
    store.set_filters(eur=False)
    token, _ = store.begin()
    store.commit(token, [make_entry(currency=c) for c in Currency])

    snapshot = store.snapshot()

    assert snapshot.sort_state.key == "currency"
    assert [entry.currency for entry in snapshot.view()] == [Currency.USD_BLUE, Currency.USD_OFICIAL]


def test_run_history_refresh_commits_rectangular_table():
    store = HistoryStore()
    aggregator = HistoricalRateAggregator(
        StubQuoteProvider(default=RateQuote(buy=1, sell=2)), today=lambda: FIXED_TODAY
    )

    snapshot = run_history_refresh(store, aggregator, lookback_business_days=10, min_date=MIN_DATE)

    assert snapshot.status == HistoryStatus.POPULATED
    assert len(snapshot.entries) == 30
    assert snapshot.generation == 1


def test_run_history_refresh_failure_empties_store_and_notifies():
    store = HistoryStore()
    token, _ = store.begin()
    store.commit(token, [make_entry()])
    notifier = NotificationService()

    snapshot = run_history_refresh(
        store,
        ExplodingAggregator(),
        lookback_business_days=10,
        min_date=MIN_DATE,
        notifier=notifier,
        translate=Translator("en").translate,
    )

    assert snapshot.status == HistoryStatus.EMPTY
    assert snapshot.entries == ()
    assert snapshot.last_error == "calendar unavailable"
    toast = notifier.state.toasts[0]
    assert toast.title == "History Unavailable"
    assert toast.variant == "destructive"
    assert "calendar unavailable" in toast.description


def test_slow_superseded_run_does_not_overwrite_newer_result():
    store = HistoryStore()
    started = threading.Event()
    release = threading.Event()

    class SlowAggregator:
        def fetch_history(self, lookback_business_days, min_date, *, cancel_event=None):
            started.set()
            release.wait(timeout=5)
            return [make_entry(currency=Currency.USD_OFICIAL)]

    class FastAggregator:
        def fetch_history(self, lookback_business_days, min_date, *, cancel_event=None):
            return [make_entry(currency=Currency.EUR)]

    results = {}
    worker = threading.Thread(
        target=lambda: results.setdefault(
            "slow",
            run_history_refresh(store, SlowAggregator(), lookback_business_days=1, min_date=MIN_DATE),
        )
    )
    worker.start()
    assert started.wait(timeout=5)

    run_history_refresh(store, FastAggregator(), lookback_business_days=1, min_date=MIN_DATE)
    release.set()
    worker.join(timeout=5)

    assert [entry.currency for entry in store.entries] == [Currency.EUR]
    assert store.generation == 2


def test_refresh_history_uses_app_collaborators(app):
    app.config["HISTORY_LOOKBACK_DAYS"] = 2

    snapshot = refresh_history(app)

    assert get_history_store(app).status == HistoryStatus.POPULATED
    assert len(snapshot.entries) == 6
