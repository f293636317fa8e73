"""Route handlers for daily quotes and the history table."""

from __future__ import annotations

from typing import Any, cast

from flask import current_app
from flask.views import MethodView

from app.i18n import Translator, get_translator
from app.providers.base import BaseQuoteProvider
from app.providers.schemas import DailyQuotes, HistoricalRateEntry, RateQuote
from app.schemas import (
    DailyQuotesSchema,
    FilterStateSchema,
    HistoryTableSchema,
    LocaleArgsSchema,
    SortRequestSchema,
)
from app.services.daily_quotes import fetch_daily_quotes
from app.services.history_store import (
    HistorySnapshot,
    HistoryStatus,
    get_history_store,
    refresh_history,
)
from app.utils.datetime import format_iso, local_today, parse_iso_date
from app.validation import validate_date, validate_sort_key

from . import blp


def _translator() -> Translator:
    return get_translator(current_app.config.get("DEFAULT_LOCALE", "en"))


def _rate_payload(rate: RateQuote) -> dict[str, Any]:
    return {"buy": rate.buy, "sell": rate.sell}


def _entry_payload(entry: HistoricalRateEntry, translator: Translator) -> dict[str, Any]:
    return {
        "id": entry.id,
        "date": entry.iso_date,
        "display_date": translator.format_short_date(entry.date),
        "currency": entry.currency.value,
        "label": translator.t(entry.currency.label_key),
        "rate": _rate_payload(entry.rate),
    }


def _history_payload(snapshot: HistorySnapshot, translator: Translator) -> dict[str, Any]:
    lookback = int(current_app.config.get("HISTORY_LOOKBACK_DAYS", 10))
    rows = snapshot.view()
    message = None
    if snapshot.status == HistoryStatus.LOADING:
        message = translator.t("historyLoadingText")
    elif snapshot.status == HistoryStatus.EMPTY:
        message = translator.t("historyNoDataText", days=lookback)

    return {
        "title": translator.t("historyCardTitle", days=lookback),
        "status": snapshot.status.value,
        "generation": snapshot.generation,
        "sort": {"key": snapshot.sort_state.key, "direction": snapshot.sort_state.direction},
        "filters": snapshot.filter_state.as_dict(),
        "entries": [_entry_payload(entry, translator) for entry in rows],
        "total_entries": len(snapshot.entries),
        "last_refreshed": snapshot.last_refreshed.isoformat() if snapshot.last_refreshed else None,
        "message": message,
    }


def _daily_payload(result: DailyQuotes, translator: Translator) -> dict[str, Any]:
    display_date = translator.format_long_date(result.quote_date or result.requested_date)
    quotes = []
    for currency, quote in result.quotes.items():
        quotes.append(
            {
                "currency": currency.value,
                "label": translator.t(currency.label_key),
                "available": quote is not None,
                "rate": _rate_payload(quote) if quote is not None else None,
            }
        )

    message = None
    if not result.has_data:
        message = translator.t("noExchangeRateDataGeneric", date=display_date)

    return {
        "requested_date": format_iso(result.requested_date),
        "quote_date": format_iso(result.quote_date) if result.quote_date else None,
        "display_date": display_date,
        "title": translator.t("ratesForDateText", date=display_date),
        "quotes": quotes,
        "errors": list(result.errors),
        "message": message,
    }


@blp.route("/<string:quote_date>")
class DailyRates(MethodView):
    @blp.arguments(LocaleArgsSchema, location="query")
    @blp.response(200, DailyQuotesSchema())
    def get(self, _args, quote_date: str):
        day = validate_date(quote_date)
        translator = _translator()
        app = current_app
        provider = cast(BaseQuoteProvider, app.extensions["quote_provider"])
        timezone = app.config.get("APP_TIMEZONE", "America/Argentina/Buenos_Aires")
        result = fetch_daily_quotes(
            provider,
            day,
            translator=translator,
            min_date=parse_iso_date(app.config.get("HISTORY_MIN_DATE", "2000-01-01")),
            notifier=app.extensions.get("notifications"),
            today=lambda: local_today(timezone),
        )
        return _daily_payload(result, translator)


@blp.route("/history")
class HistoryTable(MethodView):
    @blp.arguments(LocaleArgsSchema, location="query")
    @blp.response(200, HistoryTableSchema())
    def get(self, _args):
        """Current table; the first read triggers the initial aggregation."""

        translator = _translator()
        store = get_history_store(current_app)
        if store.status == HistoryStatus.IDLE:
            snapshot = refresh_history(current_app, translator)
        else:
            snapshot = store.snapshot()
        return _history_payload(snapshot, translator)


@blp.route("/history/refresh")
class HistoryRefresh(MethodView):
    @blp.arguments(LocaleArgsSchema, location="query")
    @blp.response(200, HistoryTableSchema())
    def post(self, _args):
        translator = _translator()
        snapshot = refresh_history(current_app, translator)
        return _history_payload(snapshot, translator)


@blp.route("/history/sort")
class HistorySort(MethodView):
    @blp.arguments(SortRequestSchema)
    @blp.response(200, HistoryTableSchema())
    def post(self, data):
        key = validate_sort_key(data.get("key"))
        store = get_history_store(current_app)
        store.request_sort(key)
        return _history_payload(store.snapshot(), _translator())


@blp.route("/history/filters")
class HistoryFilters(MethodView):
    @blp.arguments(FilterStateSchema)
    @blp.response(200, HistoryTableSchema())
    def put(self, data):
        store = get_history_store(current_app)
        store.set_filters(**data)
        return _history_payload(store.snapshot(), _translator())
