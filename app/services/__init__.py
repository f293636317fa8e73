"""Service layer modules."""

from .daily_quotes import fetch_daily_quotes, validate_quote_date
from .history_aggregator import HistoricalRateAggregator, HistoryCancelled
from .history_store import (
    HistorySnapshot,
    HistoryStatus,
    HistoryStore,
    get_history_store,
    init_history,
    refresh_history,
    run_history_refresh,
)
from .history_table import build_history_view, filter_entries, request_sort, sort_entries
from .notifications import NotificationService, init_notifications
from .scheduler import init_scheduler, shutdown_scheduler
