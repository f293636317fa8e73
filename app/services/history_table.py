"""Ordering, filtering and sort-state transitions for the rate history table."""

from __future__ import annotations

from collections.abc import Iterable
from functools import cmp_to_key

from app.providers.schemas import (
    DEFAULT_SORT_DIRECTIONS,
    SORT_KEYS,
    FilterState,
    HistoricalRateEntry,
    SortState,
)


def _compare(a: int | object, b: int | object) -> int:
    return (a > b) - (a < b)  # type: ignore[operator]


def _entry_comparator(sort_state: SortState):
    flip = -1 if sort_state.direction == "desc" else 1

    def compare(left: HistoricalRateEntry, right: HistoricalRateEntry) -> int:
        if sort_state.key == "date":
            primary = _compare(left.date, right.date) * flip
            if primary:
                return primary
            # Same day: rank order regardless of direction.
            return _compare(left.currency.rank, right.currency.rank)

        primary = _compare(left.currency.rank, right.currency.rank) * flip
        if primary:
            return primary
        # Same currency: most recent first regardless of direction.
        return _compare(right.date, left.date)

    return compare


def sort_entries(
    entries: Iterable[HistoricalRateEntry], sort_state: SortState
) -> list[HistoricalRateEntry]:
    """Return a new list ordered by ``sort_state``; the input is left untouched."""

    return sorted(entries, key=cmp_to_key(_entry_comparator(sort_state)))


def filter_entries(
    entries: Iterable[HistoricalRateEntry], filter_state: FilterState
) -> list[HistoricalRateEntry]:
    """Keep entries whose currency is enabled in ``filter_state``, preserving order."""

    return [entry for entry in entries if filter_state.allows(entry.currency)]


def request_sort(current: SortState, key: str) -> SortState:
    """Flip direction on the same key; otherwise switch to the key's default direction."""

    if key not in SORT_KEYS:
        raise ValueError(f"Unknown sort key '{key}'")
    if key == current.key:
        return SortState(key=current.key, direction="asc" if current.direction == "desc" else "desc")
    return SortState(key=key, direction=DEFAULT_SORT_DIRECTIONS[key])  # type: ignore[arg-type]


def build_history_view(
    entries: Iterable[HistoricalRateEntry],
    sort_state: SortState,
    filter_state: FilterState,
) -> list[HistoricalRateEntry]:
    """Display pipeline: filter first, then sort."""

    return sort_entries(filter_entries(entries, filter_state), sort_state)
