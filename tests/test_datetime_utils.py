from __future__ import annotations

from datetime import date, datetime

import pytest

from app.utils.datetime import (
    business_days_back,
    format_iso,
    format_path,
    is_weekend,
    local_today,
    parse_iso_date,
    subtract_days,
    yesterday,
)


def test_is_weekend_flags_saturday_and_sunday_only():
    assert is_weekend(date(2024, 5, 11))
    assert is_weekend(date(2024, 5, 12))
    assert not is_weekend(date(2024, 5, 10))
    assert not is_weekend(date(2024, 5, 13))


def test_subtract_days_crosses_month_boundary():
    assert subtract_days(date(2024, 3, 1), 1) == date(2024, 2, 29)
    assert yesterday(date(2024, 1, 1)) == date(2023, 12, 31)


def test_formatting_helpers_zero_pad():
    assert format_iso(date(2024, 5, 3)) == "2024-05-03"
    assert format_path(date(2024, 5, 3)) == "2024/05/03"


def test_parse_iso_date_accepts_strings_dates_and_datetimes():
    assert parse_iso_date("2024-05-03") == date(2024, 5, 3)
    assert parse_iso_date(date(2024, 5, 3)) == date(2024, 5, 3)
    assert parse_iso_date(datetime(2024, 5, 3, 23, 59)) == date(2024, 5, 3)
    with pytest.raises(ValueError):
        parse_iso_date("03/05/2024")


def test_local_today_returns_a_date():
    assert isinstance(local_today("UTC"), date)


def test_business_days_back_skips_weekends():
    days = business_days_back(date(2024, 5, 14), 10, date(2000, 1, 1))

    assert days == [
        date(2024, 5, 14),
        date(2024, 5, 13),
        date(2024, 5, 10),
        date(2024, 5, 9),
        date(2024, 5, 8),
        date(2024, 5, 7),
        date(2024, 5, 6),
        date(2024, 5, 3),
        date(2024, 5, 2),
        date(2024, 5, 1),
    ]
    assert (days[0] - days[-1]).days == 13


def test_business_days_back_stops_at_min_date():
    days = business_days_back(date(2024, 5, 14), 10, date(2024, 5, 9))

    assert days == [date(2024, 5, 14), date(2024, 5, 13), date(2024, 5, 10), date(2024, 5, 9)]


def test_business_days_back_handles_zero_and_rejects_negative():
    assert business_days_back(date(2024, 5, 14), 0, date(2000, 1, 1)) == []
    with pytest.raises(ValueError):
        business_days_back(date(2024, 5, 14), -1, date(2000, 1, 1))
