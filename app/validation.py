"""Validation helpers for request arguments."""

from __future__ import annotations

from datetime import date

from app.errors import ValidationError
from app.providers.schemas import SORT_KEYS
from app.utils.datetime import parse_iso_date


def validate_date(value: str | None, *, field: str = "date") -> date:
    """Parse a ``YYYY-MM-DD`` value or raise a 422 naming the field."""

    if value is None or not str(value).strip():
        raise ValidationError(f"'{field}' is required.", payload={"field": field})
    try:
        return parse_iso_date(value)
    except ValueError as exc:
        raise ValidationError(
            f"Invalid date '{value}'. Expected format YYYY-MM-DD.",
            payload={"field": field},
        ) from exc


def validate_sort_key(value: str | None, *, field: str = "key") -> str:
    normalized = (value or "").strip().lower()
    if normalized not in SORT_KEYS:
        raise ValidationError(
            f"Unsupported sort key '{value}'. Allowed values: {', '.join(SORT_KEYS)}.",
            payload={"field": field},
        )
    return normalized
