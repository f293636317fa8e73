"""Schemas for API requests and responses."""

from __future__ import annotations

from marshmallow import Schema, fields, validate

from app.i18n import SUPPORTED_LOCALES
from app.providers.schemas import SORT_DIRECTIONS, SORT_KEYS


class HealthStatusSchema(Schema):
    status = fields.String(required=True)
    app = fields.String()


class HealthHistorySchema(Schema):
    status = fields.String(required=True)
    generation = fields.Integer(required=True)
    entries = fields.Integer(required=True)
    last_refreshed = fields.String(allow_none=True)
    last_error = fields.String(allow_none=True)


class LocaleArgsSchema(Schema):
    lang = fields.String(load_default=None, validate=validate.OneOf(SUPPORTED_LOCALES))


class RateQuoteSchema(Schema):
    buy = fields.Float(allow_none=True)
    sell = fields.Float(allow_none=True)


class DailyQuoteSchema(Schema):
    currency = fields.String(required=True)
    label = fields.String(required=True)
    available = fields.Boolean(required=True)
    rate = fields.Nested(RateQuoteSchema, allow_none=True)


class DailyQuotesSchema(Schema):
    requested_date = fields.String(required=True)
    quote_date = fields.String(allow_none=True)
    display_date = fields.String(required=True)
    title = fields.String(required=True)
    quotes = fields.List(fields.Nested(DailyQuoteSchema), required=True)
    errors = fields.List(fields.String(), required=True)
    message = fields.String(allow_none=True)


class HistoryEntrySchema(Schema):
    id = fields.String(required=True)
    date = fields.String(required=True)
    display_date = fields.String(required=True)
    currency = fields.String(required=True)
    label = fields.String(required=True)
    rate = fields.Nested(RateQuoteSchema, required=True)


class SortStateSchema(Schema):
    key = fields.String(required=True, validate=validate.OneOf(SORT_KEYS))
    direction = fields.String(required=True, validate=validate.OneOf(SORT_DIRECTIONS))


class FilterStateSchema(Schema):
    usd_blue = fields.Boolean(load_default=None, allow_none=True)
    usd_oficial = fields.Boolean(load_default=None, allow_none=True)
    eur = fields.Boolean(load_default=None, allow_none=True)


class SortRequestSchema(Schema):
    key = fields.String(required=True, validate=validate.OneOf(SORT_KEYS))


class HistoryTableSchema(Schema):
    title = fields.String(required=True)
    status = fields.String(required=True)
    generation = fields.Integer(required=True)
    sort = fields.Nested(SortStateSchema, required=True)
    filters = fields.Nested(FilterStateSchema, required=True)
    entries = fields.List(fields.Nested(HistoryEntrySchema), required=True)
    total_entries = fields.Integer(required=True)
    last_refreshed = fields.String(allow_none=True)
    message = fields.String(allow_none=True)


class ToastSchema(Schema):
    id = fields.String(required=True)
    title = fields.String(required=True)
    description = fields.String()
    variant = fields.String(required=True)
    duration_ms = fields.Integer()
    open = fields.Boolean(required=True)


class ToastListSchema(Schema):
    toasts = fields.List(fields.Nested(ToastSchema), required=True)


class ErrorMessageSchema(Schema):
    message = fields.String(required=True)
