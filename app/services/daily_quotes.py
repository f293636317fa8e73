"""Quotes for every currency on one user-selected date."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date
from time import perf_counter

from app.errors import ValidationError
from app.i18n import Translator
from app.logging import quote_log_extra
from app.providers.base import BaseQuoteProvider, ProviderError, QuoteUnavailableError
from app.providers.schemas import CURRENCIES, Currency, DailyQuotes, RateQuote
from app.services.notifications import NotificationService
from app.utils.datetime import format_iso, local_today

logger = logging.getLogger(__name__)


def validate_quote_date(
    day: date,
    *,
    today: date,
    min_date: date,
    translator: Translator,
    notifier: NotificationService | None = None,
) -> date:
    """Reject future dates and dates before ``min_date``."""

    if day > today:
        detail = translator.t("toastInvalidDateDescriptionFuture")
    elif day < min_date:
        detail = translator.t(
            "toastInvalidDateDescriptionPast", date=translator.format_short_date(min_date)
        )
    else:
        return day

    if notifier is not None:
        notifier.notify("error", translator.t("toastInvalidDateTitle"), detail)
    raise ValidationError(detail, payload={"field": "date", "date": format_iso(day)})


def fetch_daily_quotes(
    provider: BaseQuoteProvider,
    day: date,
    *,
    translator: Translator,
    min_date: date,
    notifier: NotificationService | None = None,
    today: Callable[[], date] = local_today,
) -> DailyQuotes:
    """Look up all currencies for ``day``; partial failures are reported, not raised."""

    validate_quote_date(
        day, today=today(), min_date=min_date, translator=translator, notifier=notifier
    )

    provider_name = getattr(provider, "name", provider.__class__.__name__)
    display_date = translator.format_short_date(day)
    quotes: dict[Currency, RateQuote | None] = {}
    errors: list[str] = []

    for currency in CURRENCIES:
        label = translator.t(currency.label_key)
        start = perf_counter()
        try:
            quote = provider.get_quote(currency, day)
        except ProviderError as exc:
            quotes[currency] = None
            if isinstance(exc, QuoteUnavailableError):
                errors.append(
                    translator.t("noExchangeRateDataSpecific", currency=label, date=display_date)
                )
            else:
                errors.append(
                    translator.t("apiErrorLine", currency=label, date=display_date, detail=str(exc))
                )
            logger.info(
                "Daily %s quote unavailable: %s",
                currency.value,
                exc,
                extra=quote_log_extra(
                    provider=provider_name,
                    currency=currency.value,
                    quote_date=format_iso(day),
                    status="missing",
                    duration_ms=(perf_counter() - start) * 1000,
                    error=str(exc),
                ),
            )
            continue

        quotes[currency] = quote
        logger.debug(
            "Daily %s quote fetched",
            currency.value,
            extra=quote_log_extra(
                provider=provider_name,
                currency=currency.value,
                quote_date=format_iso(day),
                status="success",
                duration_ms=(perf_counter() - start) * 1000,
            ),
        )

    result = DailyQuotes(
        requested_date=day,
        quotes=quotes,
        quote_date=day if any(q is not None for q in quotes.values()) else None,
        errors=errors,
    )

    if errors and not result.has_data and notifier is not None:
        notifier.notify(
            "error",
            translator.t("apiErrorsTitle"),
            "\n".join(translator.t("apiErrorsDescriptionItem", error=error) for error in errors),
        )
    return result
