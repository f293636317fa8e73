"""CLI for printing the quotes of one date."""

from __future__ import annotations

import click
from flask import current_app
from flask.cli import with_appcontext

from app.i18n import SUPPORTED_LOCALES, Translator
from app.services.daily_quotes import fetch_daily_quotes
from app.utils.datetime import local_today, parse_iso_date

from .history import format_rate


@click.command("quotes")
@click.argument("quote_date", type=click.DateTime(formats=["%Y-%m-%d"]))
@click.option("--lang", type=click.Choice(SUPPORTED_LOCALES), default=None)
@with_appcontext
def show_quotes(quote_date, lang: str | None) -> None:
    """Print USD (Blue), USD (Oficial) and EUR quotes for QUOTE_DATE."""

    app = current_app
    translator = Translator(lang or app.config.get("DEFAULT_LOCALE", "en"))
    timezone = app.config.get("APP_TIMEZONE", "America/Argentina/Buenos_Aires")
    result = fetch_daily_quotes(
        app.extensions["quote_provider"],
        quote_date.date(),
        translator=translator,
        min_date=parse_iso_date(app.config.get("HISTORY_MIN_DATE", "2000-01-01")),
        today=lambda: local_today(timezone),
    )

    click.echo(translator.t("ratesForDateText", date=translator.format_long_date(result.requested_date)))
    for currency, quote in result.quotes.items():
        label = translator.t(currency.label_key)
        if quote is None:
            click.echo(f"  {label}: {translator.t('dataNotAvailableOnDate', currency=label)}")
            continue
        click.echo(
            f"  {label}: {translator.t('compraShort')} {format_rate(quote.buy, translator)} ARS"
            f" / {translator.t('ventaShort')} {format_rate(quote.sell, translator)} ARS"
        )
    for error in result.errors:
        click.echo(f"  ! {error}", err=True)
