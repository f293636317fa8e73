"""CLI for printing the rolling rate history table."""

from __future__ import annotations

from decimal import Decimal

import click
from flask import current_app
from flask.cli import with_appcontext

from app.i18n import SUPPORTED_LOCALES, Translator
from app.providers.schemas import CURRENCIES, SORT_DIRECTIONS, SORT_KEYS, FilterState, SortState
from app.services.history_store import HistoryStatus, refresh_history
from app.services.history_table import build_history_view

FILTER_CHOICES = [currency.filter_key for currency in CURRENCIES]


def format_rate(value: Decimal | None, translator: Translator) -> str:
    if value is None:
        return translator.t("notAvailableShort")
    return f"{value:.2f}"


@click.command("fetch-history")
@click.option("--days", type=click.IntRange(min=0), default=None, help="Business days to cover")
@click.option("--sort", "sort_key", type=click.Choice(SORT_KEYS), default="date", show_default=True)
@click.option("--direction", type=click.Choice(SORT_DIRECTIONS), default=None)
@click.option(
    "--hide",
    type=click.Choice(FILTER_CHOICES),
    multiple=True,
    help="Currency to leave out of the table (repeatable)",
)
@click.option("--lang", type=click.Choice(SUPPORTED_LOCALES), default=None)
@with_appcontext
def fetch_history(
    days: int | None,
    sort_key: str,
    direction: str | None,
    hide: tuple[str, ...],
    lang: str | None,
) -> None:
    """Fetch the last business days of quotes and print them as a table."""

    app = current_app
    if days is not None:
        app.config["HISTORY_LOOKBACK_DAYS"] = days
    lookback = int(app.config.get("HISTORY_LOOKBACK_DAYS", 10))
    translator = Translator(lang or app.config.get("DEFAULT_LOCALE", "en"))

    click.echo(f"Fetching {lookback} business days of quotes...")
    snapshot = refresh_history(app, translator)
    if snapshot.status != HistoryStatus.POPULATED:
        raise click.ClickException(
            snapshot.last_error or translator.t("historyNoDataText", days=lookback)
        )

    default_direction = "desc" if sort_key == "date" else "asc"
    sort_state = SortState(key=sort_key, direction=direction or default_direction)  # type: ignore[arg-type]
    filter_state = FilterState().updated({key: False for key in hide})

    click.echo(translator.t("historyCardTitle", days=lookback))
    header = (
        f"{translator.t('historyTableDate'):<12}"
        f"{translator.t('historyTableCurrency'):<18}"
        f"{translator.t('historyTableBuy'):>12}"
        f"{translator.t('historyTableSell'):>12}"
    )
    click.echo(header)
    click.echo("-" * len(header))
    for entry in build_history_view(snapshot.entries, sort_state, filter_state):
        click.echo(
            f"{translator.format_short_date(entry.date):<12}"
            f"{translator.t(entry.currency.label_key):<18}"
            f"{format_rate(entry.rate.buy, translator):>12}"
            f"{format_rate(entry.rate.sell, translator):>12}"
        )
