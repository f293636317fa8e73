"""CLI entry points."""

from __future__ import annotations

from flask import Flask

from .history import fetch_history
from .quotes import show_quotes


def register_cli(app: Flask) -> None:
    """Register CLI commands on the given Flask app."""

    app.cli.add_command(fetch_history)
    app.cli.add_command(show_quotes)
