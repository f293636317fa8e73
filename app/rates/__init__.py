"""Rates blueprint: daily quotes and the rolling history table."""

from __future__ import annotations

from flask_smorest import Blueprint

blp = Blueprint("Rates", __name__, description="Peso quotation endpoints")

from . import routes  # noqa: E402,F401
