"""Notifications blueprint exposing the toast queue."""

from __future__ import annotations

from flask_smorest import Blueprint

blp = Blueprint("Notifications", __name__, description="User-facing notifications")

from . import routes  # noqa: E402,F401
