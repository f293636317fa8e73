"""Route handlers for health checks."""

from __future__ import annotations

from flask import current_app
from flask.views import MethodView

from app.schemas import HealthHistorySchema, HealthStatusSchema
from app.services.history_store import get_history_store

from . import blp


@blp.route("")
class HealthStatus(MethodView):
    @blp.response(200, HealthStatusSchema())
    def get(self):
        return {
            "status": "ok",
            "app": current_app.config.get("APP_NAME", "peso-watcher"),
        }


@blp.route("/history")
class HealthHistory(MethodView):
    @blp.response(200, HealthHistorySchema())
    def get(self):
        snapshot = get_history_store(current_app).snapshot()
        return {
            "status": snapshot.status.value,
            "generation": snapshot.generation,
            "entries": len(snapshot.entries),
            "last_refreshed": (
                snapshot.last_refreshed.isoformat() if snapshot.last_refreshed else None
            ),
            "last_error": snapshot.last_error,
        }
