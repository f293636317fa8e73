"""Route handlers for listing and dismissing toasts."""

from __future__ import annotations

from dataclasses import asdict
from typing import cast

from flask import current_app
from flask.views import MethodView

from app.errors import NotFoundError
from app.schemas import ErrorMessageSchema, ToastListSchema, ToastSchema
from app.services.notifications import NotificationService

from . import blp


def _service() -> NotificationService:
    return cast(NotificationService, current_app.extensions["notifications"])


@blp.route("")
class Notifications(MethodView):
    @blp.response(200, ToastListSchema())
    def get(self):
        return {"toasts": [asdict(toast) for toast in _service().state.toasts]}


@blp.route("/<string:toast_id>/dismiss")
class DismissNotification(MethodView):
    @blp.response(200, ToastSchema())
    @blp.alt_response(404, schema=ErrorMessageSchema, description="Unknown notification")
    def post(self, toast_id: str):
        service = _service()
        if service.get(toast_id) is None:
            raise NotFoundError(f"Notification '{toast_id}' not found.", payload={"id": toast_id})
        service.dismiss(toast_id)
        return asdict(service.get(toast_id))
