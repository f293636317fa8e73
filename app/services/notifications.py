"""User-facing toast notifications with an explicit subscribe/dispatch interface."""

from __future__ import annotations

import itertools
import logging
import threading
from dataclasses import dataclass, field, replace
from typing import Callable, Literal

logger = logging.getLogger(__name__)

TOAST_LIMIT = 1
DEFAULT_DURATION_MS = 5000

ToastVariant = Literal["default", "destructive"]
NotificationKind = Literal["error", "info"]

KIND_VARIANTS: dict[str, ToastVariant] = {"error": "destructive", "info": "default"}


@dataclass(frozen=True)
class Toast:
    id: str
    title: str
    description: str = ""
    variant: ToastVariant = "default"
    duration_ms: int = DEFAULT_DURATION_MS
    open: bool = True


@dataclass(frozen=True)
class ToastState:
    toasts: tuple[Toast, ...] = ()


@dataclass(frozen=True)
class ToastAction:
    type: Literal["ADD_TOAST", "UPDATE_TOAST", "DISMISS_TOAST", "REMOVE_TOAST"]
    toast: Toast | None = None
    toast_id: str | None = None
    changes: dict = field(default_factory=dict)


def reduce_toasts(state: ToastState, action: ToastAction) -> ToastState:
    """Pure reducer for the toast queue."""

    if action.type == "ADD_TOAST":
        if action.toast is None:
            raise ValueError("ADD_TOAST requires a toast")
        return ToastState(toasts=((action.toast,) + state.toasts)[:TOAST_LIMIT])

    if action.type == "UPDATE_TOAST":
        return ToastState(
            toasts=tuple(
                replace(toast, **action.changes) if toast.id == action.toast_id else toast
                for toast in state.toasts
            )
        )

    if action.type == "DISMISS_TOAST":
        return ToastState(
            toasts=tuple(
                replace(toast, open=False)
                if action.toast_id is None or toast.id == action.toast_id
                else toast
                for toast in state.toasts
            )
        )

    if action.type == "REMOVE_TOAST":
        if action.toast_id is None:
            return ToastState()
        return ToastState(toasts=tuple(t for t in state.toasts if t.id != action.toast_id))

    raise ValueError(f"Unknown toast action '{action.type}'")


Listener = Callable[[ToastState], None]


class NotificationService:
    """Holds the toast queue for one application and fans updates out to listeners."""

    def __init__(self) -> None:
        self._state = ToastState()
        self._listeners: list[Listener] = []
        self._lock = threading.Lock()
        self._ids = itertools.count(1)

    @property
    def state(self) -> ToastState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener``; the returned callable unsubscribes it."""

        with self._lock:
            self._listeners.append(listener)

        def _unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return _unsubscribe

    def dispatch(self, action: ToastAction) -> ToastState:
        with self._lock:
            self._state = reduce_toasts(self._state, action)
            state = self._state
            listeners = list(self._listeners)

        for listener in listeners:
            try:
                listener(state)
            except Exception:
                logger.exception("Notification listener %r failed", listener)
        return state

    def toast(
        self,
        title: str,
        description: str = "",
        *,
        variant: ToastVariant = "default",
        duration_ms: int = DEFAULT_DURATION_MS,
    ) -> str:
        toast_id = str(next(self._ids))
        self.dispatch(
            ToastAction(
                type="ADD_TOAST",
                toast=Toast(
                    id=toast_id,
                    title=title,
                    description=description,
                    variant=variant,
                    duration_ms=duration_ms,
                ),
            )
        )
        return toast_id

    def notify(self, kind: NotificationKind, title: str, detail: str) -> str | None:
        """Fire-and-forget notification; never raises into the caller."""

        try:
            return self.toast(title, detail, variant=KIND_VARIANTS.get(kind, "default"))
        except Exception:
            logger.exception("Failed to publish %s notification '%s'", kind, title)
            return None

    def update(self, toast_id: str, **changes) -> ToastState:
        return self.dispatch(ToastAction(type="UPDATE_TOAST", toast_id=toast_id, changes=changes))

    def dismiss(self, toast_id: str | None = None) -> ToastState:
        return self.dispatch(ToastAction(type="DISMISS_TOAST", toast_id=toast_id))

    def remove(self, toast_id: str | None = None) -> ToastState:
        return self.dispatch(ToastAction(type="REMOVE_TOAST", toast_id=toast_id))

    def get(self, toast_id: str) -> Toast | None:
        return next((toast for toast in self._state.toasts if toast.id == toast_id), None)


def init_notifications(app) -> NotificationService:
    """Create the application's notification service."""

    service = NotificationService()
    app.extensions["notifications"] = service
    return service
