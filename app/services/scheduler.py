"""Scheduler setup for periodic history refresh."""

from __future__ import annotations

import logging

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger
from flask import Flask

logger = logging.getLogger(__name__)

SCHEDULER_EXT_KEY = "apscheduler"


def _run_refresh(app: Flask) -> None:
    from app.services.history_store import refresh_history  # Local import to avoid circular

    with app.app_context():
        snapshot = refresh_history(app)
        logger.info(
            "Scheduled history refresh finished with status '%s' (%s entries)",
            snapshot.status.value,
            len(snapshot.entries),
        )


def init_scheduler(app: Flask) -> BackgroundScheduler | None:
    """Initialise APScheduler with the periodic history refresh job if enabled."""

    if not app.config.get("SCHEDULER_ENABLED", True):
        logger.info("Scheduler disabled via configuration.")
        return None

    if app.extensions.get(SCHEDULER_EXT_KEY):
        return app.extensions[SCHEDULER_EXT_KEY]

    timezone = app.config.get("SCHEDULER_TIMEZONE", app.config.get("APP_TIMEZONE", "UTC"))
    scheduler = BackgroundScheduler(timezone=timezone)
    cron_expr = app.config.get("HISTORY_REFRESH_CRON", "0 12 * * 1-5")
    trigger = CronTrigger.from_crontab(cron_expr, timezone=timezone)
    scheduler.add_job(
        _run_refresh, trigger=trigger, args=[app], id="refresh_history", replace_existing=True
    )
    scheduler.start()

    app.extensions[SCHEDULER_EXT_KEY] = scheduler
    logger.info("APScheduler started with cron '%s'", cron_expr)
    return scheduler


def shutdown_scheduler(app: Flask) -> None:
    sched = app.extensions.get(SCHEDULER_EXT_KEY)
    if sched and getattr(sched, "running", False):
        sched.shutdown(wait=False)
