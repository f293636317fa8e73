"""Application configuration classes."""

from __future__ import annotations

import os
from datetime import date

SUPPORTED_QUOTE_PROVIDERS = {"argentinadatos", "mock"}
PROVIDER_ALIASES = {"argentina_datos": "argentinadatos"}
SUPPORTED_LOCALES = ("en", "es")


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name)
    return value if value is not None else default


class BaseConfig:
    """Base configuration shared across environments."""

    SCHEDULER_ENABLED = _get_env("SCHEDULER_ENABLED", "true").lower() == "true"
    HISTORY_REFRESH_CRON = _get_env("HISTORY_REFRESH_CRON", "0 12 * * 1-5")

    APP_NAME = "peso-watcher"
    SECRET_KEY = _get_env("SECRET_KEY", "change-me")
    APP_TIMEZONE = _get_env("APP_TIMEZONE", "America/Argentina/Buenos_Aires")
    SCHEDULER_TIMEZONE = _get_env("SCHEDULER_TIMEZONE", APP_TIMEZONE)
    REQUEST_TIMEOUT_SECONDS = float(_get_env("REQUEST_TIMEOUT_SECONDS", "5"))
    QUOTE_PROVIDER = _get_env("QUOTE_PROVIDER", "argentinadatos")
    ARGENTINADATOS_API_BASE_URL = _get_env(
        "ARGENTINADATOS_API_BASE_URL", "https://api.argentinadatos.com/v1"
    )
    HISTORY_LOOKBACK_DAYS = int(_get_env("HISTORY_LOOKBACK_DAYS", "10"))
    HISTORY_MIN_DATE = _get_env("HISTORY_MIN_DATE", "2000-01-01")
    HISTORY_MAX_WORKERS = int(_get_env("HISTORY_MAX_WORKERS", "4"))
    DEFAULT_LOCALE = _get_env("DEFAULT_LOCALE", "en")
    LOG_LEVEL = _get_env("LOG_LEVEL", "INFO")
    LOG_JSON_ENABLED = _get_env("LOG_JSON_ENABLED", "false").lower() == "true"
    LOG_FORMAT = _get_env("LOG_FORMAT", "%(asctime)s %(levelname)s [%(name)s] %(message)s")


class DevelopmentConfig(BaseConfig):
    """Configuration for local development."""

    DEBUG = True
    TESTING = False


class ProductionConfig(BaseConfig):
    """Configuration for production deployments."""

    DEBUG = False
    TESTING = False


class TestingConfig(BaseConfig):
    """Configuration used by the test-suite: offline provider, no scheduler."""

    DEBUG = False
    TESTING = True
    SCHEDULER_ENABLED = False
    QUOTE_PROVIDER = "mock"


CONFIG_BY_ENV = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
}


def get_config(config_name: str | None = None) -> type[BaseConfig]:
    """Return the config class for the requested environment.

    Args:
        config_name: Optional explicit config identifier. If omitted, the
            APP_ENV environment variable is consulted.

    Raises:
        KeyError: If the requested configuration is not defined.
        ValueError: If the provider, locale or history bounds are invalid.
    """

    env_candidate = config_name if config_name is not None else os.getenv("APP_ENV", "development")
    env_name = (env_candidate or "development").lower()
    try:
        config_cls = CONFIG_BY_ENV[env_name]
    except KeyError as exc:
        raise KeyError(f"Unknown APP_ENV '{env_name}'") from exc

    _validate_provider(config_cls)
    _validate_history(config_cls)
    _validate_locale(config_cls)
    return config_cls


def _validate_provider(config_cls: type[BaseConfig]) -> None:
    normalized = _normalize_provider(config_cls.QUOTE_PROVIDER)
    if normalized not in SUPPORTED_QUOTE_PROVIDERS:
        raise ValueError(
            f"Unsupported QUOTE_PROVIDER '{config_cls.QUOTE_PROVIDER}'. "
            f"Allowed values: {sorted(SUPPORTED_QUOTE_PROVIDERS)}"
        )
    config_cls.QUOTE_PROVIDER = normalized


def _validate_history(config_cls: type[BaseConfig]) -> None:
    raw_min_date = config_cls.HISTORY_MIN_DATE
    if not isinstance(raw_min_date, date):
        try:
            date.fromisoformat(str(raw_min_date))
        except ValueError as exc:
            raise ValueError(
                f"HISTORY_MIN_DATE must be an ISO date (YYYY-MM-DD), got '{raw_min_date}'"
            ) from exc

    if config_cls.HISTORY_LOOKBACK_DAYS < 0:
        raise ValueError("HISTORY_LOOKBACK_DAYS cannot be negative")
    if config_cls.HISTORY_MAX_WORKERS < 1:
        raise ValueError("HISTORY_MAX_WORKERS must be at least 1")


def _validate_locale(config_cls: type[BaseConfig]) -> None:
    locale = (config_cls.DEFAULT_LOCALE or "").strip().lower()
    if locale not in SUPPORTED_LOCALES:
        raise ValueError(
            f"Unsupported DEFAULT_LOCALE '{config_cls.DEFAULT_LOCALE}'. "
            f"Allowed values: {list(SUPPORTED_LOCALES)}"
        )
    config_cls.DEFAULT_LOCALE = locale


def _normalize_provider(value: str | None) -> str:
    if not value:
        return ""
    normalized = value.lower()
    return PROVIDER_ALIASES.get(normalized, normalized)
