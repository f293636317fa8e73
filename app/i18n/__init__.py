"""
Internationalization helpers.

Translations are loaded once from ``locales/*.json``. A :class:`Translator` is
bound to one locale and passed explicitly to the code that needs labels, so
the quote and history services never reach for ambient request state.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Any, Mapping

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "en"
SUPPORTED_LOCALES: tuple[str, ...] = ("en", "es")

_LOCALES_DIR = Path(__file__).parent / "locales"

MONTH_NAMES: dict[str, tuple[str, ...]] = {
    "en": (
        "January", "February", "March", "April", "May", "June",
        "July", "August", "September", "October", "November", "December",
    ),
    "es": (
        "enero", "febrero", "marzo", "abril", "mayo", "junio",
        "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre",
    ),
}

SHORT_DATE_FORMATS: dict[str, str] = {"en": "%m/%d/%Y", "es": "%d/%m/%Y"}


def _load_translations() -> dict[str, dict[str, str]]:
    translations: dict[str, dict[str, str]] = {}
    for locale_file in sorted(_LOCALES_DIR.glob("*.json")):
        with locale_file.open("r", encoding="utf-8") as handle:
            translations[locale_file.stem] = json.load(handle)
    return translations


_TRANSLATIONS = _load_translations()


def normalize_locale(value: str | None) -> str | None:
    """Map ``es-AR``/``ES`` style tags onto a supported locale, or None."""

    if not value:
        return None
    primary = str(value).strip().lower().replace("_", "-").split("-")[0]
    return primary if primary in SUPPORTED_LOCALES else None


@dataclass(frozen=True)
class Translator:
    """Key-based string lookup for a single locale.

    Fallback chain: requested locale -> ``en`` -> the key itself.
    ``{{name}}`` placeholders are replaced from keyword arguments.
    """

    locale: str = DEFAULT_LOCALE

    def __post_init__(self) -> None:
        object.__setattr__(self, "locale", normalize_locale(self.locale) or DEFAULT_LOCALE)

    def t(self, key: str, **params: Any) -> str:
        template = _lookup(self.locale, key)
        if template is None and self.locale != DEFAULT_LOCALE:
            template = _lookup(DEFAULT_LOCALE, key)
        if template is None:
            template = key
        return _interpolate(template, params)

    def translate(self, key: str, params: Mapping[str, Any] | None = None) -> str:
        return self.t(key, **dict(params or {}))

    __call__ = translate

    def format_short_date(self, value: date) -> str:
        return value.strftime(SHORT_DATE_FORMATS.get(self.locale, SHORT_DATE_FORMATS[DEFAULT_LOCALE]))

    def format_long_date(self, value: date) -> str:
        month = MONTH_NAMES.get(self.locale, MONTH_NAMES[DEFAULT_LOCALE])[value.month - 1]
        if self.locale == "es":
            return f"{value.day} de {month} de {value.year}"
        return f"{month} {value.day}, {value.year}"


def _lookup(locale: str, key: str) -> str | None:
    value = _TRANSLATIONS.get(locale, {}).get(key)
    return value if isinstance(value, str) and value else None


def _interpolate(template: str, params: Mapping[str, Any]) -> str:
    result = template
    for name, value in params.items():
        result = result.replace("{{" + name + "}}", "" if value is None else str(value))
    return result


def available_keys(locale: str = DEFAULT_LOCALE) -> set[str]:
    return set(_TRANSLATIONS.get(locale, {}))


def get_translator(default_locale: str = DEFAULT_LOCALE) -> Translator:
    """Resolve the locale for the current request.

    ``?lang=`` wins, then ``Accept-Language``, then ``default_locale``.
    Callers validate explicit ``lang`` values before reaching this point.
    """

    from flask import has_request_context, request

    if has_request_context():
        explicit = normalize_locale(request.args.get("lang"))
        if explicit:
            return Translator(explicit)
        best = request.accept_languages.best_match(SUPPORTED_LOCALES)
        if best:
            return Translator(best)
    return Translator(default_locale)
