"""Registry and factory for quotation providers."""

from __future__ import annotations

import os
from typing import Callable, Dict, Iterable, List

from .base import BaseQuoteProvider, ProviderError

ProviderFactory = Callable[[], BaseQuoteProvider]

_PROVIDER_FACTORIES: Dict[str, ProviderFactory] = {}


def _default_factories() -> Iterable[tuple[str, ProviderFactory]]:
    from flask import current_app

    from .argentinadatos_provider import ArgentinaDatosProvider
    from .mock import MockQuoteProvider

    factories: list[tuple[str, ProviderFactory]] = [
        (MockQuoteProvider.name, MockQuoteProvider),
    ]

    def argentinadatos_factory() -> ArgentinaDatosProvider:
        return ArgentinaDatosProvider.from_config(current_app.config)

    factories.append((ArgentinaDatosProvider.name, argentinadatos_factory))
    return factories


def register_provider(name: str, factory: ProviderFactory) -> None:
    """Register a provider factory under the given name."""

    if not name:
        raise ValueError("Provider name cannot be empty.")
    _PROVIDER_FACTORIES[name.lower()] = factory


def list_providers() -> List[str]:
    """Return the list of registered provider identifiers."""

    return sorted(_PROVIDER_FACTORIES.keys())


def _resolve_name(name: str | None = None) -> str:
    return (name or os.getenv("QUOTE_PROVIDER") or "mock").lower()


def get_provider(name: str | None = None) -> BaseQuoteProvider:
    """Instantiate a provider using the supplied or configured name."""

    provider_name = _resolve_name(name)
    try:
        factory = _PROVIDER_FACTORIES[provider_name]
    except KeyError as exc:
        available = ", ".join(list_providers()) or "none registered"
        raise ProviderError(
            f"Unknown provider '{provider_name}'. Available providers: {available}"
        ) from exc
    return factory()


def init_provider(app) -> BaseQuoteProvider:
    """Attach the configured provider to the Flask app."""

    with app.app_context():
        provider = get_provider(app.config.get("QUOTE_PROVIDER"))
    app.extensions["quote_provider"] = provider
    return provider


def reset_registry(default_factories: Iterable[tuple[str, ProviderFactory]] | None = None) -> None:
    """Reset provider registry; useful for tests."""

    _PROVIDER_FACTORIES.clear()

    factories = default_factories or _default_factories()
    for name, factory in factories:
        register_provider(name, factory)


reset_registry()
