"""Named constructors for local (built-in and plugin) adapters."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import structlog

from resolvarr.domain.providers.base import ProviderProtocol
from resolvarr.domain.providers.exceptions import DuplicateProviderError

from .loader import discover_adapter_modules, load_adapter_module
from .moviebox import MovieboxProvider

log = structlog.get_logger(__name__)

AdapterFactory = Callable[..., ProviderProtocol]

BUILTIN_ADAPTERS: dict[str, AdapterFactory] = {
    MovieboxProvider.name: MovieboxProvider,
}


class AdapterFactoryRegistry:
    """Maps local adapter names to their constructors.

    Factories are called as ``factory(http_client, base_url=...,
    max_concurrent_seasons=...)``; ``HttpxProviderBase`` subclasses accept
    exactly that signature.
    """

    def __init__(self, factories: dict[str, AdapterFactory] | None = None) -> None:
        self._factories: dict[str, AdapterFactory] = {}
        for name, factory in (factories or {}).items():
            self.register(name, factory)

    @classmethod
    def with_builtins(cls) -> AdapterFactoryRegistry:
        return cls(BUILTIN_ADAPTERS)

    def register(self, name: str, factory: AdapterFactory) -> None:
        if not name:
            raise ValueError("Adapter name must not be empty")
        if name in self._factories:
            raise DuplicateProviderError(f"Adapter '{name}' already registered")
        self._factories[name] = factory

    def load_plugin_dir(self, plugin_dir: Path) -> list[str]:
        """Register every adapter module found in *plugin_dir*."""
        loaded: list[str] = []
        for path in discover_adapter_modules(plugin_dir):
            factory: Any = load_adapter_module(path)
            self.register(factory.name, factory)
            log.info("adapter_loaded", adapter=factory.name, adapter_file=str(path))
            loaded.append(factory.name)
        return loaded

    def get(self, name: str) -> AdapterFactory | None:
        return self._factories.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._factories

    def list_names(self) -> list[str]:
        return sorted(self._factories)
