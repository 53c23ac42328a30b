"""Turns a ``ProviderIdentity`` into a live adapter.

Local identities go through the adapter factory registry; remote identities
(and local ones when ``remote_only`` is set) become a
``RemoteProviderClient`` bound to the registry entry with the same id.
Adapters are created lazily and cached per identity.
"""

from __future__ import annotations

from typing import Mapping

import httpx
import structlog

from resolvarr.domain.providers.base import ProviderProtocol
from resolvarr.domain.providers.config import ProviderConfig
from resolvarr.domain.providers.exceptions import (
    ProviderConfigError,
    ProviderNotFoundError,
)
from resolvarr.domain.providers.identity import ProviderIdentity

from .constants import DEFAULT_MAX_CONCURRENT_SEASONS, DEFAULT_REMOTE_TIMEOUT
from .factories import AdapterFactoryRegistry
from .registry import ProviderRegistry
from .remote import RemoteProviderClient

log = structlog.get_logger(__name__)


class ProviderResolver:
    """Resolve provider identities against an immutable registry."""

    def __init__(
        self,
        registry: ProviderRegistry,
        factories: AdapterFactoryRegistry,
        http_client: httpx.AsyncClient,
        *,
        remote_only: bool = False,
        remote_timeout: float = DEFAULT_REMOTE_TIMEOUT,
        base_urls: Mapping[str, str] | None = None,
        max_concurrent_seasons: int = DEFAULT_MAX_CONCURRENT_SEASONS,
    ) -> None:
        self._registry = registry
        self._factories = factories
        self._http = http_client
        self._remote_only = remote_only
        self._remote_timeout = remote_timeout
        self._base_urls = dict(base_urls or {})
        self._max_concurrent_seasons = max_concurrent_seasons
        self._adapters: dict[ProviderIdentity, ProviderProtocol] = {}

    @property
    def remote_only(self) -> bool:
        return self._remote_only

    @property
    def registry(self) -> ProviderRegistry:
        return self._registry

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def lookup(self, identity: ProviderIdentity) -> ProviderProtocol | None:
        """Return the adapter for *identity*, or ``None`` if unresolvable."""
        cached = self._adapters.get(identity)
        if cached is not None:
            return cached

        if identity.is_local and not self._remote_only:
            adapter = self._build_local(identity)
        else:
            adapter = self._build_remote(identity)

        if adapter is not None:
            self._adapters[identity] = adapter
            log.debug(
                "provider_resolved",
                provider=str(identity),
                adapter=type(adapter).__name__,
            )
        return adapter

    def resolve(self, identity: ProviderIdentity) -> ProviderProtocol:
        adapter = self.lookup(identity)
        if adapter is None:
            raise ProviderNotFoundError(f"No provider for identity {identity}")
        return adapter

    def _build_local(self, identity: ProviderIdentity) -> ProviderProtocol | None:
        factory = self._factories.get(identity.id)
        if factory is None:
            return None
        return factory(
            self._http,
            base_url=self._base_urls.get(identity.id),
            max_concurrent_seasons=self._max_concurrent_seasons,
        )

    def _build_remote(self, identity: ProviderIdentity) -> ProviderProtocol | None:
        config = self._registry.get(identity.id)
        if config is None or not config.endpoint:
            return None
        return RemoteProviderClient(
            config,
            http_client=self._http,
            identity=identity,
            timeout=self._remote_timeout,
        )

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------

    def identity_for(self, provider_id: str) -> ProviderIdentity | None:
        """Map a bare provider id to the identity callers should use."""
        config = self._registry.get(provider_id)
        if config is not None:
            return config.identity
        if provider_id in self._factories:
            return ProviderIdentity.local(provider_id)
        return None

    def config_for(self, identity: ProviderIdentity) -> ProviderConfig | None:
        """Registry entry for *identity*, or one synthesized for a built-in."""
        config = self._registry.get(identity.id)
        if config is not None:
            return config
        if not identity.is_local:
            return None
        factory = self._factories.get(identity.id)
        if factory is None:
            return None
        return ProviderConfig(
            id=identity.id,
            kind="local",
            title=getattr(factory, "title", ""),
            language=getattr(factory, "language", ""),
        )

    def icon_url(self, identity: ProviderIdentity) -> str | None:
        config = self.config_for(identity)
        if config is None or not config.icon_url:
            return None
        return config.icon_url

    def list_identities(self) -> list[ProviderIdentity]:
        """Registry entries first, then unconfigured built-in adapters."""
        identities = [config.identity for config in self._registry]
        if not self._remote_only:
            identities.extend(
                ProviderIdentity.local(name)
                for name in self._factories.list_names()
                if name not in self._registry
            )
        return identities

    # ------------------------------------------------------------------
    # Startup checks / lifecycle
    # ------------------------------------------------------------------

    def validate(self) -> None:
        """Check every registry entry is dispatchable.

        Raises:
            ProviderConfigError: listing every problem found.
        """
        problems: list[str] = []
        for config in self._registry:
            needs_endpoint = config.kind == "remote" or self._remote_only
            if needs_endpoint and not config.endpoint:
                problems.append(f"{config.identity}: no endpoint configured")
            elif not needs_endpoint and config.id not in self._factories:
                problems.append(f"{config.identity}: no local adapter named {config.id!r}")

        if problems:
            log.error("provider_config_invalid", problems=problems)
            raise ProviderConfigError(problems)

        log.info(
            "providers_validated",
            count=len(self._registry),
            remote_only=self._remote_only,
        )

    async def aclose(self) -> None:
        """Release adapter-owned resources (shared client is not closed)."""
        for adapter in self._adapters.values():
            cleanup = getattr(adapter, "cleanup", None)
            if cleanup is not None:
                await cleanup()
        self._adapters.clear()
