"""Port for turning a provider identity into a live adapter."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from resolvarr.domain.providers.base import ProviderProtocol
from resolvarr.domain.providers.config import ProviderConfig
from resolvarr.domain.providers.identity import ProviderIdentity


@runtime_checkable
class ProviderResolverPort(Protocol):
    """Synchronous interface for provider resolution and metadata lookup."""

    def lookup(self, identity: ProviderIdentity) -> ProviderProtocol | None: ...
    def resolve(self, identity: ProviderIdentity) -> ProviderProtocol: ...
    def identity_for(self, provider_id: str) -> ProviderIdentity | None: ...
    def config_for(self, identity: ProviderIdentity) -> ProviderConfig | None: ...
    def list_identities(self) -> list[ProviderIdentity]: ...
