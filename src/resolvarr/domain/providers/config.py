"""Registry entry describing one configured provider."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from .identity import ProviderIdentity, ProviderKind

Capability = Literal["movies", "shows", "search", "home"]

ALL_CAPABILITIES: frozenset[Capability] = frozenset(
    {"movies", "shows", "search", "home"}
)


@dataclass(frozen=True)
class ProviderConfig:
    """Dispatch kind plus endpoint/icon metadata for a provider id."""

    id: str
    kind: ProviderKind
    endpoint: str | None = None
    icon_url: str = ""
    title: str = ""
    language: str = ""
    capabilities: frozenset[Capability] = field(default=ALL_CAPABILITIES)

    @property
    def identity(self) -> ProviderIdentity:
        return ProviderIdentity(kind=self.kind, id=self.id)

    @property
    def display_title(self) -> str:
        return self.title or self.id

    def supports(self, capability: Capability) -> bool:
        return capability in self.capabilities
