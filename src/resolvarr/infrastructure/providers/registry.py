"""Immutable table of provider configurations.

Built once at startup and handed to the resolver; never mutated afterwards,
so concurrent readers need no locking.
"""

from __future__ import annotations

from typing import Iterable, Iterator

from resolvarr.domain.providers.config import ProviderConfig
from resolvarr.domain.providers.exceptions import DuplicateProviderError


class ProviderRegistry:
    """Read-only lookup of ``ProviderConfig`` by id (exact match)."""

    __slots__ = ("_configs", "_by_id")

    def __init__(self, configs: Iterable[ProviderConfig] = ()) -> None:
        by_id: dict[str, ProviderConfig] = {}
        ordered: list[ProviderConfig] = []
        for config in configs:
            if config.id in by_id:
                raise DuplicateProviderError(
                    f"Provider id '{config.id}' configured twice"
                )
            by_id[config.id] = config
            ordered.append(config)
        self._configs = tuple(ordered)
        self._by_id = by_id

    def get(self, provider_id: str) -> ProviderConfig | None:
        return self._by_id.get(provider_id)

    def ids(self) -> list[str]:
        return [c.id for c in self._configs]

    def merged(self, configs: Iterable[ProviderConfig]) -> ProviderRegistry:
        """New registry with *configs* appended (duplicates still rejected)."""
        return ProviderRegistry([*self._configs, *configs])

    def __iter__(self) -> Iterator[ProviderConfig]:
        return iter(self._configs)

    def __len__(self) -> int:
        return len(self._configs)

    def __contains__(self, provider_id: object) -> bool:
        return provider_id in self._by_id
