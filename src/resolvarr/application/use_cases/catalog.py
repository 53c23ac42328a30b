"""Catalog use case: resolve a provider and run one contract operation."""

from __future__ import annotations

import time
from typing import Any, Awaitable, Callable, Iterable, TypeVar

import structlog

from resolvarr.domain.entities import (
    CatalogEntry,
    MediaSection,
    Movie,
    Show,
    Stream,
    best_stream,
    non_empty_sections,
    sort_streams,
)
from resolvarr.domain.ports import ProviderResolverPort
from resolvarr.domain.providers import (
    Capability,
    ProviderError,
    ProviderIdentity,
    ProviderProtocol,
)

log = structlog.get_logger(__name__)

T = TypeVar("T")


class CatalogUseCase:
    """Uniform entry point for every provider operation.

    Flow:
        1. Resolve the identity (``ProviderNotFoundError`` if unknown)
        2. Skip listing operations the provider does not advertise
        3. Call the contract method; provider errors propagate unchanged
        4. Apply result guarantees (no empty home sections)
    """

    def __init__(self, resolver: ProviderResolverPort) -> None:
        self.resolver = resolver

    async def _run(
        self,
        identity: ProviderIdentity,
        operation: str,
        call: Callable[[ProviderProtocol], Awaitable[T]],
        **context: Any,
    ) -> T:
        provider = self.resolver.resolve(identity)
        start = time.perf_counter()
        try:
            result = await call(provider)
        except ProviderError as exc:
            log.warning(
                "provider_operation_failed",
                provider=str(identity),
                operation=operation,
                error_kind=exc.kind,
                error=str(exc),
                **context,
            )
            raise
        log.debug(
            "provider_operation_done",
            provider=str(identity),
            operation=operation,
            duration_ms=round((time.perf_counter() - start) * 1000.0, 2),
            **context,
        )
        return result

    def _supports(self, identity: ProviderIdentity, capability: Capability) -> bool:
        config = self.resolver.config_for(identity)
        if config is None or config.supports(capability):
            return True
        log.info(
            "provider_capability_missing",
            provider=str(identity),
            capability=capability,
        )
        return False

    # ------------------------------------------------------------------
    # Listings
    # ------------------------------------------------------------------

    async def latest_movies(self, identity: ProviderIdentity, page: int = 1) -> list[CatalogEntry]:
        if not self._supports(identity, "movies"):
            return []
        return await self._run(
            identity, "latest_movies", lambda p: p.latest_movies(page), page=page
        )

    async def latest_shows(self, identity: ProviderIdentity, page: int = 1) -> list[CatalogEntry]:
        if not self._supports(identity, "shows"):
            return []
        return await self._run(
            identity, "latest_shows", lambda p: p.latest_shows(page), page=page
        )

    async def search(
        self, identity: ProviderIdentity, keyword: str, page: int = 1
    ) -> list[CatalogEntry]:
        keyword = keyword.strip()
        if not keyword or not self._supports(identity, "search"):
            return []
        return await self._run(
            identity,
            "search",
            lambda p: p.search(keyword, page),
            keyword=keyword,
            page=page,
        )

    async def home(self, identity: ProviderIdentity) -> list[MediaSection]:
        if not self._supports(identity, "home"):
            return []
        sections = await self._run(identity, "home", lambda p: p.home())
        return non_empty_sections(sections)

    # ------------------------------------------------------------------
    # Details
    # ------------------------------------------------------------------

    async def movie_details(self, identity: ProviderIdentity, url: str) -> Movie:
        return await self._run(
            identity, "movie_details", lambda p: p.movie_details(url), url=url
        )

    async def show_details(self, identity: ProviderIdentity, url: str) -> Show:
        return await self._run(
            identity, "show_details", lambda p: p.show_details(url), url=url
        )

    # ------------------------------------------------------------------
    # Stream ranking
    # ------------------------------------------------------------------

    @staticmethod
    def rank_streams(
        streams: Iterable[Stream], *, player_compatible_only: bool = False
    ) -> list[Stream]:
        """Deduplicated streams, best quality first."""
        ranked = sort_streams(streams)
        if player_compatible_only:
            ranked = [s for s in ranked if s.is_player_compatible]
        return ranked

    @staticmethod
    def pick_stream(
        streams: Iterable[Stream], *, player_compatible_only: bool = False
    ) -> Stream | None:
        if player_compatible_only:
            streams = [s for s in streams if s.is_player_compatible]
        return best_stream(streams)
