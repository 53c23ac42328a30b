"""Domain protocol every provider adapter (local or remote) satisfies."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from .identity import ProviderIdentity

if TYPE_CHECKING:
    from resolvarr.domain.entities.media import (
        CatalogEntry,
        MediaSection,
        Movie,
        Show,
    )


@runtime_checkable
class ProviderProtocol(Protocol):
    """
    Uniform catalog contract.

    All operations perform network I/O and may raise any
    :class:`~resolvarr.domain.providers.exceptions.ProviderError`.

    Guarantees:
    - every returned entry carries a poster URL (placeholder when the
      source has none) and this provider's ``identity``;
    - ``show_details`` only returns seasons with at least one episode and
      fails with ``EpisodeURLNotFoundError`` when the season count is
      unknown.
    """

    name: str

    @property
    def identity(self) -> ProviderIdentity: ...

    async def latest_movies(self, page: int) -> list[CatalogEntry]: ...

    async def latest_shows(self, page: int) -> list[CatalogEntry]: ...

    async def search(self, keyword: str, page: int) -> list[CatalogEntry]: ...

    async def home(self) -> list[MediaSection]: ...

    async def movie_details(self, url: str) -> Movie: ...

    async def show_details(self, url: str) -> Show: ...
