"""Canonical catalog entities.

Pure value objects with no framework dependencies and no I/O.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from resolvarr.domain.providers.identity import ProviderIdentity

MediaKind = Literal["movie", "show"]

# Substituted whenever a source omits the poster.
PLACEHOLDER_POSTER_URL = "https://eticketsolutions.com/demo/themes/e-ticket/img/movie.jpg"


def poster_or_placeholder(poster_url: str | None) -> str:
    """Return *poster_url* unless it is missing or blank."""
    if poster_url and poster_url.strip():
        return poster_url
    return PLACEHOLDER_POSTER_URL


@dataclass(frozen=True)
class Source:
    """Deferred-resolution host URL; visiting it yields streams."""

    host_url: str


@dataclass(frozen=True)
class CatalogEntry:
    """Normalized summary record for a movie or show (keyed by web_url)."""

    title: str
    web_url: str
    kind: MediaKind
    provider: ProviderIdentity
    poster_url: str = PLACEHOLDER_POSTER_URL

    def __post_init__(self) -> None:
        object.__setattr__(self, "poster_url", poster_or_placeholder(self.poster_url))


@dataclass(frozen=True)
class Movie:
    """Movie detail: catalog fields plus its source hosts."""

    title: str
    web_url: str
    provider: ProviderIdentity
    poster_url: str = PLACEHOLDER_POSTER_URL
    sources: list[Source] = field(default_factory=list)

    kind: MediaKind = field(default="movie", init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "poster_url", poster_or_placeholder(self.poster_url))


@dataclass(frozen=True)
class Episode:
    number: int
    sources: list[Source] = field(default_factory=list)


@dataclass(frozen=True)
class Season:
    number: int
    web_url: str  # owning show
    episodes: list[Episode] = field(default_factory=list)


@dataclass(frozen=True)
class Show:
    """Show detail: catalog fields plus seasons ordered by number."""

    title: str
    web_url: str
    provider: ProviderIdentity
    poster_url: str = PLACEHOLDER_POSTER_URL
    seasons: list[Season] = field(default_factory=list)

    kind: MediaKind = field(default="show", init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "poster_url", poster_or_placeholder(self.poster_url))


@dataclass(frozen=True)
class MediaSection:
    """Titled row of catalog entries (home page)."""

    title: str
    media: list[CatalogEntry] = field(default_factory=list)


def non_empty_sections(sections: list[MediaSection]) -> list[MediaSection]:
    """Drop sections whose media list is empty."""
    return [section for section in sections if section.media]
