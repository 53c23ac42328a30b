"""Playable stream candidates and subtitles."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import PurePosixPath
from typing import Iterable
from urllib.parse import urlparse

from resolvarr.domain.providers.identity import ProviderIdentity

from .quality import Quality

_SEGMENTED_PLAYLIST_EXTENSIONS = frozenset({"m3u8", "m3u"})


@dataclass(frozen=True)
class Subtitle:
    """External subtitle track."""

    url: str
    language: str
    label: str = ""


@dataclass(frozen=True, eq=False)
class Stream:
    """A playable candidate.

    Identity is the URL: two streams with the same URL compare and hash
    equal.  ``<`` means "better quality", so ``sorted(streams)`` yields the
    best stream first.  When no quality is given it is inferred from the URL.
    """

    provider: ProviderIdentity
    url: str
    quality: Quality | None = None
    headers: dict[str, str] | None = None
    subtitles: list[Subtitle] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.quality is None:
            object.__setattr__(self, "quality", Quality.from_url(self.url))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Stream):
            return NotImplemented
        return self.url == other.url

    def __hash__(self) -> int:
        return hash(self.url)

    def __lt__(self, other: Stream) -> bool:
        return self.quality > other.quality

    @property
    def is_simple(self) -> bool:
        """True when no custom request headers are needed."""
        return not self.headers

    @property
    def is_player_compatible(self) -> bool:
        """Playable by a generic external player (extension heuristic only)."""
        extension = PurePosixPath(urlparse(self.url).path).suffix.lstrip(".")
        return self.is_simple and extension not in _SEGMENTED_PLAYLIST_EXTENSIONS

    def with_subtitles(self, subtitles: Iterable[Subtitle]) -> Stream:
        return replace(self, subtitles=list(subtitles))

    def with_quality(self, quality: Quality | None) -> Stream:
        """Copy with a new quality (None keeps the current one)."""
        return replace(self, quality=quality or self.quality)


def sort_streams(streams: Iterable[Stream]) -> list[Stream]:
    """Deduplicate by URL (first wins) and sort best quality first."""
    seen: set[str] = set()
    unique: list[Stream] = []
    for stream in streams:
        if stream.url in seen:
            continue
        seen.add(stream.url)
        unique.append(stream)
    return sorted(unique)


def best_stream(streams: Iterable[Stream]) -> Stream | None:
    ranked = sort_streams(streams)
    return ranked[0] if ranked else None
