"""JSON wire codec for the remote provider protocol.

Encoders turn domain entities into plain JSON-compatible dicts; decoders
rebuild them and raise ``ProviderDecodeError`` on any schema mismatch.
Both the remote execution host (encoding) and ``RemoteProviderClient``
(decoding) use this module, so the two sides cannot drift apart.

Shapes::

    entry   = {"title", "web_url", "poster_url", "kind", "provider": identity}
    movie   = {"title", "web_url", "poster_url", "provider", "sources": [source]}
    show    = {"title", "web_url", "poster_url", "provider", "seasons": [season]}
    season  = {"number", "web_url", "episodes": [episode]}
    episode = {"number", "sources": [source]}
    source  = {"host_url"}
    section = {"title", "media": [entry]}
    stream  = {"provider", "url", "quality", "headers", "subtitles": [subtitle]}
"""

from __future__ import annotations

from typing import Any, Callable, TypeVar

from resolvarr.domain.entities.media import (
    CatalogEntry,
    Episode,
    MediaSection,
    Movie,
    Season,
    Show,
    Source,
)
from resolvarr.domain.entities.quality import Quality
from resolvarr.domain.entities.stream import Stream, Subtitle
from resolvarr.domain.providers.exceptions import (
    InvalidProviderIdentityError,
    ProviderDecodeError,
)
from resolvarr.domain.providers.identity import ProviderIdentity

T = TypeVar("T")

# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------


def _source(source: Source) -> dict[str, Any]:
    return {"host_url": source.host_url}


def encode_entry(entry: CatalogEntry) -> dict[str, Any]:
    return {
        "title": entry.title,
        "web_url": entry.web_url,
        "poster_url": entry.poster_url,
        "kind": entry.kind,
        "provider": entry.provider.to_dict(),
    }


def encode_entries(entries: list[CatalogEntry]) -> list[dict[str, Any]]:
    return [encode_entry(e) for e in entries]


def encode_sections(sections: list[MediaSection]) -> list[dict[str, Any]]:
    return [
        {"title": s.title, "media": encode_entries(s.media)} for s in sections
    ]


def encode_movie(movie: Movie) -> dict[str, Any]:
    return {
        "title": movie.title,
        "web_url": movie.web_url,
        "poster_url": movie.poster_url,
        "provider": movie.provider.to_dict(),
        "sources": [_source(s) for s in movie.sources],
    }


def encode_show(show: Show) -> dict[str, Any]:
    return {
        "title": show.title,
        "web_url": show.web_url,
        "poster_url": show.poster_url,
        "provider": show.provider.to_dict(),
        "seasons": [
            {
                "number": season.number,
                "web_url": season.web_url,
                "episodes": [
                    {
                        "number": ep.number,
                        "sources": [_source(s) for s in ep.sources],
                    }
                    for ep in season.episodes
                ],
            }
            for season in show.seasons
        ],
    }


def encode_stream(stream: Stream) -> dict[str, Any]:
    return {
        "provider": stream.provider.to_dict(),
        "url": stream.url,
        "quality": stream.quality.value if stream.quality else None,
        "headers": stream.headers,
        "subtitles": [
            {"url": s.url, "language": s.language, "label": s.label}
            for s in stream.subtitles
        ],
    }


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


def _field(data: Any, key: str, expected: type[T], context: str) -> T:
    if not isinstance(data, dict):
        raise ProviderDecodeError(f"{context}: expected object, got {type(data).__name__}")
    value = data.get(key)
    if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
        raise ProviderDecodeError(f"{context}: field {key!r} missing or not {expected.__name__}")
    return value


def _list(data: Any, key: str, item: Callable[[Any], T], context: str) -> list[T]:
    return [item(raw) for raw in _field(data, key, list, context)]


def _identity(data: Any, override: ProviderIdentity | None, context: str) -> ProviderIdentity:
    if override is not None:
        return override
    try:
        return ProviderIdentity.from_dict(_field(data, "provider", dict, context))
    except InvalidProviderIdentityError as exc:
        raise ProviderDecodeError(f"{context}: {exc}") from exc


def _decode_source(raw: Any) -> Source:
    return Source(host_url=_field(raw, "host_url", str, "source"))


def decode_entry(data: Any, provider: ProviderIdentity | None = None) -> CatalogEntry:
    kind = _field(data, "kind", str, "entry")
    if kind not in ("movie", "show"):
        raise ProviderDecodeError(f"entry: unknown kind {kind!r}")
    return CatalogEntry(
        title=_field(data, "title", str, "entry"),
        web_url=_field(data, "web_url", str, "entry"),
        kind=kind,  # type: ignore[arg-type]
        provider=_identity(data, provider, "entry"),
        poster_url=data.get("poster_url") or "",
    )


def decode_entries(data: Any, provider: ProviderIdentity | None = None) -> list[CatalogEntry]:
    if not isinstance(data, list):
        raise ProviderDecodeError("entries: expected list")
    return [decode_entry(raw, provider) for raw in data]


def decode_sections(data: Any, provider: ProviderIdentity | None = None) -> list[MediaSection]:
    if not isinstance(data, list):
        raise ProviderDecodeError("sections: expected list")
    return [
        MediaSection(
            title=_field(raw, "title", str, "section"),
            media=_list(raw, "media", lambda e: decode_entry(e, provider), "section"),
        )
        for raw in data
    ]


def decode_movie(data: Any, provider: ProviderIdentity | None = None) -> Movie:
    return Movie(
        title=_field(data, "title", str, "movie"),
        web_url=_field(data, "web_url", str, "movie"),
        provider=_identity(data, provider, "movie"),
        poster_url=data.get("poster_url") or "",
        sources=_list(data, "sources", _decode_source, "movie"),
    )


def _decode_episode(raw: Any) -> Episode:
    return Episode(
        number=_field(raw, "number", int, "episode"),
        sources=_list(raw, "sources", _decode_source, "episode"),
    )


def _decode_season(raw: Any) -> Season:
    return Season(
        number=_field(raw, "number", int, "season"),
        web_url=_field(raw, "web_url", str, "season"),
        episodes=_list(raw, "episodes", _decode_episode, "season"),
    )


def decode_show(data: Any, provider: ProviderIdentity | None = None) -> Show:
    return Show(
        title=_field(data, "title", str, "show"),
        web_url=_field(data, "web_url", str, "show"),
        provider=_identity(data, provider, "show"),
        poster_url=data.get("poster_url") or "",
        seasons=_list(data, "seasons", _decode_season, "show"),
    )


def decode_stream(data: Any, provider: ProviderIdentity | None = None) -> Stream:
    raw_quality = data.get("quality") if isinstance(data, dict) else None
    try:
        quality = Quality(raw_quality) if raw_quality is not None else None
    except ValueError as exc:
        raise ProviderDecodeError(f"stream: unknown quality {raw_quality!r}") from exc

    headers = data.get("headers") if isinstance(data, dict) else None
    if headers is not None and not isinstance(headers, dict):
        raise ProviderDecodeError("stream: headers must be an object")

    return Stream(
        provider=_identity(data, provider, "stream"),
        url=_field(data, "url", str, "stream"),
        quality=quality,
        headers=headers,
        subtitles=_list(
            data,
            "subtitles",
            lambda s: Subtitle(
                url=_field(s, "url", str, "subtitle"),
                language=_field(s, "language", str, "subtitle"),
                label=s.get("label") or "",
            ),
            "stream",
        ),
    )
