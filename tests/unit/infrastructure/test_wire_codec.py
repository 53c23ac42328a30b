"""Tests for the JSON wire codec shared by host and remote client."""

from __future__ import annotations

from typing import Any

import pytest

from resolvarr.domain.entities import (
    PLACEHOLDER_POSTER_URL,
    CatalogEntry,
    Episode,
    Quality,
    Season,
    Show,
    Source,
    Stream,
    Subtitle,
)
from resolvarr.domain.providers import ProviderDecodeError, ProviderIdentity
from resolvarr.infrastructure.providers import wire

_LOCAL = ProviderIdentity.local("moviebox")
_REMOTE = ProviderIdentity.remote("mirror")


class TestEntries:
    def test_encode_shape(self) -> None:
        entry = CatalogEntry(title="A", web_url="https://s.test/1", kind="movie", provider=_LOCAL)
        assert wire.encode_entry(entry) == {
            "title": "A",
            "web_url": "https://s.test/1",
            "poster_url": PLACEHOLDER_POSTER_URL,
            "kind": "movie",
            "provider": {"local": {"id": "moviebox"}},
        }

    def test_decode_uses_payload_identity(self) -> None:
        data = wire.encode_entry(
            CatalogEntry(title="A", web_url="u", kind="show", provider=_LOCAL, poster_url="p")
        )
        assert wire.decode_entry(data).provider == _LOCAL

    def test_decode_override_identity(self) -> None:
        data = {"title": "A", "web_url": "u", "kind": "movie", "provider": {"bogus": {}}}
        entry = wire.decode_entry(data, _REMOTE)
        assert entry.provider == _REMOTE
        assert entry.poster_url == PLACEHOLDER_POSTER_URL

    @pytest.mark.parametrize(
        "data",
        [
            {"title": "A", "web_url": "u", "kind": "episode", "provider": {"local": {"id": "x"}}},
            {"web_url": "u", "kind": "movie", "provider": {"local": {"id": "x"}}},
            {"title": "A", "web_url": "u", "kind": "movie", "provider": {"local": {}}},
            "not an object",
        ],
    )
    def test_decode_errors(self, data: Any) -> None:
        with pytest.raises(ProviderDecodeError):
            wire.decode_entry(data)

    def test_decode_entries_requires_list(self) -> None:
        with pytest.raises(ProviderDecodeError):
            wire.decode_entries({"title": "A"})


class TestShow:
    def test_show_round_trip_structure(self) -> None:
        show = Show(
            title="S",
            web_url="https://s.test/tvshow/1",
            provider=_LOCAL,
            poster_url="https://img.test/s.jpg",
            seasons=[
                Season(
                    number=2,
                    web_url="https://s.test/tvshow/1",
                    episodes=[Episode(number=4, sources=[Source(host_url="https://s.test/p/2/4")])],
                )
            ],
        )
        decoded = wire.decode_show(wire.encode_show(show), _REMOTE)
        assert decoded.seasons == show.seasons
        assert decoded.provider == _REMOTE

    def test_bool_is_not_an_episode_number(self) -> None:
        data = {
            "title": "S",
            "web_url": "u",
            "provider": {"local": {"id": "x"}},
            "seasons": [{"number": True, "web_url": "u", "episodes": []}],
        }
        with pytest.raises(ProviderDecodeError):
            wire.decode_show(data)


class TestStream:
    def test_encode_decode(self) -> None:
        stream = Stream(
            provider=_LOCAL,
            url="https://cdn.test/v.m3u8",
            quality=Quality.AUTO,
            headers={"Referer": "https://s.test"},
            subtitles=[Subtitle(url="https://cdn.test/en.vtt", language="en")],
        )
        data = wire.encode_stream(stream)
        assert data["quality"] == "auto"
        decoded = wire.decode_stream(data)
        assert decoded == stream
        assert decoded.quality is Quality.AUTO
        assert decoded.headers == {"Referer": "https://s.test"}
        assert decoded.subtitles[0].language == "en"

    def test_missing_quality_inferred(self) -> None:
        data = {"provider": {"local": {"id": "x"}}, "url": "https://cdn.test/720.mp4", "subtitles": []}
        assert wire.decode_stream(data).quality is Quality.P720

    def test_unknown_quality_rejected(self) -> None:
        data = {"provider": {"local": {"id": "x"}}, "url": "u", "quality": "8k", "subtitles": []}
        with pytest.raises(ProviderDecodeError):
            wire.decode_stream(data)
