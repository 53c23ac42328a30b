"""Tests for Stream identity, ordering and player compatibility."""

from __future__ import annotations

import pytest

from resolvarr.domain.entities import Quality, Stream, Subtitle, best_stream, sort_streams
from resolvarr.domain.providers import ProviderIdentity

_PROVIDER = ProviderIdentity.local("moviebox")


def _stream(url: str, quality: Quality | None = None, **kwargs) -> Stream:
    return Stream(provider=_PROVIDER, url=url, quality=quality, **kwargs)


class TestIdentity:
    def test_equal_by_url(self) -> None:
        a = _stream("https://cdn.test/a.mp4", Quality.P720)
        b = _stream("https://cdn.test/a.mp4", Quality.P1080, headers={"Referer": "x"})
        assert a == b
        assert hash(a) == hash(b)
        assert len({a, b}) == 1

    def test_different_url_not_equal(self) -> None:
        assert _stream("https://cdn.test/a.mp4") != _stream("https://cdn.test/b.mp4")


class TestQualityInference:
    def test_inferred_from_url(self) -> None:
        assert _stream("https://cdn.test/movie_1080.mp4").quality is Quality.P1080

    def test_unknown_when_url_has_no_token(self) -> None:
        assert _stream("https://cdn.test/movie.mp4").quality is Quality.UNKNOWN

    def test_explicit_quality_kept(self) -> None:
        assert _stream("https://cdn.test/movie_1080.mp4", Quality.P360).quality is Quality.P360


class TestOrdering:
    def test_sorted_best_first(self) -> None:
        streams = [
            _stream("https://cdn.test/1", Quality.P480),
            _stream("https://cdn.test/2", Quality.K4),
            _stream("https://cdn.test/3", Quality.AUTO),
            _stream("https://cdn.test/4", Quality.P1080),
        ]
        assert [s.quality for s in sorted(streams)] == [
            Quality.K4, Quality.P1080, Quality.P480, Quality.AUTO,
        ]

    def test_sort_streams_dedupes_keeping_first(self) -> None:
        first = _stream("https://cdn.test/a", Quality.P720, headers={"X": "1"})
        dup = _stream("https://cdn.test/a", Quality.K4)
        other = _stream("https://cdn.test/b", Quality.P1080)
        ranked = sort_streams([first, dup, other])
        assert ranked == [other, first]
        assert ranked[1].headers == {"X": "1"}

    def test_best_stream(self) -> None:
        streams = [_stream("https://cdn.test/a", Quality.P360), _stream("https://cdn.test/b", Quality.P720)]
        best = best_stream(streams)
        assert best is not None
        assert best.url == "https://cdn.test/b"

    def test_best_stream_empty(self) -> None:
        assert best_stream([]) is None


class TestPlayerCompatibility:
    def test_simple_mp4_is_compatible(self) -> None:
        assert _stream("https://cdn.test/video.mp4").is_player_compatible is True

    @pytest.mark.parametrize("ext", ["m3u8", "m3u"])
    def test_playlists_not_compatible(self, ext: str) -> None:
        assert _stream(f"https://cdn.test/master.{ext}?token=1").is_player_compatible is False

    def test_headers_make_it_incompatible(self) -> None:
        stream = _stream("https://cdn.test/video.mp4", headers={"Referer": "https://site.test"})
        assert stream.is_simple is False
        assert stream.is_player_compatible is False

    def test_empty_headers_still_simple(self) -> None:
        assert _stream("https://cdn.test/video.mp4", headers={}).is_simple is True


class TestDerivedCopies:
    def test_with_subtitles_returns_new_stream(self) -> None:
        original = _stream("https://cdn.test/video.mp4")
        subs = [Subtitle(url="https://cdn.test/en.vtt", language="en", label="English")]
        updated = original.with_subtitles(subs)
        assert updated.subtitles == subs
        assert original.subtitles == []

    def test_with_quality(self) -> None:
        original = _stream("https://cdn.test/video.mp4", Quality.P480)
        assert original.with_quality(Quality.K4).quality is Quality.K4
        assert original.with_quality(None).quality is Quality.P480
        assert original.quality is Quality.P480
