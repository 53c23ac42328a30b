"""Tests for the Moviebox built-in adapter (JSON API mocked with respx)."""

from __future__ import annotations

from typing import Any

import httpx
import pytest
import respx

from resolvarr.domain.entities import PLACEHOLDER_POSTER_URL
from resolvarr.domain.providers import (
    EpisodeURLNotFoundError,
    NoContentError,
    ProviderDecodeError,
    ProviderIdentity,
    ProviderNetworkError,
    ProviderProtocol,
    WrongURLError,
)
from resolvarr.infrastructure.providers.moviebox import MovieboxProvider

BASE = "https://mb.test"


def _row(id_: int, title: str, box_type: int = 1, poster: Any = None, **extra: Any) -> dict[str, Any]:
    return {"id": id_, "title": title, "box_type": box_type, "poster": poster, **extra}


@pytest.fixture()
async def client():
    async with httpx.AsyncClient() as c:
        yield c


def _provider(client: httpx.AsyncClient, **kwargs: Any) -> MovieboxProvider:
    return MovieboxProvider(client, base_url=BASE, **kwargs)


class TestContract:
    def test_satisfies_protocol(self) -> None:
        assert isinstance(MovieboxProvider(), ProviderProtocol)

    def test_metadata(self) -> None:
        assert MovieboxProvider.name == "moviebox"
        assert MovieboxProvider.title == "Moviebox"
        assert MovieboxProvider().identity == ProviderIdentity.local("moviebox")


class TestListings:
    @pytest.mark.asyncio
    async def test_latest_movies(self, client: httpx.AsyncClient) -> None:
        payload = {
            "data": [
                _row(1, "Alpha", 1, "https://img.test/a.jpg"),
                _row(2, "Beta", 2, "not a url"),
            ]
        }
        with respx.mock:
            route = respx.get(f"{BASE}/movies/3").mock(
                return_value=httpx.Response(200, json=payload)
            )
            entries = await _provider(client).latest_movies(3)

        assert route.called
        assert [e.title for e in entries] == ["Alpha", "Beta"]
        assert entries[0].kind == "movie"
        assert entries[0].web_url == f"{BASE}/movie/1"
        assert entries[0].poster_url == "https://img.test/a.jpg"
        assert entries[1].kind == "show"
        assert entries[1].web_url == f"{BASE}/tvshow/2"
        assert entries[1].poster_url == PLACEHOLDER_POSTER_URL
        assert all(e.provider == ProviderIdentity.local("moviebox") for e in entries)

    @pytest.mark.asyncio
    async def test_latest_shows(self, client: httpx.AsyncClient) -> None:
        with respx.mock:
            respx.get(f"{BASE}/tvshows/1").mock(
                return_value=httpx.Response(200, json={"data": [_row(9, "Show", 2)]})
            )
            entries = await _provider(client).latest_shows(1)
        assert entries[0].web_url == f"{BASE}/tvshow/9"

    @pytest.mark.asyncio
    async def test_search_uses_dashed_keyword(self, client: httpx.AsyncClient) -> None:
        with respx.mock:
            route = respx.get(f"{BASE}/search/the-dark-knight").mock(
                return_value=httpx.Response(200, json={"data": [_row(4, "The Dark Knight")]})
            )
            entries = await _provider(client).search("the dark knight", 1)
        assert route.called
        assert entries[0].title == "The Dark Knight"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("keyword", "raw_path"),
        [
            ("what?", b"/search/what%3F"),
            ("AC/DC", b"/search/AC%2FDC"),
            ("tom & jerry #2", b"/search/tom-%26-jerry-%232"),
        ],
    )
    async def test_search_keyword_is_percent_encoded(
        self, client: httpx.AsyncClient, keyword: str, raw_path: bytes
    ) -> None:
        with respx.mock:
            route = respx.get(host="mb.test").mock(
                return_value=httpx.Response(200, json={"data": []})
            )
            await _provider(client).search(keyword, 1)
        request = route.calls.last.request
        assert request.url.raw_path == raw_path
        assert request.url.query == b""
        assert request.url.fragment == ""

    @pytest.mark.asyncio
    async def test_schema_mismatch(self, client: httpx.AsyncClient) -> None:
        with respx.mock:
            respx.get(f"{BASE}/movies/1").mock(
                return_value=httpx.Response(200, json={"rows": []})
            )
            with pytest.raises(ProviderDecodeError):
                await _provider(client).latest_movies(1)

    @pytest.mark.asyncio
    async def test_http_error(self, client: httpx.AsyncClient) -> None:
        with respx.mock:
            respx.get(f"{BASE}/movies/1").mock(return_value=httpx.Response(500))
            with pytest.raises(ProviderNetworkError):
                await _provider(client).latest_movies(1)


class TestHome:
    @pytest.mark.asyncio
    async def test_sections_filtered(self, client: httpx.AsyncClient) -> None:
        payload = {
            "msg": "ok",
            "data": [
                {"name": "Banner", "box_type": 1, "list": [_row(1, "skip-1")]},
                {"name": "Featured", "box_type": 1, "list": [_row(2, "skip-2")]},
                {"name": "Ads", "box_type": 6, "list": [_row(3, "ad")]},
                {
                    "name": "Popular",
                    "box_type": 1,
                    "list": [_row(4, "Keep"), {"id": 5, "box_type": 1}],
                },
                {"name": "Broken", "box_type": 1, "list": [{"title": "no id"}]},
                {"name": "Empty", "box_type": 2, "list": []},
            ],
        }
        with respx.mock:
            respx.get(f"{BASE}/home").mock(return_value=httpx.Response(200, json=payload))
            sections = await _provider(client).home()

        assert [s.title for s in sections] == ["Popular"]
        assert [m.title for m in sections[0].media] == ["Keep"]
        assert sections[0].media[0].poster_url == PLACEHOLDER_POSTER_URL

    @pytest.mark.asyncio
    async def test_fewer_than_two_sections(self, client: httpx.AsyncClient) -> None:
        payload = {"data": [{"name": "Only", "box_type": 1, "list": [_row(1, "x")]}]}
        with respx.mock:
            respx.get(f"{BASE}/home").mock(return_value=httpx.Response(200, json=payload))
            assert await _provider(client).home() == []


class TestMovieDetails:
    @pytest.mark.asyncio
    async def test_movie(self, client: httpx.AsyncClient) -> None:
        url = f"{BASE}/movie/55"
        with respx.mock:
            respx.get(url).mock(
                return_value=httpx.Response(200, json={"data": _row(55, "Heat", poster="https://img.test/h.jpg")})
            )
            movie = await _provider(client).movie_details(url)

        assert movie.title == "Heat"
        assert movie.web_url == url
        assert [s.host_url for s in movie.sources] == [f"{BASE}/movie/play/55"]

    @pytest.mark.asyncio
    async def test_missing_data(self, client: httpx.AsyncClient) -> None:
        url = f"{BASE}/movie/55"
        with respx.mock:
            respx.get(url).mock(return_value=httpx.Response(200, json={"data": None}))
            with pytest.raises(NoContentError):
                await _provider(client).movie_details(url)

    @pytest.mark.asyncio
    async def test_wrong_url(self, client: httpx.AsyncClient) -> None:
        with pytest.raises(WrongURLError):
            await _provider(client).movie_details(f"{BASE}/tvshow/55")


class TestShowDetails:
    @pytest.mark.asyncio
    async def test_seasons_expanded_and_empty_dropped(self, client: httpx.AsyncClient) -> None:
        url = f"{BASE}/tvshow/7"
        with respx.mock:
            respx.get(url).mock(
                return_value=httpx.Response(200, json={"data": _row(7, "Lost", 2, max_season=3)})
            )
            respx.get(f"{BASE}/tvshow/7/1").mock(
                return_value=httpx.Response(
                    200, json={"data": [{"season": 1, "episode": 1}, {"season": 1, "episode": 2}]}
                )
            )
            respx.get(f"{BASE}/tvshow/7/2").mock(return_value=httpx.Response(200, json={"data": []}))
            respx.get(f"{BASE}/tvshow/7/3").mock(
                return_value=httpx.Response(200, json={"data": [{"season": 3, "episode": 1}]})
            )
            show = await _provider(client, max_concurrent_seasons=2).show_details(url)

        assert show.title == "Lost"
        assert [s.number for s in show.seasons] == [1, 3]
        assert [e.number for e in show.seasons[0].episodes] == [1, 2]
        assert show.seasons[1].episodes[0].sources[0].host_url == f"{BASE}/tvshow/play/7/3/1"
        assert show.seasons[0].web_url == url

    @pytest.mark.asyncio
    async def test_missing_season_count(self, client: httpx.AsyncClient) -> None:
        url = f"{BASE}/tvshow/7"
        with respx.mock:
            respx.get(url).mock(return_value=httpx.Response(200, json={"data": _row(7, "Lost", 2)}))
            with pytest.raises(EpisodeURLNotFoundError):
                await _provider(client).show_details(url)

    @pytest.mark.asyncio
    async def test_failing_season_fails_show(self, client: httpx.AsyncClient) -> None:
        url = f"{BASE}/tvshow/7"
        with respx.mock:
            respx.get(url).mock(
                return_value=httpx.Response(200, json={"data": _row(7, "Lost", 2, max_season=2)})
            )
            respx.get(f"{BASE}/tvshow/7/1").mock(
                return_value=httpx.Response(200, json={"data": [{"season": 1, "episode": 1}]})
            )
            respx.get(f"{BASE}/tvshow/7/2").mock(return_value=httpx.Response(502))
            with pytest.raises(ProviderNetworkError):
                await _provider(client).show_details(url)
