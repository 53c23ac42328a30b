"""In-memory provider adapter shared by unit and integration tests."""

from __future__ import annotations

from typing import Any

from resolvarr.domain.entities import (
    CatalogEntry,
    Episode,
    MediaSection,
    Movie,
    Season,
    Show,
    Source,
)
from resolvarr.domain.providers import ProviderIdentity


class FakeProvider:
    """In-memory adapter satisfying the provider contract.

    Accepts the same constructor arguments as ``HttpxProviderBase`` so it
    can be registered in an ``AdapterFactoryRegistry``.  Set ``error`` on
    the class or instance to make every call raise.
    """

    name = "fake"
    title = "Fake Provider"
    language = "en"

    error: Exception | None = None

    def __init__(self, http_client: Any = None, **kwargs: Any) -> None:
        self.http_client = http_client
        self.kwargs = kwargs
        self.calls: list[tuple[str, tuple[Any, ...]]] = []

    @property
    def identity(self) -> ProviderIdentity:
        return ProviderIdentity.local(self.name)

    def _record(self, operation: str, *args: Any) -> None:
        self.calls.append((operation, args))
        if self.error is not None:
            raise self.error

    def _entry(self, n: int, kind: str = "movie") -> CatalogEntry:
        return CatalogEntry(
            title=f"Title {n}",
            web_url=f"https://fake.test/{kind}/{n}",
            kind=kind,  # type: ignore[arg-type]
            provider=self.identity,
            poster_url=f"https://fake.test/poster/{n}.jpg",
        )

    async def latest_movies(self, page: int) -> list[CatalogEntry]:
        self._record("latest_movies", page)
        return [self._entry(page * 10 + i) for i in range(2)]

    async def latest_shows(self, page: int) -> list[CatalogEntry]:
        self._record("latest_shows", page)
        return [self._entry(page * 10, "show")]

    async def search(self, keyword: str, page: int) -> list[CatalogEntry]:
        self._record("search", keyword, page)
        return [self._entry(1)]

    async def home(self) -> list[MediaSection]:
        self._record("home")
        return [
            MediaSection(title="Trending", media=[self._entry(1), self._entry(2, "show")]),
            MediaSection(title="Empty", media=[]),
        ]

    async def movie_details(self, url: str) -> Movie:
        self._record("movie_details", url)
        return Movie(
            title="Fake Movie",
            web_url=url,
            provider=self.identity,
            poster_url="",
            sources=[Source(host_url="https://fake.test/play/1")],
        )

    async def show_details(self, url: str) -> Show:
        self._record("show_details", url)
        return Show(
            title="Fake Show",
            web_url=url,
            provider=self.identity,
            poster_url="https://fake.test/poster/show.jpg",
            seasons=[
                Season(
                    number=1,
                    web_url=url,
                    episodes=[Episode(number=1, sources=[Source(host_url="https://fake.test/s1e1")])],
                )
            ],
        )

    async def cleanup(self) -> None:
        self.calls.append(("cleanup", ()))

