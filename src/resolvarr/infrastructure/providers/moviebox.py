"""Moviebox built-in adapter.

Talks to the Moviebox JSON API:
- GET /movies/{page} and /tvshows/{page} for listings
- GET /search/{keyword-with-dashes} for search
- GET /home for home rows (first two rows and box_type 6 are skipped)
- GET /movie/{id} and /tvshow/{id} for details
- GET /tvshow/{id}/{season} for one season's episodes

Play URLs (/movie/play/{id}, /tvshow/play/{id}/{season}/{episode}) are
returned as deferred sources; resolving them to streams happens later.
"""

from __future__ import annotations

from typing import Any, Optional
from urllib.parse import quote, urlparse

from pydantic import BaseModel, Field, ValidationError, field_validator

from resolvarr.domain.entities.media import (
    CatalogEntry,
    Episode,
    MediaSection,
    Movie,
    Show,
    Source,
)
from resolvarr.domain.providers.exceptions import (
    EpisodeURLNotFoundError,
    NoContentError,
    ProviderDecodeError,
    WrongURLError,
)

from .httpx_base import HttpxProviderBase

_DOMAINS = ["google.com"]  # placeholder; real host comes from config base_urls
_MOVIE_BOX_TYPE = 1
_SKIPPED_HOME_BOX_TYPE = 6
_SKIPPED_HOME_ROWS = 2


# ---------------------------------------------------------------------------
# Response schema
# ---------------------------------------------------------------------------


class _Row(BaseModel):
    id: int
    title: str
    poster: Optional[str] = None
    box_type: int
    max_season: Optional[int] = None

    @field_validator("poster", mode="before")
    @classmethod
    def _drop_invalid_poster(cls, v: Any) -> Any:
        if not isinstance(v, str) or not urlparse(v).scheme:
            return None
        return v


class _ListingResponse(BaseModel):
    data: list[_Row]


class _DetailResponse(BaseModel):
    data: Optional[_Row] = None


class _HomeSection(BaseModel):
    name: str
    box_type: int
    rows: list[dict[str, Any]] = Field(default_factory=list, alias="list")


class _HomeResponse(BaseModel):
    msg: str = ""
    data: list[_HomeSection]


class _Episode(BaseModel):
    season: int
    episode: int


class _SeasonResponse(BaseModel):
    data: list[_Episode]


class MovieboxProvider(HttpxProviderBase):
    """Built-in adapter for the Moviebox JSON API."""

    name = "moviebox"
    title = "Moviebox"
    language = "en"
    _domains = _DOMAINS

    # ------------------------------------------------------------------
    # Parsing helpers
    # ------------------------------------------------------------------

    def _decode(self, model: type[BaseModel], data: Any, context: str) -> Any:
        try:
            return model.model_validate(data)
        except ValidationError as exc:
            self._log.warning(
                "moviebox_schema_mismatch",
                context=context,
                errors=exc.error_count(),
            )
            raise ProviderDecodeError(
                f"Unexpected {context} response from {self.name}"
            ) from exc

    def _entry_from_row(self, row: _Row) -> CatalogEntry:
        kind = "movie" if row.box_type == _MOVIE_BOX_TYPE else "show"
        segment = "movie" if kind == "movie" else "tvshow"
        return CatalogEntry(
            title=row.title,
            web_url=self._url(segment, row.id),
            kind=kind,
            provider=self.identity,
            poster_url=row.poster or "",
        )

    def _content_id(self, url: str, segment: str) -> str:
        """Return the trailing id of ``{base}/{segment}/{id}``."""
        parts = [p for p in urlparse(url).path.split("/") if p]
        if len(parts) < 2 or parts[-2] != segment or not parts[-1].isdigit():
            raise WrongURLError(f"Not a {self.name} {segment} URL: {url}")
        return parts[-1]

    async def _parse_page(self, url: str, context: str) -> list[CatalogEntry]:
        data = await self._fetch_json(url, context=context)
        listing: _ListingResponse = self._decode(_ListingResponse, data, context)
        return [self._entry_from_row(row) for row in listing.data]

    # ------------------------------------------------------------------
    # Contract
    # ------------------------------------------------------------------

    async def latest_movies(self, page: int) -> list[CatalogEntry]:
        return await self._parse_page(self._url("movies", page), "movies")

    async def latest_shows(self, page: int) -> list[CatalogEntry]:
        return await self._parse_page(self._url("tvshows", page), "tvshows")

    async def search(self, keyword: str, page: int) -> list[CatalogEntry]:
        # The API has no paging for search; every page returns the same set.
        slug = quote(keyword.strip().replace(" ", "-"), safe="")
        entries = await self._parse_page(self._url("search", slug), "search")
        self._log.info("moviebox_search", keyword=keyword, count=len(entries))
        return entries

    async def home(self) -> list[MediaSection]:
        data = await self._fetch_json(self._url("home"), context="home")
        response: _HomeResponse = self._decode(_HomeResponse, data, "home")

        sections: list[MediaSection] = []
        for section in response.data[_SKIPPED_HOME_ROWS:]:
            if section.box_type == _SKIPPED_HOME_BOX_TYPE:
                continue
            media = []
            for raw in section.rows:
                try:
                    row = _Row.model_validate(raw)
                except ValidationError:
                    self._log.debug("moviebox_home_row_skipped", section=section.name)
                    continue
                media.append(self._entry_from_row(row))
            if media:
                sections.append(MediaSection(title=section.name, media=media))
        return sections

    async def movie_details(self, url: str) -> Movie:
        content_id = self._content_id(url, "movie")
        data = await self._fetch_json(url, context="movie")
        detail: _DetailResponse = self._decode(_DetailResponse, data, "movie")
        if detail.data is None:
            raise NoContentError(f"No movie data at {url}")

        return Movie(
            title=detail.data.title,
            web_url=url,
            provider=self.identity,
            poster_url=detail.data.poster or "",
            sources=[Source(host_url=self._url("movie", "play", content_id))],
        )

    async def show_details(self, url: str) -> Show:
        content_id = self._content_id(url, "tvshow")
        data = await self._fetch_json(url, context="tvshow")
        detail: _DetailResponse = self._decode(_DetailResponse, data, "tvshow")
        if detail.data is None:
            raise NoContentError(f"No show data at {url}")
        if detail.data.max_season is None:
            raise EpisodeURLNotFoundError(f"Season count missing for {url}")

        async def _episodes(season: int) -> list[Episode]:
            season_data = await self._fetch_json(
                self._url("tvshow", content_id, season),
                context="season",
            )
            parsed: _SeasonResponse = self._decode(
                _SeasonResponse, season_data, "season"
            )
            return [
                Episode(
                    number=ep.episode,
                    sources=[
                        Source(
                            host_url=self._url(
                                "tvshow", "play", content_id, season, ep.episode
                            )
                        )
                    ],
                )
                for ep in parsed.data
            ]

        seasons = await self._seasons.fetch(url, detail.data.max_season, _episodes)
        self._log.info(
            "moviebox_show_details",
            url=url,
            seasons=len(seasons),
            reported=detail.data.max_season,
        )
        return Show(
            title=detail.data.title,
            web_url=url,
            provider=self.identity,
            poster_url=detail.data.poster or "",
            seasons=seasons,
        )
