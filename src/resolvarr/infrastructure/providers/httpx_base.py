"""Shared base class for httpx-based provider adapters.

Holds the boilerplate every site adapter needs: client lifecycle, base URL
selection, fetch with error translation, JSON parsing and the season
fan-out orchestrator.

This base class lives in the *infrastructure* layer because it depends
on ``httpx`` and ``structlog``.  The *domain* layer only knows
``ProviderProtocol``; adapters that inherit from ``HttpxProviderBase``
structurally satisfy that Protocol.

Unlike a best-effort scraper, fetch failures are *raised*, never turned
into ``None``: callers own the retry policy.
"""

from __future__ import annotations

import json
from typing import Any

import httpx
import structlog

from resolvarr.domain.entities.media import CatalogEntry, MediaSection, Movie, Show
from resolvarr.domain.providers.exceptions import (
    CaptchaError,
    ProviderDecodeError,
    ProviderNetworkError,
)
from resolvarr.domain.providers.identity import ProviderIdentity
from resolvarr.infrastructure.common.cloudflare import is_cloudflare_challenge

from .constants import (
    DEFAULT_CLIENT_TIMEOUT,
    DEFAULT_MAX_CONCURRENT_SEASONS,
    DEFAULT_USER_AGENT,
)
from .season_fetcher import SeasonFetchOrchestrator


class HttpxProviderBase:
    """Shared base for httpx-based adapters.

    Subclasses **must** set:
    - ``name``
    - ``_domains`` (list with at least one domain string)

    Subclasses **must** override the six contract methods (the stubs
    raise ``NotImplementedError``).

    Subclasses **may** override:
    - ``title``, ``language``
    - ``_timeout``, ``_user_agent``
    """

    # --- Must be set by subclass ---
    name: str = ""

    # --- Overridable defaults ---
    title: str = ""
    language: str = ""

    _domains: list[str] = []  # noqa: RUF012  # subclass overrides
    _timeout: float = DEFAULT_CLIENT_TIMEOUT
    _user_agent: str = DEFAULT_USER_AGENT

    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        *,
        base_url: str | None = None,
        max_concurrent_seasons: int = DEFAULT_MAX_CONCURRENT_SEASONS,
    ) -> None:
        self._client: httpx.AsyncClient | None = http_client
        self._owns_client = http_client is None
        if base_url:
            self.base_url = base_url.rstrip("/")
        else:
            self.base_url = f"https://{self._domains[0]}" if self._domains else ""
        self._seasons = SeasonFetchOrchestrator(max_concurrent_seasons)
        self._log = structlog.get_logger(self.name or __name__)

    @property
    def identity(self) -> ProviderIdentity:
        return ProviderIdentity.local(self.name)

    # ------------------------------------------------------------------
    # Client lifecycle
    # ------------------------------------------------------------------

    async def _ensure_client(self) -> httpx.AsyncClient:
        """Create httpx client if none was injected."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                follow_redirects=True,
                headers={"User-Agent": self._user_agent},
            )
            self._owns_client = True
        return self._client

    async def cleanup(self) -> None:
        """Close the httpx client if this adapter created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    # ------------------------------------------------------------------
    # Fetch helpers
    # ------------------------------------------------------------------

    async def _fetch(
        self,
        url: str,
        *,
        headers: dict[str, str] | None = None,
        context: str = "",
    ) -> httpx.Response:
        """GET *url*, translating failures into provider errors.

        Raises:
            CaptchaError: the response is a Cloudflare challenge page.
            ProviderNetworkError: timeout, transport error or HTTP status >= 400.
        """
        client = await self._ensure_client()
        try:
            resp = await client.get(url, headers=headers)
        except httpx.TimeoutException as exc:
            self._log.warning(f"{self.name}_timeout", url=url, context=context)
            raise ProviderNetworkError(f"Timeout fetching {url}") from exc
        except httpx.HTTPError as exc:
            self._log.warning(
                f"{self.name}_fetch_error",
                url=url,
                error=str(exc),
                context=context,
            )
            raise ProviderNetworkError(f"Error fetching {url}: {exc}") from exc

        if is_cloudflare_challenge(resp.status_code, resp.text):
            self._log.warning(f"{self.name}_captcha", url=url, context=context)
            raise CaptchaError(str(resp.url))

        if resp.status_code >= 400:
            self._log.warning(
                f"{self.name}_http_error",
                url=url,
                status=resp.status_code,
                context=context,
            )
            raise ProviderNetworkError(
                f"HTTP {resp.status_code} fetching {url}",
                status_code=resp.status_code,
            )
        return resp

    async def _fetch_json(
        self,
        url: str,
        *,
        headers: dict[str, str] | None = None,
        context: str = "",
    ) -> Any:
        """GET *url* and parse the body as JSON.

        Raises:
            ProviderDecodeError: body is not valid JSON.
        """
        resp = await self._fetch(url, headers=headers, context=context)
        try:
            return resp.json()
        except (json.JSONDecodeError, ValueError) as exc:
            self._log.warning(
                f"{self.name}_invalid_json",
                url=str(resp.url),
                context=context,
            )
            raise ProviderDecodeError(f"Invalid JSON from {url}") from exc

    def _url(self, *parts: object) -> str:
        """Join *parts* onto ``base_url`` as path components."""
        path = "/".join(str(p).strip("/") for p in parts)
        return f"{self.base_url}/{path}" if path else self.base_url

    # ------------------------------------------------------------------
    # Contract stubs (subclass must implement)
    # ------------------------------------------------------------------

    async def latest_movies(self, page: int) -> list[CatalogEntry]:
        raise NotImplementedError(f"{type(self).__name__}.latest_movies() not implemented")

    async def latest_shows(self, page: int) -> list[CatalogEntry]:
        raise NotImplementedError(f"{type(self).__name__}.latest_shows() not implemented")

    async def search(self, keyword: str, page: int) -> list[CatalogEntry]:
        raise NotImplementedError(f"{type(self).__name__}.search() not implemented")

    async def home(self) -> list[MediaSection]:
        raise NotImplementedError(f"{type(self).__name__}.home() not implemented")

    async def movie_details(self, url: str) -> Movie:
        raise NotImplementedError(f"{type(self).__name__}.movie_details() not implemented")

    async def show_details(self, url: str) -> Show:
        raise NotImplementedError(f"{type(self).__name__}.show_details() not implemented")
