"""Provider adapter that forwards every contract call to a remote host.

Used for ``remote(id)`` identities, and for local identities when the
host runs with ``remote_only``.  Observable behaviour matches a local
adapter: same entity types, same error classes, and every returned entity
carries the identity this client was resolved for.
"""

from __future__ import annotations

from typing import Any, Callable, TypeVar

import httpx
import structlog

from resolvarr.domain.entities.media import CatalogEntry, MediaSection, Movie, Show
from resolvarr.domain.providers.config import ProviderConfig
from resolvarr.domain.providers.exceptions import (
    CaptchaError,
    EpisodeURLNotFoundError,
    NoContentError,
    ProviderDecodeError,
    ProviderError,
    ProviderNetworkError,
    ProviderNotFoundError,
    RemoteProviderError,
    WrongURLError,
)
from resolvarr.domain.providers.identity import ProviderIdentity

from . import wire
from .constants import DEFAULT_REMOTE_TIMEOUT

log = structlog.get_logger(__name__)

T = TypeVar("T")

_SIMPLE_ERRORS: dict[str, type[ProviderError]] = {
    NoContentError.kind: NoContentError,
    WrongURLError.kind: WrongURLError,
    EpisodeURLNotFoundError.kind: EpisodeURLNotFoundError,
    ProviderDecodeError.kind: ProviderDecodeError,
    ProviderNotFoundError.kind: ProviderNotFoundError,
}


def error_from_payload(payload: Any, *, status_code: int) -> ProviderError:
    """Rebuild the provider error described by a wire error envelope."""
    error = payload.get("error") if isinstance(payload, dict) else None
    if not isinstance(error, dict):
        return ProviderNetworkError(
            f"Remote host answered HTTP {status_code}", status_code=status_code
        )

    kind = error.get("kind")
    message = str(error.get("message") or kind or "remote error")

    if kind == CaptchaError.kind:
        return CaptchaError(str(error.get("url") or ""), message)
    if kind == ProviderNetworkError.kind:
        return ProviderNetworkError(message, status_code=error.get("status_code"))
    if kind in _SIMPLE_ERRORS:
        return _SIMPLE_ERRORS[kind](message)
    return RemoteProviderError(message, remote_kind=kind)


class RemoteProviderClient:
    """ProviderProtocol implementation backed by a remote execution host."""

    def __init__(
        self,
        config: ProviderConfig,
        *,
        http_client: httpx.AsyncClient,
        identity: ProviderIdentity | None = None,
        timeout: float = DEFAULT_REMOTE_TIMEOUT,
    ) -> None:
        if not config.endpoint:
            raise ValueError(f"Provider config {config.id!r} has no endpoint")
        self._config = config
        self._http = http_client
        self._identity = identity or config.identity
        self._endpoint = config.endpoint.rstrip("/")
        self._timeout = timeout
        self.name = config.id

    @property
    def identity(self) -> ProviderIdentity:
        return self._identity

    @property
    def config(self) -> ProviderConfig:
        return self._config

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    async def _call(
        self,
        operation: str,
        decode: Callable[[Any, ProviderIdentity], T],
        **params: Any,
    ) -> T:
        url = f"{self._endpoint}/{operation}"
        try:
            resp = await self._http.get(url, params=params, timeout=self._timeout)
        except httpx.HTTPError as exc:
            log.warning(
                "remote_provider_transport_error",
                provider=self.name,
                operation=operation,
                error=str(exc),
            )
            raise ProviderNetworkError(
                f"Remote host unreachable for {self.name}.{operation}: {exc}"
            ) from exc

        try:
            payload = resp.json()
        except ValueError:
            payload = None

        if resp.status_code >= 400:
            error = error_from_payload(payload, status_code=resp.status_code)
            log.info(
                "remote_provider_error",
                provider=self.name,
                operation=operation,
                status=resp.status_code,
                kind=error.kind,
            )
            raise error

        if payload is None:
            raise ProviderDecodeError(
                f"Remote host returned non-JSON body for {self.name}.{operation}"
            )
        return decode(payload, self._identity)

    # ------------------------------------------------------------------
    # Contract
    # ------------------------------------------------------------------

    async def latest_movies(self, page: int) -> list[CatalogEntry]:
        return await self._call("movies", wire.decode_entries, page=page)

    async def latest_shows(self, page: int) -> list[CatalogEntry]:
        return await self._call("shows", wire.decode_entries, page=page)

    async def search(self, keyword: str, page: int) -> list[CatalogEntry]:
        # The host rejects a blank query before any adapter sees it.
        if not keyword.strip():
            return []
        return await self._call("search", wire.decode_entries, query=keyword, page=page)

    async def home(self) -> list[MediaSection]:
        return await self._call("home", wire.decode_sections)

    async def movie_details(self, url: str) -> Movie:
        return await self._call("movie", wire.decode_movie, url=url)

    async def show_details(self, url: str) -> Show:
        return await self._call("show", wire.decode_show, url=url)
