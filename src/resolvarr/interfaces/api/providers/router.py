"""Remote execution host: exposes the provider contract over HTTP/JSON.

Every path mirrors one ``RemoteProviderClient`` call, so a resolvarr
instance can act as the remote endpoint of another one.
"""

from __future__ import annotations

from typing import Any, cast

import structlog
from fastapi import APIRouter, Query, Request

from resolvarr.domain.providers import ProviderIdentity, ProviderNotFoundError
from resolvarr.infrastructure.providers import wire
from resolvarr.interfaces.app_state import AppState

log = structlog.get_logger(__name__)

router = APIRouter(prefix="/providers", tags=["providers"])


def _state(request: Request) -> AppState:
    return cast(AppState, request.app.state)


def _identity(state: AppState, provider_id: str) -> ProviderIdentity:
    identity = state.resolver.identity_for(provider_id)
    if identity is None:
        raise ProviderNotFoundError(f"Unknown provider id {provider_id!r}")
    return identity


@router.get("")
async def list_providers(request: Request) -> list[dict[str, Any]]:
    state = _state(request)
    out: list[dict[str, Any]] = []
    for identity in state.resolver.list_identities():
        config = state.resolver.config_for(identity)
        if config is None:
            continue
        out.append(
            {
                "id": identity.id,
                "identity": identity.to_dict(),
                "title": config.display_title,
                "language": config.language,
                "icon_url": state.resolver.icon_url(identity),
                "capabilities": sorted(config.capabilities),
            }
        )
    return out


@router.get("/{provider_id}/movies")
async def latest_movies(
    request: Request,
    provider_id: str,
    page: int = Query(1, ge=1),
) -> list[dict[str, Any]]:
    state = _state(request)
    entries = await state.catalog_uc.latest_movies(_identity(state, provider_id), page)
    return wire.encode_entries(entries)


@router.get("/{provider_id}/shows")
async def latest_shows(
    request: Request,
    provider_id: str,
    page: int = Query(1, ge=1),
) -> list[dict[str, Any]]:
    state = _state(request)
    entries = await state.catalog_uc.latest_shows(_identity(state, provider_id), page)
    return wire.encode_entries(entries)


@router.get("/{provider_id}/search")
async def search(
    request: Request,
    provider_id: str,
    query: str = Query(..., min_length=1),
    page: int = Query(1, ge=1),
) -> list[dict[str, Any]]:
    state = _state(request)
    entries = await state.catalog_uc.search(_identity(state, provider_id), query, page)
    return wire.encode_entries(entries)


@router.get("/{provider_id}/home")
async def home(request: Request, provider_id: str) -> list[dict[str, Any]]:
    state = _state(request)
    sections = await state.catalog_uc.home(_identity(state, provider_id))
    return wire.encode_sections(sections)


@router.get("/{provider_id}/movie")
async def movie_details(
    request: Request,
    provider_id: str,
    url: str = Query(..., min_length=1),
) -> dict[str, Any]:
    state = _state(request)
    movie = await state.catalog_uc.movie_details(_identity(state, provider_id), url)
    return wire.encode_movie(movie)


@router.get("/{provider_id}/show")
async def show_details(
    request: Request,
    provider_id: str,
    url: str = Query(..., min_length=1),
) -> dict[str, Any]:
    state = _state(request)
    show = await state.catalog_uc.show_details(_identity(state, provider_id), url)
    return wire.encode_show(show)
