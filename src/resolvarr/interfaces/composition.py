from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, cast

import httpx
import structlog
from fastapi import FastAPI

from resolvarr.application.use_cases import CatalogUseCase
from resolvarr.infrastructure.config import AppConfig
from resolvarr.infrastructure.providers import (
    AdapterFactoryRegistry,
    ProviderRegistry,
    ProviderResolver,
    fetch_provider_configs,
)
from resolvarr.interfaces.app_state import AppState

log = structlog.get_logger(__name__)


def create_http_client(config: AppConfig) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=httpx.Timeout(config.http_timeout_seconds),
        headers={"User-Agent": config.http_user_agent},
        follow_redirects=config.http_follow_redirects,
    )


async def build_provider_stack(
    config: AppConfig, http_client: httpx.AsyncClient
) -> tuple[AdapterFactoryRegistry, ProviderRegistry, ProviderResolver]:
    """Build factories, registry and resolver, then validate dispatch.

    Raises:
        ProviderConfigError: a registry entry cannot be dispatched.
        ProviderLoadError: a plugin adapter module is broken.
    """
    providers = config.providers

    factories = AdapterFactoryRegistry.with_builtins()
    if providers.plugin_dir is not None:
        factories.load_plugin_dir(providers.plugin_dir)
    log.info("adapters_registered", adapters=factories.list_names())

    registry = ProviderRegistry(providers.to_domain())
    if providers.config_url:
        remote_configs = await fetch_provider_configs(http_client, providers.config_url)
        registry = registry.merged(remote_configs)
    log.info("provider_registry_built", count=len(registry))

    resolver = ProviderResolver(
        registry,
        factories,
        http_client,
        remote_only=providers.remote_only,
        remote_timeout=providers.remote_timeout_seconds,
        base_urls=providers.base_urls,
        max_concurrent_seasons=providers.max_concurrent_seasons,
    )
    resolver.validate()
    return factories, registry, resolver


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan Hook: initialize and clean up all resources (DI composition root).

    Order matters:
        1. HTTP client (shared by adapters, remote clients and the provider list fetch)
        2. Adapter factories, provider registry, resolver (validated)
        3. Catalog use case
    """
    state = cast(AppState, app.state)
    config = state.config

    state.http_client = create_http_client(config)
    log.info("http_client_initialized")

    try:
        state.factories, state.registry, state.resolver = await build_provider_stack(
            config, state.http_client
        )
        state.catalog_uc = CatalogUseCase(resolver=state.resolver)
    except BaseException:
        await state.http_client.aclose()
        raise

    log.info("app_startup_complete", remote_only=state.resolver.remote_only)

    try:
        yield
    finally:
        await state.resolver.aclose()
        await state.http_client.aclose()
        log.info("http_client_closed")
        log.info("app_shutdown_complete")
