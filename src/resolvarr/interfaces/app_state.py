"""Application state container for FastAPI dependency injection."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
from starlette.datastructures import State

from resolvarr.infrastructure.config import AppConfig

if TYPE_CHECKING:
    from resolvarr.application.use_cases import CatalogUseCase
    from resolvarr.infrastructure.providers import (
        AdapterFactoryRegistry,
        ProviderRegistry,
        ProviderResolver,
    )


class AppState(State):
    """FastAPI application state with all DI resources.

    Lifecycle managed by composition.py::lifespan().
    """

    # Configuration
    config: AppConfig

    # Infrastructure
    http_client: httpx.AsyncClient

    # Provider dispatch (immutable after startup)
    factories: AdapterFactoryRegistry
    registry: ProviderRegistry
    resolver: ProviderResolver

    # Application Services
    catalog_uc: CatalogUseCase
