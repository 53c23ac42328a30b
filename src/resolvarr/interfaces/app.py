"""FastAPI application factory (create_app)."""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable

import structlog
from fastapi import FastAPI, Request
from starlette.responses import Response

from resolvarr.domain.providers.exceptions import ProviderError
from resolvarr.infrastructure.config import AppConfig
from resolvarr.interfaces.api.errors import provider_error_handler
from resolvarr.interfaces.app_state import AppState
from resolvarr.interfaces.composition import lifespan

log = structlog.get_logger(__name__)


def create_app(config: AppConfig) -> FastAPI:
    """Create FastAPI app: configuration only, no resource initialization.

    Resources (HTTP client, provider registry, resolver) are created in lifespan().
    """
    app = FastAPI(
        title="Resolvarr",
        description="Uniform catalog contract over many media sites",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.state = AppState()
    app.state.config = config

    app.add_exception_handler(ProviderError, provider_error_handler)

    from resolvarr.interfaces.api.providers.router import router as providers_router

    app.include_router(providers_router, prefix="/api/v1")

    @app.get("/api/v1/healthz")
    async def healthz() -> dict[str, str | int | bool]:
        """Liveness probe: returns 200 as long as the process is running."""
        resolver = getattr(app.state, "resolver", None)
        return {
            "status": "ok",
            "providers": len(resolver.list_identities()) if resolver else 0,
            "remote_only": config.providers.remote_only,
        }

    @app.middleware("http")
    async def log_requests(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        start = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            duration_ms = (time.perf_counter() - start) * 1000.0
            log.info(
                "http_request",
                method=request.method,
                path=request.url.path,
                query=str(request.url.query),
                status_code=status_code,
                duration_ms=round(duration_ms, 2),
                client_host=(request.client.host if request.client else None),
            )

    return app
