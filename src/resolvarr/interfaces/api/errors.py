"""Render provider errors into the wire error envelope."""

from __future__ import annotations

import structlog
from fastapi import Request
from fastapi.responses import JSONResponse

from resolvarr.domain.providers.exceptions import (
    CaptchaError,
    EpisodeURLNotFoundError,
    NoContentError,
    ProviderDecodeError,
    ProviderError,
    ProviderNetworkError,
    ProviderNotFoundError,
    WrongURLError,
)

log = structlog.get_logger(__name__)

STATUS_BY_KIND: dict[str, int] = {
    NoContentError.kind: 404,
    WrongURLError.kind: 400,
    CaptchaError.kind: 403,
    EpisodeURLNotFoundError.kind: 422,
    ProviderDecodeError.kind: 502,
    ProviderNetworkError.kind: 502,
    ProviderNotFoundError.kind: 404,
}


def status_for(error: ProviderError) -> int:
    return STATUS_BY_KIND.get(error.kind, 500)


async def provider_error_handler(request: Request, exc: Exception) -> JSONResponse:
    error = exc if isinstance(exc, ProviderError) else ProviderError(str(exc))
    status_code = status_for(error)
    log.info(
        "provider_error_rendered",
        path=request.url.path,
        kind=error.kind,
        status_code=status_code,
    )
    return JSONResponse({"error": error.to_payload()}, status_code=status_code)
