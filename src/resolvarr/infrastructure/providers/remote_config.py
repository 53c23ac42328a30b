"""Fetch a JSON provider list from a URL at startup."""

from __future__ import annotations

import httpx
import structlog
from pydantic import TypeAdapter, ValidationError

from resolvarr.domain.providers.config import ProviderConfig
from resolvarr.domain.providers.exceptions import (
    ProviderConfigError,
    ProviderNetworkError,
)
from resolvarr.infrastructure.config.schema import ProviderEntryConfig

log = structlog.get_logger(__name__)

_ENTRIES = TypeAdapter(list[ProviderEntryConfig])


async def fetch_provider_configs(
    http_client: httpx.AsyncClient,
    url: str,
) -> list[ProviderConfig]:
    """Download and validate a provider list.

    The document is either a JSON array of entries or an object with a
    ``providers`` array.

    Raises:
        ProviderNetworkError: the list could not be downloaded.
        ProviderConfigError: the document is not a valid provider list.
    """
    try:
        resp = await http_client.get(url)
        resp.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise ProviderNetworkError(
            f"Provider list at {url} answered HTTP {exc.response.status_code}",
            status_code=exc.response.status_code,
        ) from exc
    except httpx.HTTPError as exc:
        raise ProviderNetworkError(f"Could not fetch provider list {url}: {exc}") from exc

    try:
        payload = resp.json()
    except ValueError as exc:
        raise ProviderConfigError([f"{url}: provider list is not JSON"]) from exc

    if isinstance(payload, dict):
        payload = payload.get("providers", [])

    try:
        entries = _ENTRIES.validate_python(payload)
    except ValidationError as exc:
        problems = [
            f"{url}: {'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
            for err in exc.errors()
        ]
        raise ProviderConfigError(problems) from exc

    log.info("remote_provider_list_loaded", url=url, count=len(entries))
    return [entry.to_domain() for entry in entries]
