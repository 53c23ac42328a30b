"""Provider error taxonomy.

Every error carries a stable ``kind`` string.  The remote execution host
renders it into the wire error envelope and ``RemoteProviderClient`` maps it
back to the same class, so remote and local adapters fail identically.
"""

from __future__ import annotations

from typing import Any


class ProviderError(Exception):
    """Base class for all provider-related errors."""

    kind: str = "provider_error"

    def to_payload(self) -> dict[str, Any]:
        return {"kind": self.kind, "message": str(self)}


class NoContentError(ProviderError):
    """The source answered but yielded nothing usable."""

    kind = "no_content"


class WrongURLError(ProviderError):
    """A URL does not have the shape the adapter expects."""

    kind = "wrong_url"


class CaptchaError(ProviderError):
    """The source interposed a human-verification challenge."""

    kind = "captcha"

    def __init__(self, url: str, message: str | None = None) -> None:
        super().__init__(message or f"Captcha challenge at {url}")
        self.url = url

    def to_payload(self) -> dict[str, Any]:
        return {**super().to_payload(), "url": self.url}


class EpisodeURLNotFoundError(ProviderError):
    """The detail page does not expose enough structure to list episodes."""

    kind = "episode_url_not_found"


class ProviderDecodeError(ProviderError):
    """A response does not match the expected schema."""

    kind = "decode"


class ProviderNetworkError(ProviderError):
    """Transport failure or non-success HTTP status."""

    kind = "network"

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code

    def to_payload(self) -> dict[str, Any]:
        payload = super().to_payload()
        if self.status_code is not None:
            payload["status_code"] = self.status_code
        return payload


class ProviderNotFoundError(ProviderError):
    """An identity resolves to no known adapter or configuration."""

    kind = "provider_not_found"


class ProviderConfigError(ProviderError):
    """Provider configuration is not dispatchable (raised at startup)."""

    kind = "provider_config"

    def __init__(self, problems: list[str]) -> None:
        super().__init__("; ".join(problems))
        self.problems = problems


class RemoteProviderError(ProviderError):
    """The remote host reported an error kind this client does not know."""

    kind = "remote"

    def __init__(self, message: str, *, remote_kind: str | None = None) -> None:
        super().__init__(message)
        self.remote_kind = remote_kind


class InvalidProviderIdentityError(ProviderError, ValueError):
    """Serialized provider identity is malformed."""

    kind = "invalid_identity"


class DuplicateProviderError(ProviderError):
    """Two adapters or configs resolve to the same name."""

    kind = "duplicate_provider"


class ProviderLoadError(ProviderError):
    """An adapter module failed to import or does not match the contract."""

    kind = "provider_load"
