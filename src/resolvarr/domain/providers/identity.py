"""Provider identity: tagged reference to a built-in or remote adapter."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Mapping

from .exceptions import InvalidProviderIdentityError

ProviderKind = Literal["local", "remote"]

_KINDS: tuple[ProviderKind, ...] = ("local", "remote")


@dataclass(frozen=True)
class ProviderIdentity:
    """Either ``local(name)`` (built-in adapter) or ``remote(id)``.

    Wire form is a single-key mapping::

        {"local": {"id": "moviebox"}}
        {"remote": {"id": "some-remote-id"}}
    """

    kind: ProviderKind
    id: str

    @classmethod
    def local(cls, name: str) -> ProviderIdentity:
        return cls(kind="local", id=name)

    @classmethod
    def remote(cls, provider_id: str) -> ProviderIdentity:
        return cls(kind="remote", id=provider_id)

    @property
    def is_local(self) -> bool:
        return self.kind == "local"

    @property
    def is_remote(self) -> bool:
        return self.kind == "remote"

    def to_dict(self) -> dict[str, dict[str, str]]:
        return {self.kind: {"id": self.id}}

    @classmethod
    def from_dict(cls, data: Any) -> ProviderIdentity:
        """Decode the single-key wire form.

        Raises:
            InvalidProviderIdentityError: zero, several or unknown top-level
                keys, or a missing/empty ``id``.
        """
        if not isinstance(data, Mapping):
            raise InvalidProviderIdentityError(
                f"Provider identity must be a mapping, got {type(data).__name__}"
            )
        if len(data) != 1:
            raise InvalidProviderIdentityError(
                f"Invalid number of keys found, expected one: {sorted(data)!r}"
            )

        (kind, payload), = data.items()
        if kind not in _KINDS:
            raise InvalidProviderIdentityError(f"Unknown provider kind: {kind!r}")
        if not isinstance(payload, Mapping):
            raise InvalidProviderIdentityError(
                f"Provider identity payload for {kind!r} must be a mapping"
            )

        provider_id = payload.get("id")
        if not isinstance(provider_id, str) or not provider_id:
            raise InvalidProviderIdentityError(
                f"Provider identity {kind!r} requires a non-empty string 'id'"
            )
        return cls(kind=kind, id=provider_id)

    def __str__(self) -> str:
        return f"{self.kind}:{self.id}"
