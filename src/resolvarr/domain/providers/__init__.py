from .base import ProviderProtocol
from .config import ALL_CAPABILITIES, Capability, ProviderConfig
from .exceptions import (
    CaptchaError,
    DuplicateProviderError,
    EpisodeURLNotFoundError,
    InvalidProviderIdentityError,
    NoContentError,
    ProviderConfigError,
    ProviderDecodeError,
    ProviderError,
    ProviderLoadError,
    ProviderNetworkError,
    ProviderNotFoundError,
    RemoteProviderError,
    WrongURLError,
)
from .identity import ProviderIdentity, ProviderKind

__all__ = [
    "ALL_CAPABILITIES",
    "Capability",
    "CaptchaError",
    "DuplicateProviderError",
    "EpisodeURLNotFoundError",
    "InvalidProviderIdentityError",
    "NoContentError",
    "ProviderConfig",
    "ProviderConfigError",
    "ProviderDecodeError",
    "ProviderError",
    "ProviderIdentity",
    "ProviderKind",
    "ProviderLoadError",
    "ProviderNetworkError",
    "ProviderNotFoundError",
    "ProviderProtocol",
    "RemoteProviderError",
    "WrongURLError",
]
