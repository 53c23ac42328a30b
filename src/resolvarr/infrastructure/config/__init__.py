from __future__ import annotations

from .load import load_config
from .schema import AppConfig, EnvOverrides, ProviderEntryConfig, ProvidersConfig

__all__ = [
    "AppConfig",
    "EnvOverrides",
    "ProviderEntryConfig",
    "ProvidersConfig",
    "load_config",
]
