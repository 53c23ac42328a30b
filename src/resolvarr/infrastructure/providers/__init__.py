from .factories import BUILTIN_ADAPTERS, AdapterFactory, AdapterFactoryRegistry
from .httpx_base import HttpxProviderBase
from .moviebox import MovieboxProvider
from .registry import ProviderRegistry
from .remote import RemoteProviderClient, error_from_payload
from .remote_config import fetch_provider_configs
from .resolver import ProviderResolver
from .season_fetcher import SeasonFetchOrchestrator

__all__ = [
    "BUILTIN_ADAPTERS",
    "AdapterFactory",
    "AdapterFactoryRegistry",
    "HttpxProviderBase",
    "MovieboxProvider",
    "ProviderRegistry",
    "ProviderResolver",
    "RemoteProviderClient",
    "SeasonFetchOrchestrator",
    "error_from_payload",
    "fetch_provider_configs",
]
