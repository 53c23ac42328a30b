from .provider_resolver import ProviderResolverPort

__all__ = [
    "ProviderResolverPort",
]
