from .cloudflare import is_cloudflare_challenge

__all__ = [
    "is_cloudflare_challenge",
]
