"""Shared constants for provider adapters."""

from __future__ import annotations

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/131.0.0.0 Safari/537.36"
)

DEFAULT_MAX_CONCURRENT_SEASONS = 5
DEFAULT_CLIENT_TIMEOUT = 15.0
DEFAULT_REMOTE_TIMEOUT = 30.0
