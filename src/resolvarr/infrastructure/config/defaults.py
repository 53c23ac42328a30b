"""Hardcoded default configuration values."""

from __future__ import annotations

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {
    "app_name": "resolvarr",
    "environment": "dev",
    "http": {
        "timeout_seconds": 15.0,
        "follow_redirects": True,
        "user_agent": "Resolvarr/0.1.0",
    },
    "logging": {
        "level": "INFO",
        "format": None,  # Derived from environment in schema.py
    },
    "providers": {
        "remote_only": False,
        "max_concurrent_seasons": 5,
        "remote_timeout_seconds": 30.0,
        "plugin_dir": None,
        "config_url": None,
        "base_urls": {},
        "entries": [],
    },
}
