"""Shared fixtures for integration tests.

These tests use real components (config loader, provider resolver,
FastAPI host, RemoteProviderClient) wired together in-process.
"""

from __future__ import annotations

import os

import pytest


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Drop RESOLVARR_* variables inherited from the outer environment."""
    for key in list(os.environ):
        if key.startswith("RESOLVARR_"):
            monkeypatch.delenv(key, raising=False)
