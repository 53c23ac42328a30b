"""Shared test fixtures for the resolvarr test suite."""

from __future__ import annotations

import pytest

from resolvarr.domain.providers import ProviderIdentity
from tests.fakes import FakeProvider


@pytest.fixture()
def local_identity() -> ProviderIdentity:
    return ProviderIdentity.local("moviebox")


@pytest.fixture()
def remote_identity() -> ProviderIdentity:
    return ProviderIdentity.remote("akwam")


@pytest.fixture()
def fake_provider() -> FakeProvider:
    return FakeProvider()
