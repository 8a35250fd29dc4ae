"""Shared fixtures: session wiring over in-memory collaborators."""

from __future__ import annotations

import pytest

from core.client import InMemoryTransport
from core.session import SearchSession
from core.storage import MemoryStorage


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def transport() -> InMemoryTransport:
    return InMemoryTransport()


@pytest.fixture
def session(transport, storage) -> SearchSession:
    return SearchSession(transport, storage)
