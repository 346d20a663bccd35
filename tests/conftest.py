"""
Pytest configuration and shared fixtures for TabCoin ledger tests.

Testing Standards:
- All async tests use pytest.mark.asyncio (auto mode enabled in pyproject.toml)
- Use AsyncMock for async collaborator mocking
- Unit tests go in tests/unit/
- Integration tests go in tests/integration/
"""

from collections.abc import Generator
from uuid import UUID

import pytest
from uuid6 import uuid7

from tabcoin.infrastructure.monitoring.metrics import reset_metrics_collector
from tabcoin.infrastructure.stubs import (
    AuthorizationStub,
    BalanceLedgerStub,
    ContentDirectoryStub,
)
from tests.helpers import FakeTimeAuthority


@pytest.fixture(autouse=True)
def _fresh_metrics() -> Generator[None, None, None]:
    """Give every test its own metrics registry."""
    reset_metrics_collector()
    yield
    reset_metrics_collector()


@pytest.fixture
def fake_time_authority() -> FakeTimeAuthority:
    """Time authority frozen at 2026-01-01T00:00:00 UTC."""
    return FakeTimeAuthority()


@pytest.fixture
def ledger() -> BalanceLedgerStub:
    return BalanceLedgerStub()


@pytest.fixture
def content_directory() -> ContentDirectoryStub:
    return ContentDirectoryStub()


@pytest.fixture
def authorizer() -> AuthorizationStub:
    return AuthorizationStub()


@pytest.fixture
def voter_id() -> UUID:
    return uuid7()


@pytest.fixture
def owner_id() -> UUID:
    return uuid7()


@pytest.fixture
def content_id(content_directory: ContentDirectoryStub, owner_id: UUID) -> UUID:
    """A content item registered in the content directory."""
    cid = uuid7()
    content_directory.add_content(cid, owner_id)
    return cid
