"""
Integration test configuration with testcontainers.

Provides a session-scoped PostgreSQL 16 container and a per-test session
factory with the balance_events migration applied and the table emptied.

Usage:
    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_example(session_factory: async_sessionmaker[AsyncSession]) -> None:
        ledger = PostgresBalanceLedger(session_factory)
        ...

Note: Docker must be running for these fixtures to work.
"""

from collections.abc import AsyncGenerator, Generator

import pytest
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from testcontainers.postgres import PostgresContainer

from tests.integration.sql_helpers import apply_migrations


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    """Mark everything under tests/integration as an integration test."""
    for item in items:
        if "tests/integration" in str(item.fspath).replace("\\", "/"):
            item.add_marker(pytest.mark.integration)


@pytest.fixture(scope="session")
def postgres_container() -> Generator[PostgresContainer, None, None]:
    """Session-scoped PostgreSQL 16 container, started once per test run."""
    with PostgresContainer("postgres:16-alpine") as postgres:
        yield postgres


@pytest.fixture(scope="session")
def postgres_async_url(postgres_container: PostgresContainer) -> str:
    """Get async-compatible PostgreSQL connection URL.

    testcontainers returns a psycopg2 URL by default; convert it to asyncpg.
    """
    sync_url = postgres_container.get_connection_url()
    async_url: str = sync_url.replace(
        "postgresql+psycopg2://", "postgresql+asyncpg://"
    ).replace("postgresql://", "postgresql+asyncpg://")
    return async_url


@pytest.fixture
async def session_factory(
    postgres_async_url: str,
) -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Per-test session factory over a migrated, empty balance_events table.

    The engine keeps SQLAlchemy's default pool, as bootstrap.database does.
    """
    engine = create_async_engine(postgres_async_url, echo=False)
    factory = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with factory() as session, session.begin():
        await apply_migrations(session)
        await session.execute(text("TRUNCATE balance_events"))

    yield factory

    await engine.dispose()
