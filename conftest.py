"""Root conftest: database fixtures for the product catalog tests.

Provides a session-scoped PostgreSQL container (Testcontainers) so integration
tests run against a genuine PostgreSQL, and an in-memory SQLite connection as
the lightweight embedded dialect the containerized database replaces.
"""
from __future__ import annotations

import os
from collections.abc import AsyncGenerator, Generator
from pathlib import Path

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine
from sqlalchemy.pool import NullPool, StaticPool
from testcontainers.postgres import PostgresContainer

from src.catalog.config import use_testcontainers
from src.catalog.sql_scripts import run_sql_script
from src.provisioning.postgres import DEFAULT_IMAGE, to_async_url

PROJECT_ROOT = Path(__file__).parent
SQL_DIR = PROJECT_ROOT / "sql"
INIT_DB_SCRIPT = SQL_DIR / "init-db.sql"
SEED_DATA_SCRIPT = SQL_DIR / "seed-data.sql"

POSTGRES_IMAGE = os.getenv("CATALOG_POSTGRES_IMAGE", DEFAULT_IMAGE)
CONTAINER_DATABASE_URL = os.getenv(
    "CATALOG_CONTAINER_DATABASE_URL",
    "tc:postgresql:15.2-alpine:///db?TC_INITSCRIPT=sql/init-db.sql",
)


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers to suppress PytestUnknownMarkWarning."""
    config.addinivalue_line("markers", "unit: Pure logic tests, no database")
    config.addinivalue_line("markers", "embedded: Tests against in-memory SQLite")
    config.addinivalue_line("markers", "integration: Requires a PostgreSQL container")


def pytest_collection_modifyitems(
    config: pytest.Config,
    items: list[pytest.Item],
) -> None:
    """Skip container-backed tests unless Testcontainers is enabled."""
    skip_no_containers = pytest.mark.skip(
        reason="Testcontainers disabled, set CATALOG_USE_TESTCONTAINERS=true"
    )
    if use_testcontainers():
        return
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_no_containers)


# ---------------------------------------------------------------------------
# Container fixtures (session-scoped, started once and shared)
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def postgres_container() -> Generator[PostgresContainer, None, None]:
    """Start a real PostgreSQL container for the entire test session.

    Image defaults to postgres:15.2-alpine; override with CATALOG_POSTGRES_IMAGE.
    """
    with PostgresContainer(POSTGRES_IMAGE) as postgres:
        yield postgres


# ---------------------------------------------------------------------------
# PostgreSQL engine + connection fixtures
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def pg_engine(postgres_container: PostgresContainer) -> AsyncGenerator[AsyncEngine, None]:
    """Async engine bound to the session container.

    NullPool keeps connections from outliving the test's event loop.
    """
    engine = create_async_engine(
        to_async_url(postgres_container.get_connection_url()),
        poolclass=NullPool,
    )
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def pg_connection(pg_engine: AsyncEngine) -> AsyncGenerator[AsyncConnection, None]:
    """Connection with init-db.sql applied inside a transaction.

    PostgreSQL DDL is transactional, so rolling back at teardown removes the
    schema and every row the test wrote.
    """
    async with pg_engine.connect() as conn:
        trans = await conn.begin()
        await run_sql_script(conn, INIT_DB_SCRIPT)
        yield conn
        await trans.rollback()


# ---------------------------------------------------------------------------
# Embedded SQLite fixtures
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def sqlite_engine() -> AsyncGenerator[AsyncEngine, None]:
    """In-memory SQLite engine; StaticPool shares the one database across connections."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def sqlite_connection(sqlite_engine: AsyncEngine) -> AsyncGenerator[AsyncConnection, None]:
    """SQLite connection with init-db.sql applied."""
    async with sqlite_engine.connect() as conn:
        await run_sql_script(conn, INIT_DB_SCRIPT)
        yield conn


# ---------------------------------------------------------------------------
# SQL resource fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def init_db_script() -> Path:
    """Path to the schema script."""
    return INIT_DB_SCRIPT


@pytest.fixture(scope="session")
def seed_data_script() -> Path:
    """Path to the two-row seed script."""
    return SEED_DATA_SCRIPT


@pytest.fixture(scope="session")
def container_database_url() -> str:
    """Container database URL used by the URL-provisioned tests."""
    return CONTAINER_DATABASE_URL


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Repository root; relative script paths resolve against it."""
    return PROJECT_ROOT
