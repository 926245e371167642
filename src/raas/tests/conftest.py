"""
Core pytest configuration for the whole suite.

Only the database plumbing and the logging setup live here. Domain fixtures
(services, factories for the planning chain, API client) are in
`tests/test_fixtures/` and imported at the bottom of this module so every test
file can use them without importing.
"""

import logging
import os
from typing import AsyncGenerator
from urllib.parse import urlparse

# Silence chatty libraries before anything imports them
NOISY_LOGGERS = (
    "sqlalchemy",
    "sqlalchemy.engine",
    "sqlalchemy.engine.Engine",
    "asyncio",
    "httpx",
    "aiosqlite",
)
for _name in NOISY_LOGGERS:
    logging.getLogger(_name).setLevel(logging.WARNING)

import pytest
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine

from raas.config import get_settings
from raas.core.logging.builder import setup_logging
from raas.database.base import Base
import raas.models  # noqa: F401  registers every table on Base.metadata

settings = get_settings()
logger = logging.getLogger(__name__)


@pytest.fixture(scope="session", autouse=True)
def configure_logging():
    """Install the application's logging configuration once for the session."""
    setup_logging(settings)
    yield


# ------------------------------------------------------------------------------------------------
# Test database URL
# ------------------------------------------------------------------------------------------------

def safe_log_db_url(db_url: str) -> str:
    """Database URL without credentials, for logging."""
    parsed = urlparse(db_url)
    if parsed.hostname is None:
        return f"{parsed.scheme}://{parsed.path}"
    return f"{parsed.scheme}://{parsed.hostname}:{parsed.port or ''}/{parsed.path.lstrip('/')}"


def get_test_database_url() -> str:
    """
    Resolution order:
      1. TEST_DATABASE_URL environment variable (CI)
      2. the settings database when TESTING=true and TEST_POSTGRES_DB is set
      3. a local SQLite file
    """
    if test_url := os.getenv("TEST_DATABASE_URL"):
        return test_url
    if settings.TESTING and settings.TEST_POSTGRES_DB:
        return settings.DATABASE_URL
    return "sqlite+aiosqlite:///./test_database.db"


TEST_DATABASE_URL = get_test_database_url()
logger.info("tests.database", extra={"url": safe_log_db_url(TEST_DATABASE_URL)})


def _enable_sqlite_savepoints(engine: AsyncEngine) -> None:
    """
    pysqlite opens transactions lazily and breaks SAVEPOINT semantics; take over
    BEGIN so nested transactions behave as on Postgres. Foreign keys are off by
    default in SQLite and are switched on for parity as well.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")


# ------------------------------------------------------------------------------------------------
# Database fixtures
# ------------------------------------------------------------------------------------------------

@pytest.fixture(scope="session")
async def async_engine() -> AsyncGenerator[AsyncEngine, None]:
    engine = create_async_engine(TEST_DATABASE_URL, echo=False, future=True, pool_pre_ping=True)
    if engine.dialect.name == "sqlite":
        _enable_sqlite_savepoints(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture()
async def db_session(async_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """
    One outer transaction per test, rolled back at the end.

    The session joins the connection with `create_savepoint`, so the commits
    issued by services only release a SAVEPOINT and nothing outlives the test.
    """
    async with async_engine.connect() as connection:
        transaction = await connection.begin()
        session = AsyncSession(
            bind=connection,
            expire_on_commit=False,
            join_transaction_mode="create_savepoint",
        )
        try:
            yield session
        finally:
            await session.close()
            await transaction.rollback()


# Domain fixtures
from .test_fixtures.service_fixtures import (  # noqa: E402,F401
    authority_service,
    budget_modification_service,
    budget_type_service,
    currency_service,
    document_service,
    domain_service,
    financial_operation_service,
    group_service,
    item_distribution_service,
    item_service,
    item_status_service,
    permission_service,
    planned_item_service,
    role_service,
    rubric_service,
    structure_service,
    user_service,
)
from .test_fixtures.plan_fixtures import (  # noqa: E402,F401
    budget_type,
    create_planned_item,
    domain,
    financial_operation,
    item,
    item_status,
    planned_item,
    rubric,
    structure,
)
from .test_fixtures.api_fixtures import api_client  # noqa: E402,F401
from .test_fixtures.repository_fixtures import (  # noqa: E402,F401
    domain_repo,
    rubric_repo,
    sample_user_data,
    user_repo,
)
