"""
Core pytest configuration for the entire test suite.

This module provides only the essential database setup and core utilities
needed across all types of tests (repositories, API, codegen, ...).

Every test gets its own in-memory SQLite database (aiosqlite + StaticPool, so
all sessions share the one connection that holds the data). Nothing leaks
between tests and no database server is needed.

Domain-specific fixtures are located in:
- tests/test_fixtures/repository_fixtures.py
- tests/test_fixtures/api_fixtures.py
"""

# -------------------------------
# Standard library imports
# -------------------------------
import logging
from typing import AsyncGenerator

# -------------------------------
# Early logging tuning
# -------------------------------
# Set the level for noisy third-party loggers before importing modules that
# might initialize them.
NOISY_LOGGERS = (
    "sqlalchemy",
    "sqlalchemy.engine",
    "sqlalchemy.engine.Engine",
    "aiosqlite",
    "asyncio",
    "httpx",
    "faker",
    "faker.factory",
)
for _name in NOISY_LOGGERS:
    logging.getLogger(_name).setLevel(logging.WARNING)

# -------------------------------
# Third-party / project imports
# -------------------------------
import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from product_api.config.settings import Settings
from product_api.core.logging.builder import setup_logging
from product_api.database.base import Base
from product_api.database.session import make_sessionmaker
from product_api import models  # noqa: F401 – import to register models with Base.metadata

TEST_DATABASE_URL = "sqlite+aiosqlite://"


def make_test_settings(**overrides) -> Settings:
    """
    Settings for tests, independent of any .env file on the machine.

    Keyword arguments override individual fields, e.g. `make_test_settings(MAX_PER_PAGE=5)`.
    """
    values = {
        "ENV": "testing",
        "DATABASE_URL": TEST_DATABASE_URL,
        "MAX_PER_PAGE": 100,
        "GENERATE_FRONTEND_TYPES": False,
        "AUTO_CREATE_TABLES": False,
        "LOG_FORMAT": "text",
        "LOG_LEVEL": "DEBUG",
        "LOG_TO_STDOUT": True,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


# The `autouse=True` part means this fixture is used by every test without being requested.
@pytest.fixture(scope="session", autouse=True)
def configure_logging():
    """
    Install application logging for the entire test session.

    caplog attaches its own handler to the root logger per test, so
    `caplog.records` keeps working after dictConfig runs here.
    """
    setup_logging(make_test_settings())
    yield


@pytest.fixture
def restore_logging():
    """For tests that call setup_logging() themselves: reinstall the test configuration afterwards."""
    yield
    setup_logging(make_test_settings())


# ------------------------------------------------------------------------------------------------
# DATABASE FIXTURES
# ------------------------------------------------------------------------------------------------

@pytest.fixture
def test_settings() -> Settings:
    return make_test_settings()


@pytest.fixture
async def async_engine() -> AsyncGenerator[AsyncEngine, None]:
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def db_session(async_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """
    A session on the per-test database, built the same way the app builds its
    sessions (expire_on_commit=False).
    """
    maker = make_sessionmaker(async_engine)
    async with maker() as session:
        yield session


# Repository / API fixtures, registered globally
from .test_fixtures.repository_fixtures import (  # noqa: E402,F401
    base_repo,
    product_repository,
    sample_product_data,
    create_product,
    created_product,
    multiple_products,
)
from .test_fixtures.api_fixtures import (  # noqa: E402,F401
    app,
    client,
    seed_products,
)
