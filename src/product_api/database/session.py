from typing import AsyncGenerator
import logging

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    create_async_engine,
    async_sessionmaker,
    AsyncSession,
)

from product_api.config.settings import Settings

logger = logging.getLogger(__name__)


def create_engine_from_settings(settings: Settings) -> AsyncEngine:
    """
    Build the process-wide AsyncEngine.

    Raises:
        MissingDatabaseURLError: If no connection string is configured.
    """
    url = settings.SQLALCHEMY_DATABASE_URL
    engine = create_async_engine(
        url,
        echo=settings.SQLALCHEMY_ECHO,   # Set to False in production
        pool_pre_ping=True,              # Enables connection health checks
    )
    logger.info("database.engine.created", extra={"dialect": engine.dialect.name})
    return engine


def make_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False keeps returned entities readable after the router commits.
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def get_async_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency. Yields a session from the app's sessionmaker and closes it afterwards.

    The sessionmaker lives on `app.state` (set by `create_app`), so every app
    instance talks to the engine it was built with.

    Usage:
        async def endpoint(db: AsyncSession = Depends(get_async_session)):
            await db.execute(...)
    """
    maker: async_sessionmaker[AsyncSession] = request.app.state.sessionmaker
    async with maker() as session:
        yield session
