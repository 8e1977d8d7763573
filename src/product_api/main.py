"""
Application factory.

    app = create_app()                        # settings from the environment
    app = create_app(settings, engine=engine) # tests: injected in-memory engine

The engine and its sessionmaker live on `app.state`; request handlers get a
session through `database.session.get_async_session`. Nothing is global, so
several apps (one per test) can coexist in one process.

Serve with `product-api` (see __main__.py) or
`uvicorn --factory product_api.main:create_app`.
"""

import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncEngine

from product_api.api.v1 import health, products
from product_api.api.v1.error_handlers import register_exception_handlers
from product_api.codegen import generate_frontend_types
from product_api.config.settings import Settings, get_settings
from product_api.core.logging import RequestIDMiddleware
from product_api.database.base import Base
from product_api.database.session import create_engine_from_settings, make_sessionmaker
from product_api.utils.project_meta import get_project_version

# Registers the models on Base.metadata
import product_api.models  # noqa: F401

logger = logging.getLogger(__name__)


async def maybe_generate_frontend_types(settings: Settings) -> None:
    """
    Regenerate the frontend TypeScript files outside production.

    Runs in a worker thread; any failure is logged and the service starts anyway.
    """
    if settings.is_production or not settings.GENERATE_FRONTEND_TYPES:
        return
    try:
        await asyncio.to_thread(generate_frontend_types, settings.FRONTEND_OUT_DIR)
    except Exception:
        logger.warning(
            "codegen.startup_failed",
            extra={"out_dir": str(settings.FRONTEND_OUT_DIR)},
            exc_info=True,
        )


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    engine: AsyncEngine = app.state.engine

    if settings.AUTO_CREATE_TABLES:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("database.tables_created")

    await maybe_generate_frontend_types(settings)

    logger.info("app.startup", extra={"env": settings.ENV})
    try:
        yield
    finally:
        await engine.dispose()
        logger.info("app.shutdown")


def create_app(settings: Settings | None = None, engine: AsyncEngine | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Settings to use. Defaults to `get_settings()`.
        engine: AsyncEngine to use. Defaults to one built from `settings`.

    Raises:
        MissingDatabaseURLError: If no engine is given and no connection string is configured.
    """
    settings = settings or get_settings()
    engine = engine or create_engine_from_settings(settings)

    app = FastAPI(
        title="Product API",
        version=get_project_version(),
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.sessionmaker = make_sessionmaker(engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Location", "X-Request-ID"],
    )
    # Added last so it runs first: the request id is set before anything logs
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(products.router)

    return app
