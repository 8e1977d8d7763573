"""
Service entry point.

    product-api
    python -m product_api

Configures logging, builds the app and serves it with uvicorn on HOST:PORT.
A missing connection string is fatal: it is logged and the process exits
with status 1.
"""

import logging

import uvicorn

from product_api.config.settings import MissingDatabaseURLError, get_settings
from product_api.core.logging import setup_logging
from product_api.main import create_app

logger = logging.getLogger("product_api")


def run() -> None:
    settings = get_settings()
    setup_logging(settings)

    try:
        app = create_app(settings)
    except MissingDatabaseURLError as exc:
        logger.critical("startup.missing_database_url", extra={"error": str(exc)})
        raise SystemExit(1) from exc

    # log_config=None keeps the dictConfig applied by setup_logging
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_config=None)


if __name__ == "__main__":
    run()
