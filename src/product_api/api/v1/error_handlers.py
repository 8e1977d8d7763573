"""
FastAPI exception handlers that map exceptions to error envelopes.

How to use:
    - `create_app()` calls `register_exception_handlers(app)`.
    - Route handlers raise catalog exceptions (BadRequestError, ...) for input
      problems and let repository exceptions propagate; the handlers below
      render both through the envelope codec.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from product_api.api.responses import respond_api_error, respond_error_code
from product_api.exceptions.base import RepositoryError, NotFoundError
from product_api.exceptions.catalog import APIException, ErrorCode

logger = logging.getLogger(__name__)


def format_validation_errors(exc: RequestValidationError) -> str:
    """
    Flatten pydantic validation errors into one line of text.

    Example: "body.price: Field required; body.code: String should have at least 1 character"
    """
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{loc}: {err.get('msg', '')}" if loc else str(err.get("msg", "")))
    return "; ".join(parts)


# Most specific first (APIException, NotFoundError, RepositoryError)

async def api_exception_handler(request: Request, exc: APIException) -> JSONResponse:
    logger.info(
        "api.error",
        extra={"method": request.method, "path": request.url.path, "code": exc.error.code},
    )
    return respond_api_error(exc.http_status(), exc.error)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """400 INVALID_REQUEST with the raw validation text in details."""
    details = format_validation_errors(exc)
    logger.info("api.invalid_request", extra={"method": request.method, "path": request.url.path})
    return respond_error_code(status.HTTP_400_BAD_REQUEST, ErrorCode.INVALID_REQUEST, details)


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    logger.info("NotFoundError for %s %s: %s", request.method, request.url.path, exc.message)
    return respond_error_code(status.HTTP_404_NOT_FOUND, ErrorCode.PRODUCT_NOT_FOUND)


async def repository_error_handler(request: Request, exc: RepositoryError) -> JSONResponse:
    """
    Anything the repository could not classify as "not found" is an internal
    error; the underlying error text goes into details.
    """
    logger.error("RepositoryError for %s %s: %s", request.method, request.url.path, str(exc), exc_info=exc)
    return respond_error_code(status.HTTP_500_INTERNAL_SERVER_ERROR, ErrorCode.INTERNAL_ERROR, exc.raw_detail)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error for %s %s", request.method, request.url.path)
    return respond_error_code(status.HTTP_500_INTERNAL_SERVER_ERROR, ErrorCode.INTERNAL_ERROR, str(exc))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(APIException, api_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(RepositoryError, repository_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
