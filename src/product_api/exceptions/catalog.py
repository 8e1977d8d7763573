"""
Error catalog: the closed set of API error codes and their default messages.

Every error envelope the service sends carries one of these codes. The
frontend mirrors them through the type generator (product_api.codegen), so
renaming a member here is a breaking change for clients.

Two ways to use the catalog:
    - data form: `build_error(code, details)` and the status-class constructors
      `bad_request()`, `not_found()`, `internal_error()` return
      `(APIError, status)` pairs for code that builds responses directly;
    - exception form: `BadRequestError`, `NotFoundAPIError` and
      `InternalAPIError` carry the same pair and are rendered by the handler
      registered in api/v1/error_handlers.py.
"""

from enum import Enum
from typing import Any

from fastapi import status

from product_api.schemas.envelope import APIError


class ErrorCode(str, Enum):
    """Symbolic error codes sent to clients."""
    INTERNAL_ERROR = "INTERNAL_ERROR"
    PRODUCT_NOT_FOUND = "PRODUCT_NOT_FOUND"
    PRODUCTS_NOT_FOUND = "PRODUCTS_NOT_FOUND"
    INVALID_REQUEST = "INVALID_REQUEST"
    INVALID_ID = "INVALID_ID"
    PER_PAGE_TOO_LARGE = "PER_PAGE_TOO_LARGE"


ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.INTERNAL_ERROR: "internal server error",
    ErrorCode.PRODUCT_NOT_FOUND: "product not found",
    ErrorCode.PRODUCTS_NOT_FOUND: "products not found",
    ErrorCode.INVALID_REQUEST: "invalid request",
    ErrorCode.INVALID_ID: "invalid product id",
    ErrorCode.PER_PAGE_TOO_LARGE: "per_page exceeds maximum allowed",
}


def build_error(code: ErrorCode | str, details: Any = None, *, message: str | None = None) -> APIError:
    """
    Build an APIError for `code`, using the catalog message unless `message` is given.

    Raises:
        ValueError: If `code` is not a member of ErrorCode.
    """
    code = ErrorCode(code)
    return APIError(
        code=code.value,
        message=message if message is not None else ERROR_MESSAGES.get(code, ""),
        details=details,
    )


def bad_request(code: ErrorCode | str, details: Any = None) -> tuple[APIError, int]:
    return build_error(code, details), status.HTTP_400_BAD_REQUEST


def not_found(code: ErrorCode | str, details: Any = None) -> tuple[APIError, int]:
    return build_error(code, details), status.HTTP_404_NOT_FOUND


def internal_error(code: ErrorCode | str, details: Any = None) -> tuple[APIError, int]:
    return build_error(code, details), status.HTTP_500_INTERNAL_SERVER_ERROR


# ---------------------------------------------------------------------------
# Exception form
# ---------------------------------------------------------------------------

class APIException(Exception):
    """
    An APIError paired with its HTTP status, raised from request handlers.

    Subclasses fix the status class; the code and details vary per call site.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, code: ErrorCode | str, details: Any = None, *, message: str | None = None):
        self.error = build_error(code, details, message=message)
        super().__init__(self.error.message)

    def http_status(self) -> int:
        return self.status_code

    def to_payload(self) -> dict:
        return self.error.to_dict()


class BadRequestError(APIException):
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundAPIError(APIException):
    status_code = status.HTTP_404_NOT_FOUND


class InternalAPIError(APIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


__all__ = [
    "ErrorCode",
    "ERROR_MESSAGES",
    "build_error",
    "bad_request",
    "not_found",
    "internal_error",
    "APIException",
    "BadRequestError",
    "NotFoundAPIError",
    "InternalAPIError",
]
