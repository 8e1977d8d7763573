"""
Response envelope codec.

Builds the two JSON shapes every endpoint answers with (see
schemas/envelope.py). `meta` and `error.details` are left out of the body
entirely when they are None.
"""

from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from product_api.exceptions.catalog import ErrorCode, build_error
from product_api.schemas.envelope import APIError


def respond_success(status: int, data: Any, meta: Any = None, *, headers: dict[str, str] | None = None) -> JSONResponse:
    """
    Success envelope: {"success": true, "status", "data", "meta"?}.

    Args:
        status: HTTP status code, also echoed in the body.
        data: Any JSON-encodable value (pydantic models and datetimes included).
        meta: Optional metadata, e.g. pagination. Omitted when None.
        headers: Extra response headers (e.g. Location).
    """
    body: dict[str, Any] = {"success": True, "status": status, "data": data}
    if meta is not None:
        body["meta"] = meta
    return JSONResponse(status_code=status, content=jsonable_encoder(body), headers=headers)


def respond_error(status: int, code: str, message: str, details: Any = None) -> JSONResponse:
    """Error envelope: {"success": false, "status", "error": {"code", "message", "details"?}}."""
    error = APIError(code=code, message=message, details=details)
    return respond_api_error(status, error)


def respond_api_error(status: int, error: APIError) -> JSONResponse:
    body = {"success": False, "status": status, "error": error.to_dict()}
    return JSONResponse(status_code=status, content=jsonable_encoder(body))


def respond_error_code(status: int, code: ErrorCode | str, details: Any = None) -> JSONResponse:
    """Error envelope for a catalog code, using its default message."""
    return respond_api_error(status, build_error(code, details))


__all__ = ["respond_success", "respond_error", "respond_api_error", "respond_error_code"]
