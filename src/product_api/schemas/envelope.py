"""
Response envelope schemas.

Every endpoint answers with exactly one of two shapes:

    {"success": true,  "status": 200, "data": ..., "meta": {...}}   # meta only on listings
    {"success": false, "status": 404, "error": {"code": "...", "message": "...", "details": ...}}

These models document the shapes in OpenAPI and are what the frontend type
generator reads. The codec in api/responses.py builds the dicts directly so
`meta` and `details` can be omitted rather than sent as null.
"""

from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class APIError(BaseModel):
    """Structured error: a catalog code, a human-readable message and optional context."""

    code: str
    message: str
    details: Any = None

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class MessageData(BaseModel):
    """`data` of /ping and DELETE /product/{id}."""

    message: str


class PaginationMeta(BaseModel):
    page: int
    per_page: int
    total: int
    total_pages: int


class SuccessEnvelope(BaseModel, Generic[T]):
    success: Literal[True] = True
    status: int
    data: T
    meta: dict[str, Any] | None = None


class ErrorEnvelope(BaseModel):
    success: Literal[False] = False
    status: int
    error: APIError
