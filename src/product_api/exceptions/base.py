"""
Repository-level exceptions.

Repositories raise these; api/v1/error_handlers.py turns them into error
envelopes. Only `NotFoundError` is meaningful to clients (404); any other
RepositoryError is reported as INTERNAL_ERROR.
"""

from typing import Iterable


class RepositoryError(Exception):
    """
    A database operation could not be completed.

    Attributes:
        message: Sanitized, human-readable text (no driver output).
        fields: Column names involved, when known (e.g. ["price"]).
        constraint: Database constraint name, when known. Logged, never sent.
        error_code: Short machine label such as "not_found" or "invalid_field".
    """

    def __init__(
        self,
        message: str,
        *,
        fields: Iterable[str] | None = None,
        constraint: str | None = None,
        error_code: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.fields = list(fields) if fields else None
        self.constraint = constraint
        self.error_code = error_code

    def __str__(self) -> str:
        extras = {
            "fields": ", ".join(self.fields) if self.fields else None,
            "constraint": self.constraint,
            "code": self.error_code,
        }
        annotated = "; ".join(f"{label}: {value}" for label, value in extras.items() if value)
        return f"{self.message} ({annotated})" if annotated else self.message

    @property
    def raw_detail(self) -> str:
        """
        Driver or ORM error text behind this error, falling back to str(self).

        Sent as the `details` of INTERNAL_ERROR envelopes.
        """
        cause = self.__cause__
        if cause is None:
            return str(self)
        orig = getattr(cause, "orig", None)
        return str(orig if orig is not None else cause)


class NotFoundError(RepositoryError):
    """No live row matched (missing, or soft-deleted)."""

    def __init__(self, message: str = "Not found", *, fields: Iterable[str] | None = None):
        super().__init__(message, fields=fields, error_code="not_found")


class InvalidFieldError(RepositoryError):
    """A keyword passed to a repository method is not a mapped attribute of the model."""

    def __init__(self, message: str, *, fields: Iterable[str] | None = None):
        super().__init__(message, fields=fields, error_code="invalid_field")


__all__ = [
    "RepositoryError",
    "NotFoundError",
    "InvalidFieldError",
]
