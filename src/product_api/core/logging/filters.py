"""
Logging filters

- RequestIdFilter: stamps `record.request_id` from a contextvar set by
  RequestIDMiddleware, so every line logged while serving one HTTP request
  carries the same id. A contextvar (not threading.local) is used because
  concurrent requests share the event loop thread.
- RedactFilter: masks well-known secret attributes passed through `extra`.

Records without a request in scope get the sentinel "-", so format strings
referencing %(request_id)s never KeyError.
"""

import logging
from logging import LogRecord
import contextvars

_request_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)


def set_request_id(request_id: str | None):
    """
    Set the request id in the current context.

    Returns:
        token: contextvars.Token which can be passed to reset_request_id(token)
    """
    return _request_id_ctx.set(request_id)


def reset_request_id(token) -> None:
    _request_id_ctx.reset(token)


def get_request_id() -> str | None:
    return _request_id_ctx.get()


class RequestIdFilter(logging.Filter):
    """
    Guarantees every LogRecord has a `request_id` attribute.

    Precedence: an explicit `extra={"request_id": ...}`, then the contextvar,
    then "-". Never drops a record.
    """

    def filter(self, record: LogRecord) -> bool:
        record.request_id = (
            getattr(record, "request_id", None) or get_request_id() or "-"
        )
        return True


class RedactFilter(logging.Filter):
    """Replace values of sensitive `extra` keys (case-insensitive) before formatting."""

    SENSITIVE = {"password", "secret", "token", "access_token", "refresh_token", "authorization", "dsn"}
    MASK = "***REDACTED***"

    def filter(self, record: LogRecord) -> bool:
        for key in list(record.__dict__.keys()):
            if key.lower() in self.SENSITIVE:
                record.__dict__[key] = self.MASK
        return True


__all__ = ["set_request_id", "reset_request_id", "get_request_id", "RequestIdFilter", "RedactFilter"]
