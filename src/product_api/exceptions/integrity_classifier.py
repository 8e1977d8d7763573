"""
Classify IntegrityErrors by the kind of constraint that was violated.

Postgres reports a SQLSTATE (via asyncpg or psycopg), which is used when
present. SQLite only gives a message such as
"CHECK constraint failed: ck_products_price_non_negative", so the message text
is matched as a fallback.

The result is an internal label; mapper.py turns it into a RepositoryError.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from sqlalchemy.exc import IntegrityError

logger = logging.getLogger(__name__)


class ConstraintKind(str, Enum):
    UNIQUE = "unique"
    NOT_NULL = "not_null"
    FOREIGN_KEY = "foreign_key"
    CHECK = "check"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ConstraintViolation:
    kind: ConstraintKind
    constraint_name: str | None = None


# https://www.postgresql.org/docs/current/errcodes-appendix.html
SQLSTATE_KINDS: dict[str, ConstraintKind] = {
    "23505": ConstraintKind.UNIQUE,
    "23502": ConstraintKind.NOT_NULL,
    "23503": ConstraintKind.FOREIGN_KEY,
    "23514": ConstraintKind.CHECK,
}

# Checked in order; the first kind with a matching keyword wins
MESSAGE_KEYWORDS: tuple[tuple[ConstraintKind, tuple[str, ...]], ...] = (
    (ConstraintKind.UNIQUE, ("unique constraint", "unique failed", "unique violation", "duplicate")),
    (ConstraintKind.NOT_NULL, ("not null constraint", "not null", "null value in column")),
    (ConstraintKind.FOREIGN_KEY, ("foreign key constraint", "foreign key", "is not present in table")),
    (ConstraintKind.CHECK, ("check constraint", "check failed")),
)


def _sqlstate(orig) -> str | None:
    # psycopg: .pgcode; SQLAlchemy's asyncpg adapter: .sqlstate
    return getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)


def _postgres_constraint_name(orig) -> str | None:
    diag = getattr(orig, "diag", None)
    if diag is not None:
        return getattr(diag, "constraint_name", None)
    # asyncpg keeps the diagnostics on the wrapped driver exception
    return getattr(getattr(orig, "__cause__", None), "constraint_name", None)


def classify_by_sqlstate(orig) -> ConstraintViolation | None:
    """Return the violation for a Postgres driver error, or None when it carries no SQLSTATE."""
    code = _sqlstate(orig)
    if not code:
        return None

    constraint_name = _postgres_constraint_name(orig)
    kind = SQLSTATE_KINDS.get(code)
    if kind is None:
        logger.warning("integrity.unknown_sqlstate", extra={"sqlstate": code, "constraint": constraint_name})
        kind = ConstraintKind.UNKNOWN
    return ConstraintViolation(kind, constraint_name)


def classify_by_message(message: str) -> ConstraintViolation:
    normalized = (message or "").lower()
    for kind, keywords in MESSAGE_KEYWORDS:
        if any(keyword in normalized for keyword in keywords):
            return ConstraintViolation(kind)

    logger.warning("integrity.unknown_message", extra={"message_snippet": (message or "")[:200]})
    return ConstraintViolation(ConstraintKind.UNKNOWN)


def classify_integrity_error(exc: IntegrityError) -> ConstraintViolation:
    """
    Work out which kind of constraint an IntegrityError violated.

    Returns:
        ConstraintViolation with the kind and, on Postgres, the constraint name.
    """
    return classify_by_sqlstate(exc.orig) or classify_by_message(str(exc.orig))


__all__ = ["ConstraintKind", "ConstraintViolation", "classify_integrity_error"]
