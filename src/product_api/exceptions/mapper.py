import re
import logging
from contextlib import asynccontextmanager

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from .integrity_classifier import ConstraintKind, classify_integrity_error
from .base import NotFoundError, RepositoryError

logger = logging.getLogger(__name__)

# Postgres: 'null value in column "code" ...' / SQLite: 'NOT NULL constraint failed: products.code'
_COLUMN_PATTERNS = (
    re.compile(r'null value in column "(?P<cols>[^"]+)"', re.IGNORECASE),
    re.compile(r"key \((?P<cols>[^)]+)\)=", re.IGNORECASE),
    re.compile(r"(?:UNIQUE|NOT NULL) constraint failed: (?P<cols>.+)$", re.IGNORECASE),
)


def extract_columns_from_integrity(exc: IntegrityError) -> list[str] | None:
    """
    Best-effort extraction of the column names involved in an integrity error.
    """
    msg = str(exc.orig) if exc.orig is not None else str(exc)
    for pattern in _COLUMN_PATTERNS:
        m = pattern.search(msg)
        if m:
            return [c.split(".")[-1].strip().strip('"') for c in m.group("cols").split(",")]
    return None


_MESSAGES = {
    ConstraintKind.UNIQUE: "{model} already exists",
    ConstraintKind.NOT_NULL: "Missing required field for {model}",
    ConstraintKind.FOREIGN_KEY: "{model} references a missing entity",
    ConstraintKind.CHECK: "{model} business rule violated (check constraint)",
}


def map_integrity_error(exc: IntegrityError, model_name: str | None = None) -> RepositoryError:
    """
    Translate a SQLAlchemy IntegrityError into a sanitized RepositoryError.

    The returned error keeps `.fields` and `.constraint` where they could be
    determined; the caller raises it `from exc` so the driver text stays
    available to logs and to the INTERNAL_ERROR details.
    """
    violation = classify_integrity_error(exc)
    constraint_name = violation.constraint_name
    columns = extract_columns_from_integrity(exc)
    model_part = model_name or "Record"

    template = _MESSAGES.get(violation.kind)
    if template is None:
        logger.warning("mapper.unknown_integrity_error",
                       extra={"model": model_part, "constraint": constraint_name})
        return RepositoryError(f"{model_part} database integrity error.", constraint=constraint_name)

    logger.info(
        "mapper.integrity_violation",
        extra={
            "model": model_part,
            "kind": violation.kind.value,
            "fields": columns,
            "constraint": constraint_name,
        },
    )
    return RepositoryError(template.format(model=model_part), fields=columns, constraint=constraint_name)


@asynccontextmanager
async def db_error_handler(db: AsyncSession, model_name: str | None = None):
    """
    Usage:
        async with db_error_handler(self.db, self.model.__name__):
            ... DB ops that may raise ...

    Rolls the session back on failure and re-raises as a RepositoryError chained
    to the original exception. NotFoundError (and other RepositoryErrors raised
    inside the block) pass through untouched.
    """
    try:
        yield
    except RepositoryError:
        raise
    except IntegrityError as exc:
        await _safe_rollback(db, model_name)
        raise map_integrity_error(exc, model_name) from exc
    except Exception as exc:
        await _safe_rollback(db, model_name)
        logger.exception("Unexpected DB error for %s", model_name, extra={"model": model_name})
        raise RepositoryError(f"Failed to operate on {model_name or 'database'}") from exc


async def _safe_rollback(db: AsyncSession, model_name: str | None) -> None:
    try:
        await db.rollback()
    except Exception:
        logger.exception("Failed to rollback session", extra={"model": model_name})


__all__ = ["db_error_handler", "map_integrity_error", "extract_columns_from_integrity", "NotFoundError"]
