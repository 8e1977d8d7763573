"""
Pre-write checks against a model's mapping.

Repositories run these before building an entity so that a typo'd keyword or
a missing NOT NULL value is reported with the offending field names instead
of surfacing later as a TypeError or an IntegrityError.
"""

from sqlalchemy import Column
from sqlalchemy import inspect as sa_inspect


def _is_generated(col: Column) -> bool:
    # the database fills these in: defaults, server defaults and autoincrement keys
    if col.default is not None or col.server_default is not None:
        return True
    return bool(col.primary_key and col.autoincrement in (True, "auto"))


def unknown_fields(model, values: dict) -> list[str]:
    """Keys of `values` that are not mapped attributes of `model`, in the caller's order."""
    mapped = {attr.key for attr in sa_inspect(model).attrs}
    return [key for key in values if key not in mapped]


def missing_required_fields(model, values: dict) -> list[str]:
    """
    NOT NULL columns without any generated value that `values` leaves out or sets to None.
    """
    return [
        col.name
        for col in model.__table__.columns
        if not col.nullable and not _is_generated(col) and values.get(col.name) is None
    ]
