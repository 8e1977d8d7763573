"""
Declarative base and shared column mixins for the ORM models.

Models inherit `Base` plus whichever mixins they need:
    - TimestampMixin: created_at / updated_at maintained by the database
    - SoftDeleteMixin: nullable deleted_at; rows with a value are treated as gone
"""

from datetime import datetime

from sqlalchemy import DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.sql import func


class Base(DeclarativeBase):
    pass


# Naming convention for constraints and indexes
Base.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s"
}


class TimestampMixin:
    # Set on INSERT by the database
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    # Refreshed by the ORM on every UPDATE it issues
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


class SoftDeleteMixin:
    deleted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        index=True,
        default=None,
    )

    @classmethod
    def not_deleted(cls):
        """SQL expression selecting rows that have not been soft-deleted."""
        return cls.deleted_at.is_(None)
