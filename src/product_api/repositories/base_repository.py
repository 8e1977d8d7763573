"""
Base repository class providing common database operations.

This class serves as a reusable foundation for repositories that interact with
the database using SQLAlchemy's async sessions.

Models that carry a `deleted_at` column (SoftDeleteMixin) are treated as
soft-deletable: every read issued from here hides rows whose `deleted_at` is
set, and `soft_delete()` marks rows instead of removing them.

Repositories only `flush()`; committing is left to the caller (the request
handler), so a request is a single short transaction.
"""
import time
import logging
from typing import TypeVar, Generic, Type, Any

from sqlalchemy import select, update, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select

from product_api.database.base import Base
from product_api.exceptions.base import RepositoryError, NotFoundError, InvalidFieldError
from product_api.exceptions.mapper import db_error_handler
from product_api.validators.model_validators import missing_required_fields, unknown_fields

# Type variable for the model class
ModelType = TypeVar("ModelType", bound=Base)

logger = logging.getLogger(__name__)


class BaseRepository(Generic[ModelType]):
    """
    Generic base repository providing common CRUD operations.

    Type Parameters:
        ModelType: The SQLAlchemy model class this repository manages.
    """

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        """
        Initialize the repository.

        Args:
            model: The SQLAlchemy model class (not an instance), e.g. Product.
            db: The async database session, injected per request.
        """
        self.model = model
        self.db = db

    @property
    def soft_deletable(self) -> bool:
        return hasattr(self.model, "deleted_at")

    def _active(self, query: Select) -> Select:
        """Restrict `query` to rows that are not soft-deleted."""
        if self.soft_deletable:
            return query.where(self.model.not_deleted())
        return query

    # =================================================================================================================
    # Create
    # =================================================================================================================

    async def create(self, **kwargs) -> ModelType:
        """
        Create an entity with validation + DB write.

        Logging:
            - DEBUG: start event with model name and provided keys (not values).
            - INFO: expected input problems (unknown fields, missing required).
            - INFO: success event with created id and duration_ms.

        Raises:
            InvalidFieldError: If a kwarg is not a mapped attribute of the model.
            RepositoryError: If a required column is missing or the write fails.
        """
        model_name = self.model.__name__
        logger.debug(
            "repo.create.start",
            extra={"model": model_name, "operation": "create", "provided_keys": sorted(kwargs.keys())},
        )

        unknown = unknown_fields(self.model, kwargs)
        if unknown:
            logger.info(
                "repo.create.invalid_fields",
                extra={"model": model_name, "operation": "create", "invalid_fields": sorted(unknown)},
            )
            raise InvalidFieldError(f"Unknown field(s) for {model_name}: {', '.join(unknown)}", fields=unknown)

        missing = missing_required_fields(self.model, kwargs)
        if missing:
            logger.info(
                "repo.create.missing_required",
                extra={"model": model_name, "operation": "create", "missing_fields": sorted(missing)},
            )
            raise RepositoryError(f"Missing required field(s): {', '.join(missing)} for {model_name}", fields=missing)

        start = time.perf_counter()
        async with db_error_handler(self.db, model_name):
            entity = self.model(**kwargs)
            self.db.add(entity)
            await self.db.flush()
            # reload server-generated columns (id, created_at, updated_at)
            await self.db.refresh(entity)

        logger.info(
            "repo.create.success",
            extra={
                "model": model_name,
                "operation": "create",
                "id": getattr(entity, "id", None),
                "duration_ms": int((time.perf_counter() - start) * 1000),
            },
        )
        return entity

    # =================================================================================================================
    # Read (single entity)
    # =================================================================================================================

    async def get_by_id(self, entity_id: Any) -> ModelType | None:
        """
        Get a live (not soft-deleted) entity by its primary key.

        Args:
            entity_id: The primary key value. Passed to the database as given.

        Returns:
            The entity if found, otherwise None.

        Raises:
            RepositoryError: If the query fails.
        """
        return await self._fetch_by_id(entity_id)

    async def get_by_id_or_raise(self, entity_id: Any) -> ModelType:
        """
        Get an entity by its ID or raise NotFoundError.

        Raises:
            NotFoundError: If the entity does not exist or is soft-deleted.
        """
        entity = await self._fetch_by_id(entity_id)
        if entity is None:
            raise NotFoundError(f"{self.model.__name__} with ID {entity_id} not found")
        return entity

    async def _fetch_by_id(self, entity_id: Any) -> ModelType | None:
        async with db_error_handler(self.db, self.model.__name__):
            result = await self.db.execute(self._active(select(self.model).where(self.model.id == entity_id)))
            entity = result.scalar_one_or_none()

        logger.debug("repo.get_by_id", extra={"model": self.model.__name__, "id": entity_id, "found": entity is not None})
        return entity

    async def get_first(self) -> ModelType | None:
        """Return the live entity with the lowest primary key, or None."""
        async with db_error_handler(self.db, self.model.__name__):
            result = await self.db.execute(
                self._active(select(self.model)).order_by(self.model.id.asc()).limit(1)
            )
            return result.scalars().first()

    # =================================================================================================================
    # Read (multiple entities)
    # =================================================================================================================

    async def get_all(self, offset: int = 0, limit: int = 100) -> list[ModelType]:
        """
        Get live entities ordered by primary key.

        Args:
            offset: Number of entities to skip.
            limit: Maximum number of entities to return (page size).

        Returns:
            A list of model instances (empty if none found).
        """
        query = self._active(select(self.model)).order_by(self.model.id.asc()).offset(offset).limit(limit)

        async with db_error_handler(self.db, self.model.__name__):
            result = await self.db.execute(query)
            entities = list(result.scalars().all())

        logger.debug(
            "repo.get_all",
            extra={"model": self.model.__name__, "offset": offset, "limit": limit, "returned": len(entities)},
        )
        return entities

    async def count(self) -> int:
        """Count live entities. Independent of any pagination window."""
        async with db_error_handler(self.db, self.model.__name__):
            result = await self.db.execute(self._active(select(func.count(self.model.id))))
            return result.scalar() or 0

    # =================================================================================================================
    # Update
    # =================================================================================================================

    async def update(self, entity_id: Any, **kwargs) -> ModelType:
        """
        Overwrite the given fields on a live entity.

        Only mapped attributes may be passed. `updated_at` is set from the
        database clock on every call, even when no value changes.

        Raises:
            InvalidFieldError: If a kwarg is not a mapped attribute of the model.
            NotFoundError: If the entity does not exist or is soft-deleted.
            RepositoryError: If the write fails.
        """
        unknown = unknown_fields(self.model, kwargs)
        if unknown:
            raise InvalidFieldError(
                f"Unknown field(s) for {self.model.__name__}: {', '.join(unknown)}", fields=unknown
            )

        entity = await self.get_by_id_or_raise(entity_id)

        start = time.perf_counter()
        async with db_error_handler(self.db, self.model.__name__):
            for field, value in kwargs.items():
                setattr(entity, field, value)
            if hasattr(self.model, "updated_at"):
                # forces the UPDATE even when every value is unchanged
                entity.updated_at = func.now()
            await self.db.flush()
            await self.db.refresh(entity)

        logger.info(
            "repo.update.success",
            extra={
                "model": self.model.__name__,
                "operation": "update",
                "id": entity_id,
                "fields": sorted(kwargs.keys()),
                "duration_ms": int((time.perf_counter() - start) * 1000),
            },
        )
        return entity

    # =================================================================================================================
    # Delete
    # =================================================================================================================

    async def soft_delete(self, entity_id: Any) -> None:
        """
        Mark a live entity as deleted by stamping `deleted_at`.

        Raises:
            NotFoundError: If no row was affected (missing id or already deleted).
            RepositoryError: If the model is not soft-deletable or the write fails.
        """
        if not self.soft_deletable:
            raise RepositoryError(f"{self.model.__name__} does not support soft delete")

        stmt = (
            update(self.model)
            .where(self.model.id == entity_id, self.model.not_deleted())
            .values(deleted_at=func.now())
            .execution_options(synchronize_session=False)
        )

        async with db_error_handler(self.db, self.model.__name__):
            result = await self.db.execute(stmt)

        # rowcount indicates how many rows were affected
        if result.rowcount == 0:
            logger.info("repo.soft_delete.not_found", extra={"model": self.model.__name__, "id": entity_id})
            raise NotFoundError(f"{self.model.__name__} with ID {entity_id} not found")

        logger.info("repo.soft_delete.success", extra={"model": self.model.__name__, "id": entity_id})
