"""
Base repository class providing common database operations.

This class serves as a reusable foundation for repositories that interact with
the database using SQLAlchemy's async sessions.

Model-specific repositories inherit from it and declare, as class attributes, which
application errors stand for "row missing", "unique value taken" and "still referenced".
Every write runs inside `db_error_handler`, so integrity violations come out already
classified and anything unrecognized propagates unchanged.

Repositories only `flush()`. The surrounding request transaction (see
`bookshelf.database.session.get_async_session`) decides when to commit or roll back.
"""
import time
import logging
from typing import TypeVar, Generic, Type, Any, Sequence
from uuid import UUID

from sqlalchemy import select, update, delete, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.interfaces import ORMOption

from bookshelf.database.base import Base
from bookshelf.exceptions.base import DuplicateError, NotFoundError, RepositoryError
from bookshelf.exceptions.mapper import db_error_handler

# Type variable for the model class
ModelType = TypeVar("ModelType", bound=Base)

logger = logging.getLogger(__name__)


class BaseRepository(Generic[ModelType]):
    """
    Generic base repository providing common CRUD operations.

    Type Parameters:
        ModelType: The SQLAlchemy model class this repository manages.

    Class attributes:
        not_found_error: raised when get/update/delete match no row
        duplicate_error: raised on unique constraint violations
        reference_error: raised on foreign key violations (None = leave them unclassified)
        load_options: loader options applied to every read (eager-loaded relationships)
    """

    not_found_error: Type[NotFoundError] = NotFoundError
    duplicate_error: Type[DuplicateError] = DuplicateError
    reference_error: Type[RepositoryError] | None = None
    load_options: Sequence[ORMOption] = ()

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        """
        Args:
            model: The SQLAlchemy model class (e.g. Book, not Book())
            db: The async database session, injected per request
        """
        self.model = model
        self.db = db

    def _error_handler(self):
        return db_error_handler(
            self.model.__name__,
            duplicate_error=self.duplicate_error,
            reference_error=self.reference_error,
        )

    # =================================================================================================================
    # Create
    # =================================================================================================================

    async def create(self, **kwargs: Any) -> ModelType:
        """
        Insert a new entity and return it re-read from the database.

        The re-read picks up server-generated columns (timestamps) and applies
        `load_options`, so callers get the same shape `get_by_id` returns.

        Raises:
            duplicate_error: on unique constraint violations
            reference_error: on foreign key violations, when configured
        """
        # debug: keys only, never values
        logger.debug(
            "repo.create.start",
            extra={
                "model": self.model.__name__,
                "operation": "create",
                "provided_keys": sorted(kwargs.keys()),
            },
        )

        start = time.perf_counter()

        async with self._error_handler():
            entity = self.model(**kwargs)
            self.db.add(entity)
            await self.db.flush()
            created = await self._fetch_one(entity.id)

        logger.info(
            "repo.create.success",
            extra={
                "model": self.model.__name__,
                "operation": "create",
                "id": str(created.id),
                "duration_ms": int((time.perf_counter() - start) * 1000),
            },
        )
        return created

    # =================================================================================================================
    # Read
    # =================================================================================================================

    async def _fetch_one(self, entity_id: UUID) -> ModelType | None:
        # populate_existing: rows already in the identity map are overwritten with what the DB holds now
        query = (
            select(self.model)
            .options(*self.load_options)
            .where(self.model.id == entity_id)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def get_by_id(self, entity_id: UUID) -> ModelType:
        """
        Get an entity by its ID.

        Raises:
            not_found_error: If no row has this ID.
        """
        async with self._error_handler():
            entity = await self._fetch_one(entity_id)

        if entity is None:
            logger.info(
                "repo.get_by_id.not_found",
                extra={"model": self.model.__name__, "id": str(entity_id)},
            )
            raise self.not_found_error()

        logger.debug("repo.get_by_id.success", extra={"model": self.model.__name__, "id": str(entity_id)})
        return entity

    async def get_all(self) -> list[ModelType]:
        """
        Get every entity, newest first. No filtering, no pagination.

        Returns:
            A list of model instances (empty if none found).
        """
        query = (
            select(self.model)
            .options(*self.load_options)
            .execution_options(populate_existing=True)
        )
        if hasattr(self.model, "created_at"):
            query = query.order_by(self.model.created_at.desc())

        async with self._error_handler():
            result = await self.db.execute(query)
            entities = list(result.scalars().all())

        logger.debug("repo.get_all.success", extra={"model": self.model.__name__, "count": len(entities)})
        return entities

    # =================================================================================================================
    # Update
    # =================================================================================================================

    async def update(self, entity_id: UUID, fields: dict[str, Any]) -> None:
        """
        Apply a partial update. Only the keys in `fields` change; `updated_at` is set to
        the database's current time.

        Raises:
            not_found_error: If no row was affected.
            duplicate_error: If the update would violate a unique constraint.
        """
        update_data = dict(fields)
        if hasattr(self.model, "updated_at"):
            update_data["updated_at"] = func.now()

        # no session synchronization: rowcount comes from a plain UPDATE, and reads
        # refresh loaded instances through populate_existing
        stmt = (
            update(self.model)
            .where(self.model.id == entity_id)
            .values(**update_data)
            .execution_options(synchronize_session=False)
        )

        async with self._error_handler():
            result = await self.db.execute(stmt)

        if result.rowcount == 0:
            logger.info(
                "repo.update.not_found",
                extra={"model": self.model.__name__, "id": str(entity_id)},
            )
            raise self.not_found_error()

        logger.info(
            "repo.update.success",
            extra={
                "model": self.model.__name__,
                "id": str(entity_id),
                "updated_keys": sorted(fields.keys()),
            },
        )

    # =================================================================================================================
    # Delete
    # =================================================================================================================

    async def delete(self, entity_id: UUID) -> None:
        """
        Delete an entity by its ID.

        Raises:
            not_found_error: If no row was affected.
            reference_error: If other rows still reference it (when configured).
        """
        stmt = (
            delete(self.model)
            .where(self.model.id == entity_id)
            .execution_options(synchronize_session=False)
        )

        async with self._error_handler():
            result = await self.db.execute(stmt)

        if result.rowcount == 0:
            logger.info(
                "repo.delete.not_found",
                extra={"model": self.model.__name__, "id": str(entity_id)},
            )
            raise self.not_found_error()

        logger.info("repo.delete.success", extra={"model": self.model.__name__, "id": str(entity_id)})

    # =================================================================================================================
    # Existence Checks
    # =================================================================================================================

    async def exists(self, entity_id: UUID) -> bool:
        """
        Check if an entity exists by its ID.

        Selects only the id column, which is cheaper than loading the row.
        """
        query = select(self.model.id).where(self.model.id == entity_id)

        async with self._error_handler():
            result = await self.db.execute(query)

        found = result.scalar() is not None
        logger.debug(
            "repo.exists",
            extra={"model": self.model.__name__, "id": str(entity_id), "exists": found},
        )
        return found
