"""
Base Repository

Generic async CRUD shared by every entity repository.

What This Provides:
===================
- get(id)          → Fetch single record by UUID
- get_by_ids()     → Fetch multiple records by UUIDs
- list()           → Page through records with equality filters
- count()          → Count records with equality filters
- exists()         → Check if a record exists
- create()         → INSERT and return the refreshed row
- update()         → Partial update by id (None values skipped)
- apply()          → Set fields on a loaded instance (None values kept)
- delete()         → Hard delete by id

Repositories only flush(); the request's get_db() (or the job runner's
session_scope()) owns the commit, so one service call is one transaction.

Usage:
======
    class PostRepository(BaseRepository[Post]):
        def __init__(self, session: AsyncSession) -> None:
            super().__init__(Post, session)

    post = await PostRepository(db).get(post_id)
"""

from typing import Any, Generic, Optional, Type, TypeVar
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.functions import count as sql_count

from src.shared.models.base import Base


ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Generic base repository providing common CRUD operations.

    Attributes:
        model: The SQLAlchemy model class
        session: The async database session
    """

    def __init__(self, model: Type[ModelType], session: AsyncSession) -> None:
        self.model = model
        self.session = session

    # ═══════════════════════════════════════════════════════════════════════════
    # READ OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get(self, record_id: UUID) -> Optional[ModelType]:
        """Get a single record by its UUID, or None."""
        result = await self.session.execute(select(self.model).where(self.model.id == record_id))
        return result.scalar_one_or_none()

    async def get_by_ids(self, ids: list[UUID]) -> list[ModelType]:
        """Get all records whose id is in ids (missing ids are skipped)."""
        if not ids:
            return []

        result = await self.session.execute(select(self.model).where(self.model.id.in_(ids)))
        return list(result.scalars().all())

    async def list(
        self,
        *,
        offset: int = 0,
        limit: int = 100,
        filters: Optional[dict[str, Any]] = None,
        order_by: Optional[str] = None,
        order_desc: bool = True,
    ) -> list[ModelType]:
        """
        List records with pagination and equality filters.

        Args:
            offset: Number of records to skip
            limit: Maximum records to return
            filters: field=value pairs; unknown fields and None values are ignored
            order_by: Column name to sort on
            order_desc: Sort descending when True

        Returns:
            List of model instances
        """
        query = self._apply_filters(select(self.model), filters)

        if order_by and hasattr(self.model, order_by):
            order_field = getattr(self.model, order_by)
            query = query.order_by(order_field.desc() if order_desc else order_field)

        query = query.offset(offset).limit(limit)

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def count(self, filters: Optional[dict[str, Any]] = None) -> int:
        """Count records matching the equality filters."""
        query = self._apply_filters(select(sql_count()).select_from(self.model), filters)
        result = await self.session.execute(query)
        return result.scalar() or 0

    async def exists(self, record_id: UUID) -> bool:
        result = await self.session.execute(
            select(sql_count()).select_from(self.model).where(self.model.id == record_id)
        )
        return (result.scalar() or 0) > 0

    def _apply_filters(self, query: Any, filters: Optional[dict[str, Any]]) -> Any:
        if filters:
            for field, value in filters.items():
                if value is not None and hasattr(self.model, field):
                    query = query.where(getattr(self.model, field) == value)
        return query

    # ═══════════════════════════════════════════════════════════════════════════
    # WRITE OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def create(self, **kwargs: Any) -> ModelType:
        """
        INSERT a new record and return it with DB-generated values.

        Raises:
            sqlalchemy.exc.IntegrityError: On unique/foreign-key violations
        """
        instance = self.model(**kwargs)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def update(self, record_id: UUID, **kwargs: Any) -> Optional[ModelType]:
        """
        Partial update by id. None values are skipped.

        Returns:
            Updated instance, or None if the record does not exist
        """
        instance = await self.get(record_id)
        if not instance:
            return None

        for field, value in kwargs.items():
            if hasattr(instance, field) and value is not None:
                setattr(instance, field, value)

        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def apply(self, instance: ModelType, **fields: Any) -> ModelType:
        """Set fields exactly as given (None clears a column) and flush."""
        for field, value in fields.items():
            setattr(instance, field, value)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def delete(self, record_id: UUID) -> bool:
        """Hard delete by id. Returns False when the record does not exist."""
        instance = await self.get(record_id)
        if not instance:
            return False

        await self.session.delete(instance)
        await self.session.flush()
        return True
