"""
Database Dependency

FastAPI dependency for database sessions.

This module provides the get_db dependency that yields async database sessions
to route handlers. The session is automatically committed on success and
rolled back on error.

Usage:
======
    from fastapi import Depends
    from sqlalchemy.ext.asyncio import AsyncSession
    from src.api.dependencies.database import get_db, DbSession

    # Using type alias (recommended)
    @router.get("/profiles")
    async def list_profiles(db: DbSession):
        return await ProfileRepository(db).list_by_roles(STAFF_ROLES)

    # Using explicit Depends
    @router.get("/profiles/{profile_id}")
    async def get_profile(profile_id: UUID, db: AsyncSession = Depends(get_db)):
        return await ProfileRepository(db).get(profile_id)
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.db import get_db as _get_db


async def get_db() -> AsyncSession:
    """
    FastAPI dependency for database sessions.

    Yields an async database session for the duration of the request.
    The session is automatically:
    - Committed on success
    - Rolled back on exception
    - Closed after the request

    Yields:
        AsyncSession: Database session for the current request
    """
    async for session in _get_db():
        yield session


# Type alias for cleaner route signatures
DbSession = Annotated[AsyncSession, Depends(get_db)]
