"""
Database Module

Database connectivity and session management for Inshort.

    FastAPI route ──get_db()──▶ AsyncSession ──▶ Service ──▶ Repository ──▶ PostgreSQL

Usage in FastAPI:
=================
    from fastapi import Depends
    from src.shared.db import get_db
    from src.shared.repositories import PostRepository

    @router.get("/posts/{post_id}")
    async def get_post(post_id: UUID, db: AsyncSession = Depends(get_db)):
        return await PostRepository(db).get(post_id)
"""

from src.shared.db.session import (
    get_db,
    session_scope,
    after_commit,
    run_after_commit,
    check_db,
    init_db,
    close_db,
    AsyncSessionLocal,
    engine,
)

__all__ = [
    "get_db",
    "session_scope",
    "after_commit",
    "run_after_commit",
    "check_db",
    "init_db",
    "close_db",
    "AsyncSessionLocal",
    "engine",
]
