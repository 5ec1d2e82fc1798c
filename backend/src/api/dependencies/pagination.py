"""
Pagination dependency.

    @router.get("/comments")
    async def list_comments(pagination: Pagination):
        ... pagination.offset, pagination.limit ...
"""
from typing import Annotated

from fastapi import Depends, Query

from src.shared.schemas.common import PaginationParams
from src.shared.utils.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE


async def get_pagination(
    page: int = Query(1, ge=1, description="Page number (1-indexed)"),
    per_page: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE, description="Items per page"),
) -> PaginationParams:
    return PaginationParams(page=page, per_page=per_page)


Pagination = Annotated[PaginationParams, Depends(get_pagination)]
