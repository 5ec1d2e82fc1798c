"""
MediaFile Repository
"""

from typing import Optional, Sequence

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.functions import count as sql_count

from src.shared.models.media_file import MediaFile
from src.shared.repositories.base import BaseRepository


class MediaRepository(BaseRepository[MediaFile]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(MediaFile, session)

    async def search(
        self,
        *,
        search: Optional[str] = None,
        category: Optional[str] = None,
        tags: Optional[Sequence[str]] = None,
        offset: int = 0,
        limit: int = 24,
    ) -> tuple[list[MediaFile], int]:
        """
        Media library listing, newest upload first.

        search matches file_name, alt_text or caption case-insensitively;
        tags must all be present on the file.
        """
        conditions = []
        if search:
            pattern = f"%{search}%"
            conditions.append(
                or_(
                    MediaFile.file_name.ilike(pattern),
                    MediaFile.alt_text.ilike(pattern),
                    MediaFile.caption.ilike(pattern),
                )
            )
        if category:
            conditions.append(MediaFile.category == category)
        if tags:
            conditions.append(MediaFile.tags.contains(list(tags)))

        total = await self.session.execute(
            select(sql_count()).select_from(MediaFile).where(*conditions)
        )
        result = await self.session.execute(
            select(MediaFile)
            .where(*conditions)
            .order_by(MediaFile.uploaded_at.desc())
            .offset(offset)
            .limit(limit)
        )
        return list(result.scalars().all()), total.scalar() or 0
