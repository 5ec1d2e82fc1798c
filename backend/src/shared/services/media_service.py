"""
Media Service

Image library backed by object storage.

Upload order:
=============
    validate → put object → insert row
                               │
                               └── insert fails → delete object, re-raise

Delete runs the other way round: the row goes first and the object is
removed only once that delete is committed, so a failed commit or a
storage hiccup leaves at worst an orphaned object, never a dangling row.
"""

import mimetypes
import os
import secrets
import time
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.config.settings import settings
from src.shared.adapters.storage_adapter import StorageAdapter, StorageError, get_storage_adapter
from src.shared.core.exceptions import (
    ExternalServiceError,
    MediaNotFoundError,
    ValidationError,
)
from src.shared.core.logging import get_logger
from src.shared.db.session import after_commit
from src.shared.models.media_file import MediaFile
from src.shared.models.profile import Profile
from src.shared.repositories.media_repository import MediaRepository
from src.shared.services.permissions import require_staff

logger = get_logger(__name__)


EDITABLE_FIELDS = ("alt_text", "caption", "credit", "tags", "category")


def storage_key(filename: str, content_type: str, now_ms: Optional[int] = None) -> str:
    """{epoch_ms}_{random}.{ext}; the extension falls back to the MIME type."""
    ext = os.path.splitext(filename or "")[1].lstrip(".").lower()
    if not ext:
        guessed = mimetypes.guess_extension(content_type or "") or ""
        ext = guessed.lstrip(".") or "bin"
    stamp = now_ms if now_ms is not None else int(time.time() * 1000)
    return f"{stamp}_{secrets.token_hex(4)}.{ext}"


class MediaService:
    def __init__(self, session: AsyncSession, storage: Optional[StorageAdapter] = None) -> None:
        self.session = session
        self.repo = MediaRepository(session)
        self.storage = storage or get_storage_adapter()

    def public_url(self, media: MediaFile) -> str:
        return self.storage.public_url(media.file_path)

    async def upload(
        self,
        user: Profile,
        filename: str,
        content_type: Optional[str],
        data: bytes,
        metadata: Optional[Mapping[str, Any]] = None,
    ) -> MediaFile:
        """
        Store an image and record it in the library.

        Raises:
            ValidationError: Not an image, or too large
            ExternalServiceError: Storage rejected the object
        """
        require_staff(user)
        if not content_type or not content_type.startswith("image/"):
            raise ValidationError("File must be an image")
        if len(data) > settings.MEDIA_MAX_UPLOAD_BYTES:
            raise ValidationError("File size must be less than 10MB")

        key = storage_key(filename, content_type)
        try:
            self.storage.upload(key, data, content_type)
        except StorageError as e:
            raise ExternalServiceError("Storage", "Failed to upload file", details={"error": str(e)})

        metadata = metadata or {}
        try:
            async with self.session.begin_nested():
                media = await self.repo.create(
                    file_path=key,
                    file_name=filename,
                    mime_type=content_type,
                    file_size=len(data),
                    width=metadata.get("width"),
                    height=metadata.get("height"),
                    alt_text=metadata.get("alt_text"),
                    caption=metadata.get("caption"),
                    credit=metadata.get("credit"),
                    tags=list(metadata.get("tags") or []),
                    category=metadata.get("category"),
                    uploaded_by=user.id,
                )
        except Exception:
            logger.warning("Media row insert failed, removing object", key=key)
            self.storage.delete(key)
            raise

        logger.info("Media uploaded", media_id=str(media.id), key=key, size=len(data))
        return media

    async def list_media(
        self,
        *,
        search: Optional[str] = None,
        category: Optional[str] = None,
        tags: Optional[Sequence[str]] = None,
        limit: int = 24,
        offset: int = 0,
    ) -> Tuple[List[MediaFile], int]:
        return await self.repo.search(
            search=search,
            category=category,
            tags=tags,
            offset=offset,
            limit=limit,
        )

    async def get_media(self, media_id: UUID) -> MediaFile:
        media = await self.repo.get(media_id)
        if not media:
            raise MediaNotFoundError(str(media_id))
        return media

    async def update_media(self, user: Profile, media_id: UUID, fields: Dict[str, Any]) -> MediaFile:
        require_staff(user)
        media = await self.get_media(media_id)
        changes = {k: fields[k] for k in EDITABLE_FIELDS if k in fields}
        if "tags" in changes:
            changes["tags"] = list(changes["tags"] or [])
        return await self.repo.apply(media, **changes)

    async def delete_media(self, user: Profile, media_id: UUID) -> None:
        require_staff(user)
        media = await self.get_media(media_id)
        await self.repo.delete(media.id)
        key = media.file_path
        after_commit(self.session, lambda: self.storage.delete(key))
        logger.info("Media deleted", media_id=str(media_id), key=key)
