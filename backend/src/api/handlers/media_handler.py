"""
Media Handler

Image library backed by object storage. Uploads are multipart; tags are
sent as a comma-separated form field.
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, File, Form, Query, UploadFile, status

from src.api.dependencies import CurrentProfile
from src.api.dependencies.services import MediaServiceDep
from src.shared.models.media_file import MediaFile
from src.shared.schemas.collection import MediaListResponse, MediaResponse, MediaUpdate
from src.shared.schemas.common import MessageResponse
from src.shared.services.media_service import MediaService
from src.shared.services.permissions import require_staff


router = APIRouter()


def _to_response(service: MediaService, media: MediaFile) -> MediaResponse:
    response = MediaResponse.model_validate(media)
    response.url = service.public_url(media)
    return response


def _split_tags(raw: Optional[str]) -> List[str]:
    if not raw:
        return []
    return [t.strip() for t in raw.split(",") if t.strip()]


@router.get("", response_model=MediaListResponse)
async def list_media(
    profile: CurrentProfile,
    service: MediaServiceDep,
    search: Optional[str] = None,
    category: Optional[str] = None,
    tags: Optional[str] = None,
    limit: int = Query(24, ge=1, le=100),
    offset: int = Query(0, ge=0),
):
    require_staff(profile)
    items, total = await service.list_media(
        search=search,
        category=category,
        tags=_split_tags(tags) or None,
        limit=limit,
        offset=offset,
    )
    return MediaListResponse(data=[_to_response(service, m) for m in items], total=total)


@router.post("", response_model=MediaResponse, status_code=status.HTTP_201_CREATED)
async def upload_media(
    profile: CurrentProfile,
    service: MediaServiceDep,
    file: UploadFile = File(...),
    alt_text: Optional[str] = Form(None),
    caption: Optional[str] = Form(None),
    credit: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    tags: Optional[str] = Form(None),
    width: Optional[int] = Form(None),
    height: Optional[int] = Form(None),
):
    """
    Upload an image (10MB max).

    Raises:
        400: Not an image, or too large
        502: Storage rejected the object
    """
    data = await file.read()
    media = await service.upload(
        profile,
        filename=file.filename or "upload",
        content_type=file.content_type,
        data=data,
        metadata={
            "alt_text": alt_text,
            "caption": caption,
            "credit": credit,
            "category": category,
            "tags": _split_tags(tags),
            "width": width,
            "height": height,
        },
    )
    return _to_response(service, media)


@router.get("/{media_id}", response_model=MediaResponse)
async def get_media(media_id: UUID, profile: CurrentProfile, service: MediaServiceDep):
    require_staff(profile)
    return _to_response(service, await service.get_media(media_id))


@router.patch("/{media_id}", response_model=MediaResponse)
async def update_media(
    media_id: UUID,
    request: MediaUpdate,
    profile: CurrentProfile,
    service: MediaServiceDep,
):
    media = await service.update_media(profile, media_id, request.model_dump(exclude_unset=True))
    return _to_response(service, media)


@router.delete("/{media_id}", response_model=MessageResponse)
async def delete_media(media_id: UUID, profile: CurrentProfile, service: MediaServiceDep):
    await service.delete_media(profile, media_id)
    return MessageResponse(message="Media deleted")
