"""
Collections Handler

Curated, ordered series of posts.
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, status

from src.api.dependencies import CurrentProfile
from src.api.dependencies.services import CollectionServiceDep
from src.shared.schemas.collection import (
    CollectionCreate,
    CollectionDetailResponse,
    CollectionPostAdd,
    CollectionResponse,
    CollectionUpdate,
    ReorderRequest,
)
from src.shared.schemas.common import MessageResponse
from src.shared.schemas.post import PostSummary


router = APIRouter()


@router.get("", response_model=List[CollectionResponse])
async def list_collections(service: CollectionServiceDep):
    return await service.list_collections()


@router.post("", response_model=CollectionResponse, status_code=status.HTTP_201_CREATED)
async def create_collection(
    request: CollectionCreate,
    profile: CurrentProfile,
    service: CollectionServiceDep,
):
    return await service.create_collection(profile, request.model_dump(exclude_unset=True))


@router.get("/slug/{slug}", response_model=CollectionDetailResponse)
async def get_collection_by_slug(slug: str, service: CollectionServiceDep):
    """Collection with its published posts, in series order."""
    collection, posts = await service.get_collection_by_slug(slug)
    return CollectionDetailResponse(
        **CollectionResponse.model_validate(collection).model_dump(),
        posts=[PostSummary.model_validate(p) for p in posts],
    )


@router.get("/post/{post_id}", response_model=List[UUID])
async def get_post_collections(post_id: UUID, service: CollectionServiceDep):
    return await service.get_post_collections(post_id)


@router.patch("/{collection_id}", response_model=CollectionResponse)
async def update_collection(
    collection_id: UUID,
    request: CollectionUpdate,
    profile: CurrentProfile,
    service: CollectionServiceDep,
):
    return await service.update_collection(
        profile, collection_id, request.model_dump(exclude_unset=True)
    )


@router.delete("/{collection_id}", response_model=MessageResponse)
async def delete_collection(collection_id: UUID, profile: CurrentProfile, service: CollectionServiceDep):
    await service.delete_collection(profile, collection_id)
    return MessageResponse(message="Collection deleted")


@router.post("/{collection_id}/posts", response_model=MessageResponse)
async def add_post(
    collection_id: UUID,
    request: CollectionPostAdd,
    profile: CurrentProfile,
    service: CollectionServiceDep,
):
    await service.add_post(profile, collection_id, request.post_id, request.order_index)
    return MessageResponse(message="Post added to collection")


@router.delete("/{collection_id}/posts/{post_id}", response_model=MessageResponse)
async def remove_post(
    collection_id: UUID,
    post_id: UUID,
    profile: CurrentProfile,
    service: CollectionServiceDep,
):
    removed = await service.remove_post(profile, collection_id, post_id)
    return MessageResponse(
        message="Post removed from collection" if removed else "Post was not in collection",
        success=removed,
    )


@router.put("/{collection_id}/order", response_model=MessageResponse)
async def reorder_posts(
    collection_id: UUID,
    request: ReorderRequest,
    profile: CurrentProfile,
    service: CollectionServiceDep,
):
    await service.reorder_posts(
        profile,
        collection_id,
        [item.model_dump() for item in request.items],
    )
    return MessageResponse(message="Collection order updated")
