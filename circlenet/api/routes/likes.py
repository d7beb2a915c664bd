"""Like Routes: like, unlike, and inspect likes on a post."""

from uuid import UUID

from fastapi import APIRouter, Depends

from circlenet.api.dependencies import get_caller, get_synchronizations
from circlenet.schemas.records import LikeResponse
from circlenet.services.synchronizations import Synchronizations

router = APIRouter(prefix="/api/v1/likes", tags=["likes"])


@router.get("/user/{post_id}")
async def is_post_liked_by_user(
    post_id: UUID,
    caller: UUID = Depends(get_caller),
    sync: Synchronizations = Depends(get_synchronizations),
):
    return {"liked": await sync.is_liked(caller, post_id)}


@router.put("/{post_id}")
async def like_post(
    post_id: UUID,
    caller: UUID = Depends(get_caller),
    sync: Synchronizations = Depends(get_synchronizations),
):
    like = await sync.like(caller, post_id)
    return {"msg": "Post successfully liked!", "like": LikeResponse.model_validate(like)}


@router.delete("/{post_id}")
async def unlike_post(
    post_id: UUID,
    caller: UUID = Depends(get_caller),
    sync: Synchronizations = Depends(get_synchronizations),
):
    return await sync.unlike(caller, post_id)


@router.get("/{post_id}", response_model=list[LikeResponse])
async def get_post_likes(
    post_id: UUID,
    caller: UUID = Depends(get_caller),
    sync: Synchronizations = Depends(get_synchronizations),
):
    """Likes on a post; author only."""
    return await sync.get_likes(caller, post_id)
