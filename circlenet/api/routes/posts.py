"""Post Routes: create, list, view and delete posts."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from circlenet.api.dependencies import get_caller, get_concepts, get_synchronizations
from circlenet.schemas.records import PostResponse
from circlenet.schemas.requests import PostCreate
from circlenet.services.synchronizations import Concepts, Synchronizations

router = APIRouter(prefix="/api/v1/posts", tags=["posts"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_post(
    body: PostCreate,
    caller: UUID = Depends(get_caller),
    concepts: Concepts = Depends(get_concepts),
):
    post = await concepts.posting.create(caller, body.content)
    return {"msg": "Post successfully created!", "post": PostResponse.model_validate(post)}


@router.get("", response_model=list[PostResponse])
async def get_posts(
    author: UUID | None = Query(None),
    concepts: Concepts = Depends(get_concepts),
):
    if author:
        return await concepts.posting.get_by_author(author)
    return await concepts.posting.get_posts()


@router.get("/{post_id}", response_model=PostResponse)
async def view_post(
    post_id: UUID,
    caller: UUID = Depends(get_caller),
    sync: Synchronizations = Depends(get_synchronizations),
):
    """Author, or a member of a group allowed to view it."""
    return await sync.view_post(caller, post_id)


@router.delete("/{post_id}")
async def delete_post(
    post_id: UUID,
    caller: UUID = Depends(get_caller),
    concepts: Concepts = Depends(get_concepts),
):
    await concepts.posting.assert_author_is_user(post_id, caller)
    return await concepts.posting.delete(post_id)
