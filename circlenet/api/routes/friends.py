"""Friend Routes: friend requests and friendships."""

from uuid import UUID

from fastapi import APIRouter, Depends

from circlenet.api.dependencies import get_caller, get_concepts
from circlenet.schemas.records import FriendRequestResponse
from circlenet.services.synchronizations import Concepts

router = APIRouter(prefix="/api/v1/friends", tags=["friends"])


@router.get("", response_model=list[UUID])
async def get_friends(
    caller: UUID = Depends(get_caller),
    concepts: Concepts = Depends(get_concepts),
):
    return await concepts.friending.get_friends(caller)


@router.get("/requests", response_model=list[FriendRequestResponse])
async def get_requests(
    caller: UUID = Depends(get_caller),
    concepts: Concepts = Depends(get_concepts),
):
    return await concepts.friending.get_requests(caller)


@router.post("/requests/{to_id}")
async def send_friend_request(
    to_id: UUID,
    caller: UUID = Depends(get_caller),
    concepts: Concepts = Depends(get_concepts),
):
    return await concepts.friending.send_request(caller, to_id)


@router.delete("/requests/{to_id}")
async def remove_friend_request(
    to_id: UUID,
    caller: UUID = Depends(get_caller),
    concepts: Concepts = Depends(get_concepts),
):
    return await concepts.friending.remove_request(caller, to_id)


@router.put("/accept/{from_id}")
async def accept_friend_request(
    from_id: UUID,
    caller: UUID = Depends(get_caller),
    concepts: Concepts = Depends(get_concepts),
):
    return await concepts.friending.accept_request(from_id, caller)


@router.put("/reject/{from_id}")
async def reject_friend_request(
    from_id: UUID,
    caller: UUID = Depends(get_caller),
    concepts: Concepts = Depends(get_concepts),
):
    return await concepts.friending.reject_request(from_id, caller)


@router.delete("/{friend_id}")
async def remove_friend(
    friend_id: UUID,
    caller: UUID = Depends(get_caller),
    concepts: Concepts = Depends(get_concepts),
):
    return await concepts.friending.remove_friend(caller, friend_id)
