"""Group Routes: create, list, read, delete groups and change their members.

Invariants:
    - Reads and deletes of one group are creator-only
    - Member changes require the caller to be friends with the account
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from circlenet.api.dependencies import get_caller, get_synchronizations
from circlenet.schemas.records import GroupResponse
from circlenet.schemas.requests import GroupCreate
from circlenet.services.synchronizations import Synchronizations

router = APIRouter(prefix="/api/v1/groups", tags=["groups"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_group(
    body: GroupCreate,
    caller: UUID = Depends(get_caller),
    sync: Synchronizations = Depends(get_synchronizations),
):
    group = await sync.create_group(caller, body.name)
    return {
        "msg": "Group successfully created!",
        "group": GroupResponse.model_validate(group),
    }


@router.get("", response_model=list[GroupResponse])
async def get_groups(
    caller: UUID = Depends(get_caller),
    sync: Synchronizations = Depends(get_synchronizations),
):
    """Groups created by the caller."""
    return await sync.get_groups(caller)


@router.get("/{group_id}", response_model=GroupResponse)
async def get_group(
    group_id: UUID,
    caller: UUID = Depends(get_caller),
    sync: Synchronizations = Depends(get_synchronizations),
):
    return await sync.get_group(caller, group_id)


@router.delete("/{group_id}")
async def delete_group(
    group_id: UUID,
    caller: UUID = Depends(get_caller),
    sync: Synchronizations = Depends(get_synchronizations),
):
    return await sync.delete_group(caller, group_id)


@router.put("/{group_id}/members/{user_id}")
async def add_to_group(
    group_id: UUID,
    user_id: UUID,
    caller: UUID = Depends(get_caller),
    sync: Synchronizations = Depends(get_synchronizations),
):
    return await sync.add_to_group(caller, group_id, user_id)


@router.delete("/{group_id}/members/{user_id}")
async def remove_from_group(
    group_id: UUID,
    user_id: UUID,
    caller: UUID = Depends(get_caller),
    sync: Synchronizations = Depends(get_synchronizations),
):
    return await sync.remove_from_group(caller, group_id, user_id)
