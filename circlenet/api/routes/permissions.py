"""Permission Routes: capability grants on posts, managed by the post's author.

Invariants:
    - /viewable and /likable are declared before /{resource_id}
    - Creating, changing, removing and listing grants is author-only
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from circlenet.api.dependencies import get_caller, get_synchronizations
from circlenet.schemas.records import PermissionResponse
from circlenet.schemas.requests import PermissionCreate, PermissionUpdate
from circlenet.services.synchronizations import Synchronizations

router = APIRouter(prefix="/api/v1/permissions", tags=["permissions"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_permission(
    body: PermissionCreate,
    caller: UUID = Depends(get_caller),
    sync: Synchronizations = Depends(get_synchronizations),
):
    permission = await sync.create_permission(
        caller, body.group, body.resource, body.can_view, body.can_like,
    )
    return {
        "msg": "Permission successfully created!",
        "permission": PermissionResponse.model_validate(permission),
    }


@router.get("/viewable", response_model=list[UUID])
async def get_viewable_posts(
    caller: UUID = Depends(get_caller),
    sync: Synchronizations = Depends(get_synchronizations),
):
    """Posts the caller's groups may view."""
    return await sync.get_viewable_resources(caller)


@router.get("/likable", response_model=list[UUID])
async def get_likable_posts(
    caller: UUID = Depends(get_caller),
    sync: Synchronizations = Depends(get_synchronizations),
):
    """Posts the caller's groups may like."""
    return await sync.get_likable_resources(caller)


@router.get("/{resource_id}", response_model=list[PermissionResponse])
async def get_post_permissions(
    resource_id: UUID,
    caller: UUID = Depends(get_caller),
    sync: Synchronizations = Depends(get_synchronizations),
):
    return await sync.get_resource_permissions(caller, resource_id)


@router.patch("/{permission_id}", response_model=PermissionResponse)
async def update_permission(
    permission_id: UUID,
    body: PermissionUpdate,
    caller: UUID = Depends(get_caller),
    sync: Synchronizations = Depends(get_synchronizations),
):
    return await sync.update_permission(
        caller, permission_id, body.can_view, body.can_like,
    )


@router.delete("/{permission_id}")
async def remove_permission(
    permission_id: UUID,
    caller: UUID = Depends(get_caller),
    sync: Synchronizations = Depends(get_synchronizations),
):
    return await sync.remove_permission(caller, permission_id)
