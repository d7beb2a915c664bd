"""Permitting Concept: per-(group, resource) view/like capability grants.

Invariants:
    - create always inserts; several records may exist for one (group, resource)
    - can_view/can_like read the oldest matching record
    - No record at all -> NotFoundError; record with the flag off -> ForbiddenError
      (callers can tell "no policy configured" from "policy denies")
"""

import logging
from uuid import UUID

from circlenet.core.domain_types import Capability
from circlenet.core.errors import ErrorContext, ForbiddenError, NotFoundError
from circlenet.infrastructure.database import DatabaseSessionManager
from circlenet.infrastructure.document_store import DocumentStore
from circlenet.models.permission import Permission

logger = logging.getLogger(__name__)


class PermittingConcept:
    """concept: Permitting [Resource, Group]"""

    def __init__(self, db: DatabaseSessionManager):
        self.permissions: DocumentStore[Permission] = DocumentStore(Permission, db)

    async def create(
        self, group: UUID, resource: UUID, can_view: bool, can_like: bool,
    ) -> Permission:
        permission_id = await self.permissions.create_one({
            "group": group,
            "resource": resource,
            "can_view": can_view,
            "can_like": can_like,
        })
        logger.info(
            "Permission created",
            extra={"permission_id": permission_id, "group_id": group, "resource_id": resource},
        )
        return await self.get_permission(permission_id)

    async def remove(self, permission_id: UUID) -> dict:
        await self.permissions.delete_one({"id": permission_id})
        logger.info("Permission removed", extra={"permission_id": permission_id})
        return {"msg": "Permission deleted successfully!"}

    async def update(
        self,
        permission_id: UUID,
        can_view: bool | None = None,
        can_like: bool | None = None,
    ) -> Permission:
        patch = {
            name: value
            for name, value in (("can_view", can_view), ("can_like", can_like))
            if value is not None
        }
        if patch:
            updated = await self.permissions.partial_update_one(
                {"id": permission_id}, patch,
            )
            if not updated:
                raise _permission_not_found(permission_id)
        return await self.get_permission(permission_id)

    async def get_permission(self, permission_id: UUID) -> Permission:
        permission = await self.permissions.read_one({"id": permission_id})
        if permission is None:
            raise _permission_not_found(permission_id)
        return permission

    async def can_view(self, group: UUID, resource: UUID) -> bool:
        return await self._flag(group, resource, Capability.VIEW)

    async def can_like(self, group: UUID, resource: UUID) -> bool:
        return await self._flag(group, resource, Capability.LIKE)

    async def assert_can_view(self, group: UUID, resource: UUID) -> None:
        if not await self.can_view(group, resource):
            raise ForbiddenError(
                "You do not have permission to view this post!",
                _context(group, resource),
            )

    async def assert_can_like(self, group: UUID, resource: UUID) -> None:
        if not await self.can_like(group, resource):
            raise ForbiddenError(
                "You do not have permission to like this post!",
                _context(group, resource),
            )

    async def get_resource_permissions(self, resource: UUID) -> list[Permission]:
        return await self.permissions.read_many({"resource": resource})

    async def get_group_permissions(self, group: UUID) -> list[Permission]:
        return await self.permissions.read_many({"group": group})

    async def _flag(self, group: UUID, resource: UUID, capability: Capability) -> bool:
        permission = await self.permissions.read_one(
            {"group": group, "resource": resource},
        )
        if permission is None:
            raise NotFoundError(
                "Permission not found!", "Permission", _context(group, resource),
            )
        return bool(getattr(permission, capability.field_name))


def _permission_not_found(permission_id: UUID) -> NotFoundError:
    return NotFoundError(
        "Permission not found!", "Permission",
        ErrorContext(debug_info={"permission_id": str(permission_id)}),
    )


def _context(group: UUID, resource: UUID) -> ErrorContext:
    return ErrorContext(group_id=str(group), resource_id=str(resource))
