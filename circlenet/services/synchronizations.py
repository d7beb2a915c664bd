"""Synchronizations: authorization chains across concepts, one method per action.

Invariants:
    - Every chain is straight-line: guards first, then exactly one mutation
    - The first failing step aborts the chain; its error propagates unmodified
    - No retries and no compensation: a guard failure means nothing was written
    - Concepts are called only through their public operations

Design Decisions:
    - Plain async methods instead of route decorators: every chain is testable
      without FastAPI, with fakes for Friending/Posting (core/collaborator_protocols.py)
    - Like/unlike are gated by group capability grants unless
      like_requires_permission is disabled in settings
"""

import logging
from dataclasses import dataclass

from circlenet.config import Settings
from circlenet.core.collaborator_protocols import (
    AuthoredResource, FriendshipVerifier, ResourceAuthority,
)
from circlenet.core.domain_types import (
    Capability, GroupId, PermissionId, ResourceId, UserId,
)
from circlenet.core.errors import ErrorContext, ForbiddenError, NotFoundError
from circlenet.infrastructure.database import DatabaseSessionManager
from circlenet.models.group import Group
from circlenet.models.like import Like
from circlenet.models.permission import Permission
from circlenet.services.friending import FriendingConcept
from circlenet.services.grouping import GroupingConcept
from circlenet.services.liking import LikingConcept
from circlenet.services.permitting import PermittingConcept
from circlenet.services.posting import PostingConcept

logger = logging.getLogger(__name__)


@dataclass
class Concepts:
    """Every concept instance the app runs with, built once at startup."""
    grouping: GroupingConcept
    permitting: PermittingConcept
    liking: LikingConcept
    posting: PostingConcept
    friending: FriendingConcept


def build_concepts(db: DatabaseSessionManager, settings: Settings) -> Concepts:
    return Concepts(
        grouping=GroupingConcept(db, max_retries=settings.membership_max_retries),
        permitting=PermittingConcept(db),
        liking=LikingConcept(db, max_retries=settings.insert_max_retries),
        posting=PostingConcept(db),
        friending=FriendingConcept(db),
    )


class Synchronizations:
    """Composes concept calls into externally visible actions."""

    def __init__(
        self,
        grouping: GroupingConcept,
        permitting: PermittingConcept,
        liking: LikingConcept,
        friending: FriendshipVerifier,
        posting: ResourceAuthority,
        *,
        like_requires_permission: bool = True,
    ):
        self.grouping = grouping
        self.permitting = permitting
        self.liking = liking
        self.friending = friending
        self.posting = posting
        self.like_requires_permission = like_requires_permission

    @classmethod
    def from_concepts(cls, concepts: Concepts, settings: Settings) -> "Synchronizations":
        return cls(
            concepts.grouping,
            concepts.permitting,
            concepts.liking,
            concepts.friending,
            concepts.posting,
            like_requires_permission=settings.like_requires_permission,
        )

    # ─── Groups ──────────────────────────────────────────────────

    async def create_group(self, caller: UserId, name: str) -> Group:
        return await self.grouping.create(name, caller)

    async def get_groups(self, caller: UserId) -> list[Group]:
        return await self.grouping.get_groups_by_creator(caller)

    async def get_group(self, caller: UserId, group_id: GroupId) -> Group:
        await self.grouping.assert_author_is_creator(group_id, caller)
        return await self.grouping.get_group(group_id)

    async def delete_group(self, caller: UserId, group_id: GroupId) -> dict:
        await self.grouping.assert_author_is_creator(group_id, caller)
        return await self.grouping.delete(group_id)

    async def add_to_group(
        self, caller: UserId, group_id: GroupId, account: UserId,
    ) -> dict:
        await self.friending.assert_friendship_exists(caller, account)
        return await self.grouping.add_to_group(group_id, account)

    async def remove_from_group(
        self, caller: UserId, group_id: GroupId, account: UserId,
    ) -> dict:
        await self.friending.assert_friendship_exists(caller, account)
        return await self.grouping.remove_from_group(group_id, account)

    # ─── Permissions ─────────────────────────────────────────────

    async def create_permission(
        self,
        caller: UserId,
        group_id: GroupId,
        resource: ResourceId,
        can_view: bool,
        can_like: bool,
    ) -> Permission:
        await self.posting.assert_author_is_user(resource, caller)
        await self.grouping.get_group(group_id)
        return await self.permitting.create(group_id, resource, can_view, can_like)

    async def update_permission(
        self,
        caller: UserId,
        permission_id: PermissionId,
        can_view: bool | None = None,
        can_like: bool | None = None,
    ) -> Permission:
        permission = await self.permitting.get_permission(permission_id)
        await self.posting.assert_author_is_user(permission.resource, caller)
        return await self.permitting.update(permission_id, can_view, can_like)

    async def remove_permission(self, caller: UserId, permission_id: PermissionId) -> dict:
        permission = await self.permitting.get_permission(permission_id)
        await self.posting.assert_author_is_user(permission.resource, caller)
        return await self.permitting.remove(permission_id)

    async def get_resource_permissions(
        self, caller: UserId, resource: ResourceId,
    ) -> list[Permission]:
        await self.posting.assert_author_is_user(resource, caller)
        return await self.permitting.get_resource_permissions(resource)

    async def get_viewable_resources(self, caller: UserId) -> list[ResourceId]:
        return await self._granted_resources(caller, Capability.VIEW)

    async def get_likable_resources(self, caller: UserId) -> list[ResourceId]:
        return await self._granted_resources(caller, Capability.LIKE)

    # ─── Likes ───────────────────────────────────────────────────

    async def like(self, caller: UserId, resource: ResourceId) -> Like:
        if self.like_requires_permission:
            await self._assert_capability(caller, resource, Capability.LIKE)
        return await self.liking.like(caller, resource)

    async def unlike(self, caller: UserId, resource: ResourceId) -> dict:
        if self.like_requires_permission:
            await self._assert_capability(caller, resource, Capability.LIKE)
        return await self.liking.unlike(caller, resource)

    async def get_likes(self, caller: UserId, resource: ResourceId) -> list[Like]:
        await self.posting.assert_author_is_user(resource, caller)
        return await self.liking.get_likes_for_resource(resource)

    async def is_liked(self, caller: UserId, resource: ResourceId) -> bool:
        return await self.liking.is_liked_by_user(caller, resource)

    # ─── Posts ───────────────────────────────────────────────────

    async def view_post(self, caller: UserId, post_id: ResourceId) -> AuthoredResource:
        post = await self.posting.get_post(post_id)
        if post.author != caller:
            await self._assert_capability(caller, post_id, Capability.VIEW)
        return post

    # ─── Capability resolution ───────────────────────────────────

    async def _assert_capability(
        self, caller: UserId, resource: ResourceId, capability: Capability,
    ) -> None:
        """Pass if any group the caller belongs to grants capability on resource.

        Raises ForbiddenError when the caller has no memberships or some
        membership's grant denies it, NotFoundError when none of the caller's
        groups has a permission record for the resource.
        """
        check = (
            self.permitting.assert_can_like
            if capability is Capability.LIKE
            else self.permitting.assert_can_view
        )
        groups = await self.grouping.get_groups_for_member(caller)
        if not groups:
            raise ForbiddenError(
                f"You are not a member of any group allowed to {capability.value} this post!",
                ErrorContext(user_id=str(caller), resource_id=str(resource)),
            )
        denied: ForbiddenError | None = None
        missing: NotFoundError | None = None
        for group in groups:
            try:
                await check(group.id, resource)
                return
            except ForbiddenError as e:
                denied = denied or e
            except NotFoundError as e:
                missing = missing or e
        logger.info(
            f"Capability '{capability.value}' refused",
            extra={"user_id": caller, "resource_id": resource},
        )
        raise denied or missing  # type: ignore[misc]

    async def _granted_resources(
        self, caller: UserId, capability: Capability,
    ) -> list[ResourceId]:
        resources: list[ResourceId] = []
        for group in await self.grouping.get_groups_for_member(caller):
            # oldest record per resource decides, same as can_view/can_like
            decided: dict[ResourceId, bool] = {}
            for permission in await self.permitting.get_group_permissions(group.id):
                decided.setdefault(
                    permission.resource, getattr(permission, capability.field_name),
                )
            for resource, granted in decided.items():
                if granted and resource not in resources:
                    resources.append(resource)
        return resources
