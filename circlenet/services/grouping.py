"""Grouping Concept: named collections of member accounts with a creator.

Invariants:
    - Group names are unique at creation time (NameConflictError otherwise),
      concurrent creates included (services/exclusive_insert.py)
    - A new group starts with an empty member set; creator never changes
    - add_to_group rejects existing members, remove_from_group rejects non-members
    - Membership writes are compare-and-set on the group's version; a lost race
      re-reads and re-validates, so concurrent adds of different accounts all land
    - No authorization here: callers (Synchronizations) order the guards

Design Decisions:
    - Optimistic retry over a per-group lock: works across worker processes
      because the version lives in the database, not in this object
"""

import logging
from collections.abc import Callable
from uuid import UUID

from circlenet.core.domain_types import member_key
from circlenet.core.errors import (
    AlreadyMemberError,
    ConcurrencyConflictError,
    ErrorContext,
    ForbiddenError,
    NameConflictError,
    NotFoundError,
    NotMemberError,
)
from circlenet.infrastructure.database import DatabaseSessionManager
from circlenet.infrastructure.document_store import DocumentStore
from circlenet.models.group import Group
from circlenet.services.exclusive_insert import insert_exclusive

logger = logging.getLogger(__name__)

DEFAULT_MAX_RETRIES = 5


class GroupingConcept:
    """concept: Grouping [User]"""

    def __init__(
        self, db: DatabaseSessionManager, max_retries: int = DEFAULT_MAX_RETRIES,
    ):
        self.groups: DocumentStore[Group] = DocumentStore(Group, db)
        self.max_retries = max(1, max_retries)

    async def create(self, name: str, creator: UUID) -> Group:
        group = await insert_exclusive(
            self.groups,
            {"name": name},
            {"name": name, "creator": creator, "members": []},
            conflict=lambda: NameConflictError(name),
            max_retries=self.max_retries,
        )
        logger.info(
            f"Group '{name}' created",
            extra={"group_id": group.id, "user_id": creator},
        )
        return group

    async def delete(self, group_id: UUID) -> dict:
        await self.groups.delete_one({"id": group_id})
        logger.info("Group deleted", extra={"group_id": group_id})
        return {"msg": "Group deleted successfully!"}

    async def add_to_group(self, group_id: UUID, account: UUID) -> dict:
        key = member_key(account)

        def add(members: list[str]) -> list[str]:
            if key in members:
                raise AlreadyMemberError(_context(group_id, account))
            return [*members, key]

        await self._mutate_members(group_id, add)
        logger.info(
            "Account added to group",
            extra={"group_id": group_id, "user_id": account},
        )
        return {"msg": "Account added to group successfully!"}

    async def remove_from_group(self, group_id: UUID, account: UUID) -> dict:
        key = member_key(account)

        def remove(members: list[str]) -> list[str]:
            if key not in members:
                raise NotMemberError(_context(group_id, account))
            return [m for m in members if m != key]

        await self._mutate_members(group_id, remove)
        logger.info(
            "Account removed from group",
            extra={"group_id": group_id, "user_id": account},
        )
        return {"msg": "Account removed from group successfully!"}

    async def get_groups_by_creator(self, creator: UUID) -> list[Group]:
        return await self.groups.read_many({"creator": creator})

    async def get_groups_for_member(self, account: UUID) -> list[Group]:
        # members is a JSON list, so membership is filtered here, not in SQL
        key = member_key(account)
        return [g for g in await self.groups.read_many() if key in (g.members or [])]

    async def get_group(self, group_id: UUID) -> Group:
        group = await self.groups.read_one({"id": group_id})
        if group is None:
            raise NotFoundError(
                "Group not found!", "Group", _context(group_id),
            )
        return group

    async def get_group_by_name(self, name: str) -> Group:
        group = await self.groups.read_one({"name": name})
        if group is None:
            raise NotFoundError(f"Group {name} not found!", "Group")
        return group

    async def is_member(self, group_id: UUID, account: UUID) -> bool:
        group = await self.groups.read_one({"id": group_id})
        return group is not None and member_key(account) in (group.members or [])

    async def assert_author_is_creator(self, group_id: UUID, caller: UUID) -> None:
        group = await self.groups.read_one({"id": group_id})
        if group is None:
            raise NotFoundError(
                "Group does not exist!", "Group", _context(group_id),
            )
        if member_key(group.creator) != member_key(caller):
            raise ForbiddenError(
                "User is not group creator!", _context(group_id, caller),
            )

    async def _mutate_members(
        self, group_id: UUID, change: Callable[[list[str]], list[str]],
    ) -> None:
        """Read-modify-write the member set with a version check, retrying on conflict."""
        for attempt in range(1, self.max_retries + 1):
            group = await self.groups.read_one({"id": group_id})
            if group is None:
                raise NotFoundError(
                    "Group not found!", "Group", _context(group_id),
                )
            members = change(list(group.members or []))
            applied = await self.groups.partial_update_one(
                {"id": group_id},
                {"members": members},
                expected_version=group.version,
            )
            if applied:
                return
            logger.warning(
                "Concurrent membership change, retrying",
                extra={"group_id": group_id, "attempt": attempt},
            )
        raise ConcurrencyConflictError(
            "Group membership changed concurrently, try again",
            attempts=self.max_retries,
            context=_context(group_id),
        )


def _context(group_id: UUID, user: UUID | None = None) -> ErrorContext:
    return ErrorContext(
        group_id=str(group_id), user_id=str(user) if user else None,
    )
