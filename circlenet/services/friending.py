"""Friending Concept: friend requests and symmetric friendships.

Invariants:
    - No self-requests, no request while already friends, one pending request per pair
    - accept_request consumes the pending request and creates one Friendship
    - assert_friendship_exists raises ForbiddenError when the pair are not friends
"""

import logging
from uuid import UUID

from circlenet.core.errors import (
    ErrorContext, ForbiddenError, NotAllowedError, NotFoundError,
)
from circlenet.infrastructure.database import DatabaseSessionManager
from circlenet.infrastructure.document_store import DocumentStore
from circlenet.models.friendship import FriendRequest, Friendship

logger = logging.getLogger(__name__)


class FriendingConcept:
    """concept: Friending [User]"""

    def __init__(self, db: DatabaseSessionManager):
        self.requests: DocumentStore[FriendRequest] = DocumentStore(FriendRequest, db)
        self.friendships: DocumentStore[Friendship] = DocumentStore(Friendship, db)

    async def send_request(self, from_user: UUID, to_user: UUID) -> dict:
        if from_user == to_user:
            raise NotAllowedError("Cannot send a friend request to yourself!")
        if await self._find_friendship(from_user, to_user) is not None:
            raise NotAllowedError("Users are already friends!")
        for sender, receiver in ((from_user, to_user), (to_user, from_user)):
            pending = await self.requests.read_one(
                {"from_user": sender, "to_user": receiver},
            )
            if pending is not None:
                raise NotAllowedError("A friend request between these users already exists!")
        await self.requests.create_one({"from_user": from_user, "to_user": to_user})
        logger.info("Friend request sent", extra={"user_id": from_user})
        return {"msg": "Sent request!"}

    async def remove_request(self, from_user: UUID, to_user: UUID) -> dict:
        await self._pop_request(from_user, to_user)
        return {"msg": "Removed request!"}

    async def accept_request(self, from_user: UUID, to_user: UUID) -> dict:
        await self._pop_request(from_user, to_user)
        await self.friendships.create_one({"user1": from_user, "user2": to_user})
        logger.info("Friend request accepted", extra={"user_id": to_user})
        return {"msg": "Accepted request!"}

    async def reject_request(self, from_user: UUID, to_user: UUID) -> dict:
        await self._pop_request(from_user, to_user)
        return {"msg": "Rejected request!"}

    async def remove_friend(self, user: UUID, friend: UUID) -> dict:
        for user1, user2 in ((user, friend), (friend, user)):
            if await self.friendships.pop_one({"user1": user1, "user2": user2}) is not None:
                logger.info("Friendship removed", extra={"user_id": user})
                return {"msg": "Unfriended!"}
        raise NotFoundError(
            f"Friendship between {user} and {friend} does not exist!", "Friendship",
        )

    async def get_friends(self, user: UUID) -> list[UUID]:
        friends = [f.user2 for f in await self.friendships.read_many({"user1": user})]
        friends += [f.user1 for f in await self.friendships.read_many({"user2": user})]
        return friends

    async def get_requests(self, user: UUID) -> list[FriendRequest]:
        sent = await self.requests.read_many({"from_user": user})
        received = await self.requests.read_many({"to_user": user})
        return sent + received

    async def assert_friendship_exists(self, user: UUID, other: UUID) -> None:
        if await self._find_friendship(user, other) is None:
            raise ForbiddenError(
                f"User {user} and {other} are not friends!",
                ErrorContext(user_id=str(user)),
            )

    async def _find_friendship(self, user: UUID, other: UUID) -> Friendship | None:
        found = await self.friendships.read_one({"user1": user, "user2": other})
        if found is None:
            found = await self.friendships.read_one({"user1": other, "user2": user})
        return found

    async def _pop_request(self, from_user: UUID, to_user: UUID) -> FriendRequest:
        request = await self.requests.pop_one({"from_user": from_user, "to_user": to_user})
        if request is None:
            raise NotFoundError(
                f"Friend request from {from_user} to {to_user} does not exist!",
                "FriendRequest",
            )
        return request
