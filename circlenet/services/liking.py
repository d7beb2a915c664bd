"""Liking Concept: the (user, resource) like relation.

Invariants:
    - (user, resource) is unique: a second like raises AlreadyLikedError,
      including when both likes arrive concurrently (services/exclusive_insert.py)
    - unlike pops the relation in one step; nothing popped raises NotLikedError
    - No authorization here: Synchronizations checks capability grants first
"""

import logging
from uuid import UUID

from circlenet.core.errors import AlreadyLikedError, ErrorContext, NotLikedError
from circlenet.infrastructure.database import DatabaseSessionManager
from circlenet.infrastructure.document_store import DocumentStore
from circlenet.models.like import Like
from circlenet.services.exclusive_insert import insert_exclusive

logger = logging.getLogger(__name__)

DEFAULT_MAX_RETRIES = 5


class LikingConcept:
    """concept: Liking [User, Resource]"""

    def __init__(
        self, db: DatabaseSessionManager, max_retries: int = DEFAULT_MAX_RETRIES,
    ):
        self.likes: DocumentStore[Like] = DocumentStore(Like, db)
        self.max_retries = max(1, max_retries)

    async def like(self, user: UUID, resource: UUID) -> Like:
        pair = {"user": user, "resource": resource}
        like = await insert_exclusive(
            self.likes, pair, pair,
            conflict=lambda: AlreadyLikedError(_context(user, resource)),
            max_retries=self.max_retries,
            context=_context(user, resource),
        )
        logger.info(
            "Resource liked", extra={"user_id": user, "resource_id": resource},
        )
        return like

    async def unlike(self, user: UUID, resource: UUID) -> dict:
        popped = await self.likes.pop_one({"user": user, "resource": resource})
        if popped is None:
            raise NotLikedError(_context(user, resource))
        logger.info(
            "Resource unliked", extra={"user_id": user, "resource_id": resource},
        )
        return {"msg": "Unliked!"}

    async def is_liked_by_user(self, user: UUID, resource: UUID) -> bool:
        return await self.likes.read_one({"user": user, "resource": resource}) is not None

    async def get_likes_for_resource(self, resource: UUID) -> list[Like]:
        return await self.likes.read_many({"resource": resource})

    async def count_likes(self, resource: UUID) -> int:
        return await self.likes.count({"resource": resource})


def _context(user: UUID, resource: UUID) -> ErrorContext:
    return ErrorContext(user_id=str(user), resource_id=str(resource))
