"""Posting Concept: posts with an author, the resources permissions are scoped to.

Invariants:
    - author is fixed at creation
    - assert_author_is_user raises NotFoundError for a missing post and
      ForbiddenError for anyone but the author
"""

import logging
from uuid import UUID

from circlenet.core.domain_types import member_key
from circlenet.core.errors import ErrorContext, ForbiddenError, NotFoundError
from circlenet.infrastructure.database import DatabaseSessionManager
from circlenet.infrastructure.document_store import DocumentStore
from circlenet.models.post import Post

logger = logging.getLogger(__name__)


class PostingConcept:
    """concept: Posting [User]"""

    def __init__(self, db: DatabaseSessionManager):
        self.posts: DocumentStore[Post] = DocumentStore(Post, db)

    async def create(self, author: UUID, content: str) -> Post:
        post_id = await self.posts.create_one({"author": author, "content": content})
        logger.info(
            "Post created", extra={"resource_id": post_id, "user_id": author},
        )
        return await self.get_post(post_id)

    async def get_posts(self) -> list[Post]:
        return await self.posts.read_many()

    async def get_by_author(self, author: UUID) -> list[Post]:
        return await self.posts.read_many({"author": author})

    async def get_post(self, post_id: UUID) -> Post:
        post = await self.posts.read_one({"id": post_id})
        if post is None:
            raise NotFoundError(
                f"Post {post_id} does not exist!", "Post",
                ErrorContext(resource_id=str(post_id)),
            )
        return post

    async def delete(self, post_id: UUID) -> dict:
        await self.posts.delete_one({"id": post_id})
        logger.info("Post deleted", extra={"resource_id": post_id})
        return {"msg": "Post deleted successfully!"}

    async def assert_author_is_user(self, resource: UUID, user: UUID) -> None:
        post = await self.get_post(resource)
        if member_key(post.author) != member_key(user):
            raise ForbiddenError(
                f"{user} is not the author of post {resource}!",
                ErrorContext(user_id=str(user), resource_id=str(resource)),
            )
