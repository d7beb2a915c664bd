"""Collaborator Protocols: contracts between the composition layer and other concepts.

Invariants:
    - The composition layer depends on these Protocols, never on concrete concepts
      it does not own (Posting, Friending)
    - Every assertion either returns None or raises a CircleNetError subclass

Design Decisions:
    - Protocol over ABC: structural subtyping, fakes in tests need no inheritance
    - Async in Protocol: implementations hit the document store
"""

from typing import Protocol

from circlenet.core.domain_types import ResourceId, UserId


class FriendshipVerifier(Protocol):
    """Confirms a friendship before group membership changes."""
    async def assert_friendship_exists(self, user: UserId, other: UserId) -> None: ...


class AuthoredResource(Protocol):
    """Structural view of a permission-scoped resource (a post)."""
    id: ResourceId
    author: UserId


class ResourceAuthority(Protocol):
    """Looks up resources and confirms who authored them."""
    async def get_post(self, post_id: ResourceId) -> AuthoredResource: ...
    async def assert_author_is_user(self, resource: ResourceId, user: UserId) -> None: ...
