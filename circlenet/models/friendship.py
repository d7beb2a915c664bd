"""Friending ORM: pending friend requests and accepted friendships.

Invariants:
    - A Friendship is symmetric; (user1, user2) is stored once in either order
    - A FriendRequest exists only while pending (accept/reject removes it)
"""

import uuid

from sqlalchemy import Uuid
from sqlalchemy.orm import Mapped, mapped_column

from circlenet.db.base import Document


class FriendRequest(Document):
    __tablename__ = "friend_requests"

    from_user: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)
    to_user: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)


class Friendship(Document):
    __tablename__ = "friendships"

    user1: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)
    user2: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)
