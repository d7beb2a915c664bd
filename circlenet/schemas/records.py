"""Record Schemas: public serialization of every concept's records.

Invariants:
    - Every response carries id, created_at and updated_at
    - Group members serialize as UUIDs (stored as strings)
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class RecordResponse(BaseModel):
    """Store-managed fields shared by every record."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    created_at: datetime
    updated_at: datetime


class GroupResponse(RecordResponse):
    name: str
    creator: UUID
    members: list[UUID]


class PermissionResponse(RecordResponse):
    group: UUID
    resource: UUID
    can_view: bool
    can_like: bool


class LikeResponse(RecordResponse):
    user: UUID
    resource: UUID


class PostResponse(RecordResponse):
    author: UUID
    content: str


class FriendRequestResponse(RecordResponse):
    from_user: UUID
    to_user: UUID
