"""Group ORM: a named collection of member accounts with a creator.

Invariants:
    - name is unique among groups at creation time (checked by GroupingConcept)
    - creator is immutable after creation
    - members never contains duplicates; entries are canonical UUID strings

Design Decisions:
    - JSON column for members: the whole set travels with the group record,
      mutations go through an optimistic version check
    - No unique index on name: uniqueness belongs to the concept, not the store
"""

import uuid

from sqlalchemy import JSON, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from circlenet.db.base import Document


class Group(Document):
    """Group entity: owns its member set."""
    __tablename__ = "groups"

    name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    creator: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)
    members: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
