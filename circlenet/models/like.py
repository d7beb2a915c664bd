"""Like ORM: the (user, resource) like relation.

Invariants:
    - (user, resource) is unique, enforced by LikingConcept before insert
"""

import uuid

from sqlalchemy import Uuid
from sqlalchemy.orm import Mapped, mapped_column

from circlenet.db.base import Document


class Like(Document):
    """One user's like of one resource."""
    __tablename__ = "likes"

    user: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)
    resource: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)
