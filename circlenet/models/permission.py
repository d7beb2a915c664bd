"""Permission ORM: view/like capability grants for one (group, resource) pair.

Invariants:
    - group and resource are opaque references (no foreign keys across collections)
    - Several records may share a (group, resource) pair; lookups use the oldest
"""

import uuid

from sqlalchemy import Boolean, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from circlenet.db.base import Document


class Permission(Document):
    """Capability grant conferred on every current member of `group`."""
    __tablename__ = "permissions"

    group: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)
    resource: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)
    can_view: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    can_like: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
