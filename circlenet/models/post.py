"""Post ORM: the resource that permissions and likes are scoped to."""

import uuid

from sqlalchemy import Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from circlenet.db.base import Document


class Post(Document):
    __tablename__ = "posts"

    author: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
