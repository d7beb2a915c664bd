"""Initial schema: groups, permissions, likes, posts, friend_requests, friendships.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _document_columns() -> list[sa.Column]:
    """id/created_at/updated_at/version carried by every collection."""
    return [
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("version", sa.Integer, nullable=False, server_default="1"),
    ]


def upgrade() -> None:
    op.create_table(
        "groups",
        *_document_columns(),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("creator", sa.Uuid, nullable=False),
        sa.Column("members", sa.JSON, nullable=False),
    )
    op.create_index("ix_groups_name", "groups", ["name"])
    op.create_index("ix_groups_creator", "groups", ["creator"])

    op.create_table(
        "permissions",
        *_document_columns(),
        sa.Column("group", sa.Uuid, nullable=False),
        sa.Column("resource", sa.Uuid, nullable=False),
        sa.Column("can_view", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("can_like", sa.Boolean, nullable=False, server_default=sa.false()),
    )
    op.create_index("ix_permissions_group", "permissions", ["group"])
    op.create_index("ix_permissions_resource", "permissions", ["resource"])

    op.create_table(
        "likes",
        *_document_columns(),
        sa.Column("user", sa.Uuid, nullable=False),
        sa.Column("resource", sa.Uuid, nullable=False),
    )
    op.create_index("ix_likes_user", "likes", ["user"])
    op.create_index("ix_likes_resource", "likes", ["resource"])

    op.create_table(
        "posts",
        *_document_columns(),
        sa.Column("author", sa.Uuid, nullable=False),
        sa.Column("content", sa.Text, nullable=False),
    )
    op.create_index("ix_posts_author", "posts", ["author"])

    op.create_table(
        "friend_requests",
        *_document_columns(),
        sa.Column("from_user", sa.Uuid, nullable=False),
        sa.Column("to_user", sa.Uuid, nullable=False),
    )
    op.create_index("ix_friend_requests_from_user", "friend_requests", ["from_user"])
    op.create_index("ix_friend_requests_to_user", "friend_requests", ["to_user"])

    op.create_table(
        "friendships",
        *_document_columns(),
        sa.Column("user1", sa.Uuid, nullable=False),
        sa.Column("user2", sa.Uuid, nullable=False),
    )
    op.create_index("ix_friendships_user1", "friendships", ["user1"])
    op.create_index("ix_friendships_user2", "friendships", ["user2"])


def downgrade() -> None:
    for table in (
        "friendships", "friend_requests", "posts", "likes", "permissions", "groups",
    ):
        op.drop_table(table)
