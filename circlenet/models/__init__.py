"""ORM Models: SQLAlchemy declarative record types, one collection each.

Invariants:
    - All models inherit from Document (db/base.py)
    - No foreign keys between collections; concepts own their own invariants

Design Decisions:
    - One file per concept for locality
    - All models imported here so Base.metadata is complete before create_all
"""

from circlenet.models.group import Group  # noqa: F401
from circlenet.models.permission import Permission  # noqa: F401
from circlenet.models.like import Like  # noqa: F401
from circlenet.models.post import Post  # noqa: F401
from circlenet.models.friendship import FriendRequest, Friendship  # noqa: F401
