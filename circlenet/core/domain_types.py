"""Domain Types: rich types that replace bare primitives across the codebase.

Invariants:
    - UserId, GroupId, ResourceId, PermissionId wrap UUIDs
    - Group members are persisted as strings; member_key() is the only conversion
    - All capability names encoded as an Enum, never raw strings

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)
GroupId = NewType("GroupId", UUID)
ResourceId = NewType("ResourceId", UUID)
PermissionId = NewType("PermissionId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class Capability(str, Enum):
    """Capabilities a Permission grants to every member of its group."""
    VIEW = "view"
    LIKE = "like"

    @property
    def field_name(self) -> str:
        """Permission column holding this capability's flag."""
        return f"can_{self.value}"


def member_key(account: UUID | str) -> str:
    """Canonical string form of an account inside a group's member set."""
    return str(UUID(str(account)))
