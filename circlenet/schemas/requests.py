"""Request Schemas: field-level validation for request bodies.

Invariants:
    - GroupCreate.name: 1-200 chars, stripped, non-empty
    - PostCreate.content: 1-10000 chars
    - PermissionUpdate must change at least one flag
"""

from uuid import UUID

from pydantic import BaseModel, Field, field_validator, model_validator


class GroupCreate(BaseModel):
    """Group creation: validates name length and whitespace."""
    name: str = Field(min_length=1, max_length=200)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v


class PermissionCreate(BaseModel):
    group: UUID
    resource: UUID
    can_view: bool = False
    can_like: bool = False


class PermissionUpdate(BaseModel):
    can_view: bool | None = None
    can_like: bool | None = None

    @model_validator(mode="after")
    def require_a_flag(self):
        if self.can_view is None and self.can_like is None:
            raise ValueError("permission update requires can_view or can_like")
        return self


class PostCreate(BaseModel):
    content: str = Field(min_length=1, max_length=10_000)
