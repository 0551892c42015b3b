"""Pydantic payloads for the custom role catalog."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from workspace_access.common.schema import BaseSchema


class PermissionRead(BaseSchema):
    key: str
    category: str
    label: str


class PermissionCategoryRead(BaseSchema):
    """Permission vocabulary entry grouped for role editors."""

    key: str
    label: str
    permissions: list[PermissionRead]


class PermissionCatalogRead(BaseSchema):
    categories: list[PermissionCategoryRead]
    editor_preset: list[str]
    viewer_preset: list[str]


class RoleCreate(BaseSchema):
    """Payload for creating a custom role."""

    name: str = Field(min_length=1, max_length=100)
    color: str = Field(min_length=1, max_length=32)
    permissions: list[str] = Field(default_factory=list)


class RoleUpdate(BaseSchema):
    """Partial update; only fields present in the payload are applied."""

    name: str | None = Field(default=None, min_length=1, max_length=100)
    color: str | None = Field(default=None, min_length=1, max_length=32)
    permissions: list[str] | None = None
    is_default: bool | None = None
    position: int | None = Field(default=None, ge=0)


class RoleRead(BaseSchema):
    id: str
    name: str
    color: str
    permissions: list[str]
    is_default: bool
    position: int
    created_at: datetime | None = None
    created_by: str | None = None


class RoleOrderUpdate(BaseSchema):
    role_ids: list[str]


class DefaultRoleRead(BaseSchema):
    """Configured default role id and the role new invitees actually receive."""

    default_role_id: str | None
    effective_role: str


class DefaultRoleUpdate(BaseSchema):
    role_id: str | None = None


__all__ = [
    "DefaultRoleRead",
    "DefaultRoleUpdate",
    "PermissionCatalogRead",
    "PermissionCategoryRead",
    "PermissionRead",
    "RoleCreate",
    "RoleOrderUpdate",
    "RoleRead",
    "RoleUpdate",
]
