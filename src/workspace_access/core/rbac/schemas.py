"""Pydantic documents for roles and memberships as they are stored."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field, field_validator

from workspace_access.common.schema import BaseSchema


class CustomRole(BaseSchema):
    """Tenant-owned role with freely assigned permissions."""

    id: str = Field(min_length=1)
    name: str
    color: str
    permissions: list[str] = Field(default_factory=list)
    is_default: bool = False
    position: int = 0
    created_at: datetime | None = None
    created_by: str | None = None

    @field_validator("permissions")
    @classmethod
    def _dedupe_permissions(cls, value: list[str]) -> list[str]:
        return list(dict.fromkeys(value))


class ProjectMember(BaseSchema):
    """Structured project membership record."""

    user_id: str
    # Legacy literal (Owner/Editor/Viewer) or a custom role id.
    role: str
    joined_at: datetime | None = None
    invited_by: str | None = None


class ProjectSnapshot(BaseSchema):
    """Project fields the resolver needs, with membership already normalized."""

    id: str
    tenant_id: str
    owner_id: str
    title: str = ""
    is_private: bool = False
    members: list[ProjectMember] = Field(default_factory=list)


class WorkspaceMember(BaseSchema):
    user_id: str
    # Stored verbatim; legacy Editor/Viewer values are aliased at read time.
    role: str


__all__ = ["CustomRole", "ProjectMember", "ProjectSnapshot", "WorkspaceMember"]
