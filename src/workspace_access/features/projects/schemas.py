"""Response payloads for project access summaries."""

from __future__ import annotations

from workspace_access.common.schema import BaseSchema


class ProjectAccessRead(BaseSchema):
    """The caller's effective access inside one project."""

    project_id: str
    tenant_id: str
    user_id: str
    role: str | None
    role_name: str | None
    role_color: str | None
    is_owner: bool
    capabilities: dict[str, bool]
    permissions: list[str]
    can_change_visibility: bool


__all__ = ["ProjectAccessRead"]
