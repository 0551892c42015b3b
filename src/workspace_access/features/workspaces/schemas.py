from __future__ import annotations

from workspace_access.common.schema import BaseSchema


class WorkspaceAccessRead(BaseSchema):
    tenant_id: str
    user_id: str
    role: str | None
    is_owner: bool
    is_admin: bool
    capabilities: dict[str, bool]
    permissions: list[str]
    can_manage_roles: bool


__all__ = ["WorkspaceAccessRead"]
