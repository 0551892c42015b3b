"""Storage collaborator contract for the resolution engine."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

from workspace_access.core.rbac.schemas import (
    CustomRole,
    ProjectMember,
    ProjectSnapshot,
    WorkspaceMember,
)


@runtime_checkable
class AccessStore(Protocol):
    """Document store holding tenants, projects and workspace memberships.

    Custom roles are always written as a complete list; there is no
    per-element update.
    """

    async def get_tenant_custom_roles(self, tenant_id: str) -> list[CustomRole] | None: ...

    async def write_tenant_custom_roles(
        self, tenant_id: str, roles: Sequence[CustomRole]
    ) -> None: ...

    async def get_tenant_default_role_id(self, tenant_id: str) -> str | None: ...

    async def set_tenant_default_role_id(self, tenant_id: str, role_id: str | None) -> None: ...

    async def get_project(self, project_id: str) -> ProjectSnapshot | None: ...

    async def get_stored_members(self, project_id: str) -> list[Any] | None: ...

    async def write_project_members(
        self, project_id: str, members: Sequence[ProjectMember]
    ) -> None: ...

    async def list_workspace_members(self, tenant_id: str) -> list[WorkspaceMember]: ...


__all__ = ["AccessStore"]
