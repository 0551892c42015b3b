"""Checks that combine the project and workspace scopes at a call site."""

from __future__ import annotations

from workspace_access.core.rbac.types import WorkspaceRole
from workspace_access.features.workspaces.gate import WorkspaceScopeGate

from .gate import ProjectScopeGate

_VISIBILITY_WORKSPACE_ROLES = frozenset(
    {WorkspaceRole.OWNER, WorkspaceRole.ADMIN, WorkspaceRole.MEMBER}
)

MANAGE_ROLES_PERMISSION = "tenant.roles.manage"


def can_change_visibility(
    project_gate: ProjectScopeGate,
    workspace_gate: WorkspaceScopeGate,
) -> bool:
    """Project owners may toggle privacy unless they are only a workspace guest."""

    return project_gate.is_owner and workspace_gate.role in _VISIBILITY_WORKSPACE_ROLES


def can_manage_roles(workspace_gate: WorkspaceScopeGate) -> bool:
    return workspace_gate.has_permission(MANAGE_ROLES_PERMISSION)


__all__ = ["MANAGE_ROLES_PERMISSION", "can_change_visibility", "can_manage_roles"]
