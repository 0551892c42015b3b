"""HTTP endpoint exposing the project scope gate."""

from __future__ import annotations

from fastapi import APIRouter

from workspace_access.api.deps import CurrentUserDep, StoreDep
from workspace_access.core.errors import ProjectNotFoundError
from workspace_access.core.rbac.resolver import role_display_info
from workspace_access.features.workspaces.gate import WorkspaceScopeGate

from .gate import ProjectScopeGate
from .policies import can_change_visibility
from .schemas import ProjectAccessRead

router = APIRouter(tags=["projects"])


@router.get(
    "/projects/{project_id}/access",
    response_model=ProjectAccessRead,
    summary="Summarize the caller's access to a project",
)
async def read_project_access(
    project_id: str,
    user_id: CurrentUserDep,
    store: StoreDep,
) -> ProjectAccessRead:
    gate = await ProjectScopeGate.load(store, project_id, user_id)
    if gate.project is None:
        raise ProjectNotFoundError(project_id)
    workspace_gate = await WorkspaceScopeGate.load(store, gate.project.tenant_id, user_id)

    role_name = role_color = None
    if gate.role is not None:
        role_name, role_color = role_display_info(gate.custom_roles, gate.role)

    return ProjectAccessRead(
        project_id=gate.project.id,
        tenant_id=gate.project.tenant_id,
        user_id=user_id,
        role=gate.role,
        role_name=role_name,
        role_color=role_color,
        is_owner=gate.is_owner,
        capabilities=gate.capabilities.as_dict(),
        permissions=sorted(gate.permissions),
        can_change_visibility=can_change_visibility(gate, workspace_gate),
    )


__all__ = ["router"]
