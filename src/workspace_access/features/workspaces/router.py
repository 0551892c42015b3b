"""HTTP endpoint exposing the workspace scope gate."""

from __future__ import annotations

from fastapi import APIRouter

from workspace_access.api.deps import CurrentUserDep, StoreDep
from workspace_access.features.projects.policies import can_manage_roles

from .gate import WorkspaceScopeGate
from .schemas import WorkspaceAccessRead

router = APIRouter(tags=["workspaces"])


@router.get(
    "/tenants/{tenant_id}/access",
    response_model=WorkspaceAccessRead,
    summary="Summarize the caller's access to a workspace",
)
async def read_workspace_access(
    tenant_id: str,
    user_id: CurrentUserDep,
    store: StoreDep,
) -> WorkspaceAccessRead:
    gate = await WorkspaceScopeGate.load(store, tenant_id, user_id)
    return WorkspaceAccessRead(
        tenant_id=tenant_id,
        user_id=user_id,
        role=gate.role.value if gate.role is not None else None,
        is_owner=gate.is_owner,
        is_admin=gate.is_admin,
        capabilities=gate.capabilities.as_dict(),
        permissions=sorted(gate.permissions),
        can_manage_roles=can_manage_roles(gate),
    )


__all__ = ["router"]
