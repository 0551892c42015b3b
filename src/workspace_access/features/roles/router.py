"""HTTP endpoints for the tenant custom role catalog."""

from __future__ import annotations

from fastapi import APIRouter, Response, status

from workspace_access.api.deps import CurrentUserDep, RoleCatalogDep, RoleManagerDep

from .schemas import (
    DefaultRoleRead,
    DefaultRoleUpdate,
    PermissionCatalogRead,
    PermissionCategoryRead,
    PermissionRead,
    RoleCreate,
    RoleOrderUpdate,
    RoleRead,
    RoleUpdate,
)
from .service import RoleCatalogService

router = APIRouter(tags=["roles"])


@router.get(
    "/permissions",
    response_model=PermissionCatalogRead,
    summary="List the project permission vocabulary",
)
async def list_permissions() -> PermissionCatalogRead:
    """Return permission categories and the Editor/Viewer presets."""

    return PermissionCatalogRead(
        categories=[
            PermissionCategoryRead(
                key=category.key,
                label=category.label,
                permissions=[
                    PermissionRead(key=perm.key, category=perm.category, label=perm.label)
                    for perm in category.permissions
                ],
            )
            for category in RoleCatalogService.permission_categories()
        ],
        editor_preset=sorted(RoleCatalogService.editor_preset()),
        viewer_preset=sorted(RoleCatalogService.viewer_preset()),
    )


@router.get(
    "/tenants/{tenant_id}/roles",
    response_model=list[RoleRead],
    summary="List custom roles",
)
async def list_roles(
    tenant_id: str,
    _user_id: CurrentUserDep,
    catalog: RoleCatalogDep,
) -> list[RoleRead]:
    roles = await catalog.list_custom_roles(tenant_id)
    return [RoleRead.model_validate(role) for role in roles]


@router.post(
    "/tenants/{tenant_id}/roles",
    response_model=RoleRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a custom role",
    responses={
        status.HTTP_403_FORBIDDEN: {"description": "Caller cannot manage roles."},
        status.HTTP_404_NOT_FOUND: {"description": "Tenant not found."},
    },
)
async def create_role(
    tenant_id: str,
    payload: RoleCreate,
    actor_id: RoleManagerDep,
    catalog: RoleCatalogDep,
) -> RoleRead:
    role = await catalog.create_custom_role(
        tenant_id,
        payload.name,
        payload.color,
        payload.permissions,
        actor_id,
    )
    return RoleRead.model_validate(role)


@router.put(
    "/tenants/{tenant_id}/roles/order",
    response_model=list[RoleRead],
    summary="Reorder custom roles",
)
async def reorder_roles(
    tenant_id: str,
    payload: RoleOrderUpdate,
    actor_id: RoleManagerDep,
    catalog: RoleCatalogDep,
) -> list[RoleRead]:
    roles = await catalog.reorder_custom_roles(tenant_id, payload.role_ids, actor_id)
    return [RoleRead.model_validate(role) for role in roles]


@router.patch(
    "/tenants/{tenant_id}/roles/{role_id}",
    response_model=RoleRead,
    summary="Update a custom role",
)
async def update_role(
    tenant_id: str,
    role_id: str,
    payload: RoleUpdate,
    actor_id: RoleManagerDep,
    catalog: RoleCatalogDep,
) -> RoleRead:
    role = await catalog.update_custom_role(tenant_id, role_id, payload, actor_id)
    return RoleRead.model_validate(role)


@router.delete(
    "/tenants/{tenant_id}/roles/{role_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a custom role",
)
async def delete_role(
    tenant_id: str,
    role_id: str,
    actor_id: RoleManagerDep,
    catalog: RoleCatalogDep,
) -> Response:
    await catalog.delete_custom_role(tenant_id, role_id, actor_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/tenants/{tenant_id}/default-role",
    response_model=DefaultRoleRead,
    summary="Read the default role for new invitees",
)
async def read_default_role(
    tenant_id: str,
    _user_id: CurrentUserDep,
    catalog: RoleCatalogDep,
) -> DefaultRoleRead:
    return DefaultRoleRead(
        default_role_id=await catalog.get_default_role_id(tenant_id),
        effective_role=await catalog.resolve_invite_role(tenant_id),
    )


@router.put(
    "/tenants/{tenant_id}/default-role",
    response_model=DefaultRoleRead,
    summary="Set the default role for new invitees",
)
async def update_default_role(
    tenant_id: str,
    payload: DefaultRoleUpdate,
    actor_id: RoleManagerDep,
    catalog: RoleCatalogDep,
) -> DefaultRoleRead:
    role_id = await catalog.set_default_role_id(tenant_id, payload.role_id, actor_id)
    return DefaultRoleRead(
        default_role_id=role_id,
        effective_role=await catalog.resolve_invite_role(tenant_id),
    )


__all__ = ["router"]
