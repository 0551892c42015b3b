"""Shared FastAPI dependencies."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Header, HTTPException, Path, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from workspace_access.core.errors import UnauthenticatedError
from workspace_access.features.projects.policies import can_manage_roles
from workspace_access.features.roles.service import RoleCatalogService
from workspace_access.features.workspaces.gate import WorkspaceScopeGate
from workspace_access.infra.db.session import get_session
from workspace_access.infra.store import SqlAlchemyAccessStore

SessionDep = Annotated[AsyncSession, Depends(get_session)]


async def get_optional_user_id(
    x_user_id: Annotated[str | None, Header(alias="X-User-Id")] = None,
) -> str | None:
    """Return the caller id supplied by the upstream authentication layer."""

    if x_user_id is None:
        return None
    return x_user_id.strip() or None


async def get_current_user_id(
    user_id: Annotated[str | None, Depends(get_optional_user_id)],
) -> str:
    if user_id is None:
        raise UnauthenticatedError()
    return user_id


OptionalUserDep = Annotated[str | None, Depends(get_optional_user_id)]
CurrentUserDep = Annotated[str, Depends(get_current_user_id)]


async def get_store(session: SessionDep) -> SqlAlchemyAccessStore:
    return SqlAlchemyAccessStore(session)


StoreDep = Annotated[SqlAlchemyAccessStore, Depends(get_store)]


async def get_role_catalog(request: Request, store: StoreDep) -> RoleCatalogService:
    return RoleCatalogService(store, request.app.state.settings)


RoleCatalogDep = Annotated[RoleCatalogService, Depends(get_role_catalog)]


async def require_role_manager(
    tenant_id: Annotated[str, Path(min_length=1)],
    user_id: CurrentUserDep,
    store: StoreDep,
) -> str:
    """Allow only workspace members holding ``tenant.roles.manage``."""

    gate = await WorkspaceScopeGate.load(store, tenant_id, user_id)
    if not can_manage_roles(gate):
        raise HTTPException(
            status.HTTP_403_FORBIDDEN,
            detail="Insufficient workspace permissions",
        )
    return user_id


RoleManagerDep = Annotated[str, Depends(require_role_manager)]

__all__ = [
    "CurrentUserDep",
    "OptionalUserDep",
    "RoleCatalogDep",
    "RoleManagerDep",
    "SessionDep",
    "StoreDep",
    "get_current_user_id",
    "get_optional_user_id",
]
