"""SQLAlchemy-backed implementation of :class:`AccessStore`."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from workspace_access.common.logging import log_context
from workspace_access.core.errors import ProjectNotFoundError, TenantNotFoundError
from workspace_access.core.rbac.membership import decode_members, migrate_members_to_roles
from workspace_access.core.rbac.schemas import (
    CustomRole,
    ProjectMember,
    ProjectSnapshot,
    WorkspaceMember,
)

from .db.models import ProjectRecord, TenantRecord, WorkspaceMemberRecord

logger = logging.getLogger(__name__)


class SqlAlchemyAccessStore:
    """Persist tenant role catalogs and memberships through an ``AsyncSession``.

    The store flushes but never commits; the caller owns the transaction.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def _get_tenant(self, tenant_id: str) -> TenantRecord | None:
        return await self._session.get(TenantRecord, tenant_id)

    async def _require_tenant(self, tenant_id: str) -> TenantRecord:
        tenant = await self._get_tenant(tenant_id)
        if tenant is None:
            raise TenantNotFoundError(tenant_id)
        return tenant

    async def _require_project(self, project_id: str) -> ProjectRecord:
        project = await self._session.get(ProjectRecord, project_id)
        if project is None:
            raise ProjectNotFoundError(project_id)
        return project

    async def tenant_exists(self, tenant_id: str) -> bool:
        return await self._get_tenant(tenant_id) is not None

    async def get_tenant_custom_roles(self, tenant_id: str) -> list[CustomRole] | None:
        tenant = await self._get_tenant(tenant_id)
        if tenant is None or tenant.custom_roles is None:
            return None
        roles: list[CustomRole] = []
        for document in tenant.custom_roles:
            try:
                roles.append(CustomRole.model_validate(document))
            except ValidationError:
                logger.warning(
                    "roles.decode.invalid_entry",
                    extra=log_context(tenant_id=tenant_id, entry=repr(document)),
                )
        return roles

    async def write_tenant_custom_roles(
        self, tenant_id: str, roles: Sequence[CustomRole]
    ) -> None:
        tenant = await self._require_tenant(tenant_id)
        # Reassign a fresh list so the JSON column is marked dirty.
        tenant.custom_roles = [role.to_document() for role in roles]
        await self._session.flush()

    async def get_tenant_default_role_id(self, tenant_id: str) -> str | None:
        tenant = await self._get_tenant(tenant_id)
        return tenant.default_role_id if tenant is not None else None

    async def set_tenant_default_role_id(self, tenant_id: str, role_id: str | None) -> None:
        tenant = await self._require_tenant(tenant_id)
        tenant.default_role_id = role_id
        await self._session.flush()

    async def get_project(self, project_id: str) -> ProjectSnapshot | None:
        """Return the project with its membership decoded to structured records."""

        project = await self._session.get(ProjectRecord, project_id)
        if project is None:
            return None
        membership = decode_members(project.members, project.owner_id)
        return ProjectSnapshot(
            id=project.id,
            tenant_id=project.tenant_id,
            owner_id=project.owner_id,
            title=project.title,
            is_private=project.is_private,
            members=migrate_members_to_roles(membership, project.owner_id),
        )

    async def get_stored_members(self, project_id: str) -> list[Any] | None:
        project = await self._session.get(ProjectRecord, project_id)
        if project is None:
            return None
        return list(project.members or [])

    async def write_project_members(
        self, project_id: str, members: Sequence[ProjectMember]
    ) -> None:
        project = await self._require_project(project_id)
        project.members = [member.to_document() for member in members]
        await self._session.flush()

    async def list_workspace_members(self, tenant_id: str) -> list[WorkspaceMember]:
        stmt = (
            select(WorkspaceMemberRecord)
            .where(WorkspaceMemberRecord.tenant_id == tenant_id)
            .order_by(WorkspaceMemberRecord.user_id)
        )
        result = await self._session.execute(stmt)
        return [
            WorkspaceMember(user_id=record.user_id, role=record.role)
            for record in result.scalars().all()
        ]


__all__ = ["SqlAlchemyAccessStore"]
