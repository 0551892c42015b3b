"""Request-scoped access view over a workspace (tenant)."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from functools import cached_property
from typing import Any

from workspace_access.core.rbac.membership import get_workspace_role
from workspace_access.core.rbac.registry import (
    NO_WORKSPACE_CAPABILITIES,
    WORKSPACE_ROLE_CAPABILITIES,
    WORKSPACE_ROLE_PERMISSIONS,
)
from workspace_access.core.rbac.schemas import WorkspaceMember
from workspace_access.core.rbac.types import (
    WorkspaceCapability,
    WorkspaceCapabilitySet,
    WorkspaceRole,
)
from workspace_access.core.store import AccessStore

_UNSET: Any = object()

_ADMIN_ROLES = frozenset({WorkspaceRole.OWNER, WorkspaceRole.ADMIN})


@dataclass(frozen=True)
class WorkspaceScopeGate:
    """Snapshot of ``(tenant_id, user_id, members)`` with derived answers.

    Independent of any project: a workspace Owner gains nothing inside a
    project it does not own.
    """

    tenant_id: str | None
    user_id: str | None
    members: tuple[WorkspaceMember, ...] = field(default=())

    @classmethod
    async def load(
        cls,
        store: AccessStore,
        tenant_id: str,
        user_id: str | None,
    ) -> WorkspaceScopeGate:
        members = await store.list_workspace_members(tenant_id)
        return cls(tenant_id=tenant_id, user_id=user_id, members=tuple(members))

    def rebind(
        self,
        *,
        tenant_id: str | None = _UNSET,
        user_id: str | None = _UNSET,
        members: Sequence[WorkspaceMember] = _UNSET,
    ) -> WorkspaceScopeGate:
        return WorkspaceScopeGate(
            tenant_id=self.tenant_id if tenant_id is _UNSET else tenant_id,
            user_id=self.user_id if user_id is _UNSET else user_id,
            members=self.members if members is _UNSET else tuple(members),
        )

    @cached_property
    def role(self) -> WorkspaceRole | None:
        return get_workspace_role(self.members, self.tenant_id, self.user_id)

    @cached_property
    def is_owner(self) -> bool:
        return self.role is WorkspaceRole.OWNER

    @cached_property
    def is_admin(self) -> bool:
        return self.role in _ADMIN_ROLES

    @cached_property
    def capabilities(self) -> WorkspaceCapabilitySet:
        if self.role is None:
            return NO_WORKSPACE_CAPABILITIES
        return WORKSPACE_ROLE_CAPABILITIES[self.role]

    @cached_property
    def permissions(self) -> frozenset[str]:
        if self.role is None:
            return frozenset()
        return WORKSPACE_ROLE_PERMISSIONS[self.role]

    def can(self, capability: WorkspaceCapability | str) -> bool:
        return self.capabilities.allows(capability)

    def has_permission(self, permission: str) -> bool:
        return permission in self.permissions


__all__ = ["WorkspaceScopeGate"]
