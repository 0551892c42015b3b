"""Request-scoped access view over a single project."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from functools import cached_property
from typing import Any

from workspace_access.core.rbac.resolver import (
    get_user_role,
    is_project_owner,
    resolve_capabilities,
    resolve_user_permissions,
)
from workspace_access.core.rbac.schemas import CustomRole, ProjectSnapshot
from workspace_access.core.rbac.types import Capability, CapabilitySet
from workspace_access.core.store import AccessStore

_UNSET: Any = object()


@dataclass(frozen=True)
class ProjectScopeGate:
    """Snapshot of ``(project, user_id, custom_roles)`` with derived answers.

    Derived values are computed on first access and cached on the instance.
    Nothing here raises: a missing project or user answers ``None``/``False``.
    Use :meth:`rebind` to obtain a gate for changed inputs.
    """

    project: ProjectSnapshot | None
    user_id: str | None
    custom_roles: tuple[CustomRole, ...] = field(default=())

    @classmethod
    async def load(
        cls,
        store: AccessStore,
        project_id: str,
        user_id: str | None,
    ) -> ProjectScopeGate:
        """Fetch the project and its tenant's custom roles from ``store``."""

        project = await store.get_project(project_id)
        roles: Sequence[CustomRole] = ()
        if project is not None:
            roles = await store.get_tenant_custom_roles(project.tenant_id) or ()
        return cls(project=project, user_id=user_id, custom_roles=tuple(roles))

    def rebind(
        self,
        *,
        project: ProjectSnapshot | None = _UNSET,
        user_id: str | None = _UNSET,
        custom_roles: Sequence[CustomRole] = _UNSET,
    ) -> ProjectScopeGate:
        return ProjectScopeGate(
            project=self.project if project is _UNSET else project,
            user_id=self.user_id if user_id is _UNSET else user_id,
            custom_roles=self.custom_roles if custom_roles is _UNSET else tuple(custom_roles),
        )

    @cached_property
    def role(self) -> str | None:
        return get_user_role(self.project, self.user_id)

    @cached_property
    def is_owner(self) -> bool:
        return is_project_owner(self.project, self.user_id)

    @cached_property
    def capabilities(self) -> CapabilitySet:
        return resolve_capabilities(self.project, self.user_id)

    @cached_property
    def permissions(self) -> frozenset[str]:
        return resolve_user_permissions(self.project, self.user_id, self.custom_roles)

    def can(self, capability: Capability | str) -> bool:
        if self.is_owner:
            return True
        return self.capabilities.allows(capability)

    def has_permission(self, permission: str) -> bool:
        if self.is_owner:
            return True
        return permission in self.permissions


__all__ = ["ProjectScopeGate"]
