"""Tenant custom role catalog.

Every mutation reads the current list (or uses the caller's snapshot),
computes the complete new list, and writes it back in a single store call.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from workspace_access.common.ids import generate_role_id
from workspace_access.common.logging import log_context
from workspace_access.common.time import utc_now
from workspace_access.core.errors import (
    RoleNotFoundError,
    RoleValidationError,
    TenantNotFoundError,
    UnauthenticatedError,
)
from workspace_access.core.rbac.membership import INVITABLE_LEGACY_ROLES, resolve_default_role
from workspace_access.core.rbac.registry import (
    PERMISSION_CATEGORIES,
    PERMISSION_REGISTRY,
    editor_preset,
    viewer_preset,
)
from workspace_access.core.rbac.schemas import CustomRole
from workspace_access.core.rbac.types import PermissionCategory
from workspace_access.core.store import AccessStore
from workspace_access.settings import Settings, get_settings

from .schemas import RoleUpdate

logger = logging.getLogger(__name__)

_UPDATABLE_FIELDS = frozenset({"name", "color", "permissions", "is_default", "position"})


def _require_actor(actor_id: str | None) -> str:
    if not actor_id or not actor_id.strip():
        raise UnauthenticatedError()
    return actor_id


def _clean_name(name: str | None) -> str:
    normalized = (name or "").strip()
    if not normalized:
        raise RoleValidationError("Role name is required")
    return normalized


def _clean_permissions(permissions: Iterable[str]) -> list[str]:
    keys = list(dict.fromkeys(str(key).strip() for key in permissions))
    unknown = [key for key in keys if key not in PERMISSION_REGISTRY]
    if unknown:
        raise RoleValidationError(f"Unknown permission(s): {', '.join(sorted(unknown))}")
    return keys


def _sorted(roles: Iterable[CustomRole]) -> list[CustomRole]:
    return sorted(roles, key=lambda role: role.position)


class RoleCatalogService:
    """Create, edit, delete and order a tenant's custom roles."""

    def __init__(self, store: AccessStore, settings: Settings | None = None) -> None:
        self._store = store
        self._settings = settings or get_settings()

    # ------------------------------------------------------------------ reads

    async def list_custom_roles(self, tenant_id: str) -> list[CustomRole]:
        """Return the tenant's roles ordered by ``position``.

        A missing tenant or an absent role list yields ``[]``.
        """

        roles = await self._store.get_tenant_custom_roles(tenant_id)
        return _sorted(roles or [])

    async def _snapshot(
        self, tenant_id: str, current_roles: Sequence[CustomRole] | None
    ) -> list[CustomRole]:
        if current_roles is not None:
            return list(current_roles)
        return await self.list_custom_roles(tenant_id)

    async def get_default_role_id(self, tenant_id: str) -> str | None:
        return await self._store.get_tenant_default_role_id(tenant_id)

    async def resolve_invite_role(self, tenant_id: str) -> str:
        """Return the role value a newly invited project member receives."""

        roles = await self.list_custom_roles(tenant_id)
        default_role_id = await self._store.get_tenant_default_role_id(tenant_id)
        return resolve_default_role(roles, default_role_id)

    @staticmethod
    def permission_categories() -> tuple[PermissionCategory, ...]:
        return PERMISSION_CATEGORIES

    @staticmethod
    def editor_preset() -> frozenset[str]:
        return editor_preset()

    @staticmethod
    def viewer_preset() -> frozenset[str]:
        return viewer_preset()

    # -------------------------------------------------------------- mutations

    async def create_custom_role(
        self,
        tenant_id: str,
        name: str,
        color: str,
        permissions: Iterable[str],
        actor_id: str | None,
    ) -> CustomRole:
        """Append a new role at the end of the tenant's ordering."""

        actor = _require_actor(actor_id)
        role_name = _clean_name(name)
        keys = _clean_permissions(permissions)

        roles = await self.list_custom_roles(tenant_id)
        role = CustomRole(
            id=generate_role_id(
                [existing.id for existing in roles],
                prefix=self._settings.role_id_prefix,
                entropy_bytes=self._settings.role_id_entropy_bytes,
            ),
            name=role_name,
            color=color,
            permissions=keys,
            is_default=False,
            position=max((existing.position for existing in roles), default=-1) + 1,
            created_at=utc_now(),
            created_by=actor,
        )
        await self._store.write_tenant_custom_roles(tenant_id, [*roles, role])

        logger.info(
            "roles.custom.create.success",
            extra=log_context(
                tenant_id=tenant_id,
                role_id=role.id,
                user_id=actor,
                permission_count=len(keys),
            ),
        )
        return role

    async def update_custom_role(
        self,
        tenant_id: str,
        role_id: str,
        changes: RoleUpdate | Mapping[str, Any],
        actor_id: str | None,
        *,
        current_roles: Sequence[CustomRole] | None = None,
    ) -> CustomRole:
        """Merge ``changes`` into the role ``role_id``.

        Setting ``is_default`` to ``True`` clears the flag on every other role
        in the same write.
        """

        actor = _require_actor(actor_id)
        if isinstance(changes, RoleUpdate):
            updates = changes.model_dump(exclude_unset=True)
        else:
            updates = {key: value for key, value in changes.items() if key in _UPDATABLE_FIELDS}

        if "name" in updates:
            updates["name"] = _clean_name(updates["name"])
        if "permissions" in updates:
            updates["permissions"] = _clean_permissions(updates["permissions"] or [])
        if "color" in updates and not updates["color"]:
            raise RoleValidationError("Role color is required")
        if "is_default" in updates:
            updates["is_default"] = bool(updates["is_default"])
        if "position" in updates:
            position = updates["position"]
            if isinstance(position, bool) or not isinstance(position, int) or position < 0:
                raise RoleValidationError("Role position must be a non-negative integer")

        roles = await self._snapshot(tenant_id, current_roles)
        current = next((role for role in roles if role.id == role_id), None)
        if current is None:
            raise RoleNotFoundError(role_id)

        target = current.model_copy(update=updates)
        becomes_default = target.is_default and "is_default" in updates
        updated_roles = _sorted(
            target
            if role.id == role_id
            else role.model_copy(update={"is_default": False})
            if becomes_default and role.is_default
            else role
            for role in roles
        )

        await self._store.write_tenant_custom_roles(tenant_id, updated_roles)

        logger.info(
            "roles.custom.update.success",
            extra=log_context(
                tenant_id=tenant_id,
                role_id=role_id,
                user_id=actor,
                fields=sorted(updates),
            ),
        )
        return target

    async def delete_custom_role(
        self,
        tenant_id: str,
        role_id: str,
        actor_id: str | None,
        *,
        current_roles: Sequence[CustomRole] | None = None,
    ) -> None:
        """Remove ``role_id`` from the catalog.

        Members still referencing the id resolve to Viewer permissions.
        """

        actor = _require_actor(actor_id)
        roles = await self._snapshot(tenant_id, current_roles)
        remaining = [role for role in roles if role.id != role_id]
        if len(remaining) == len(roles):
            raise RoleNotFoundError(role_id)

        await self._store.write_tenant_custom_roles(tenant_id, remaining)

        logger.info(
            "roles.custom.delete.success",
            extra=log_context(tenant_id=tenant_id, role_id=role_id, user_id=actor),
        )

    async def reorder_custom_roles(
        self,
        tenant_id: str,
        ordered_ids: Sequence[str],
        actor_id: str | None,
        *,
        current_roles: Sequence[CustomRole] | None = None,
    ) -> list[CustomRole]:
        """Assign each role's ``position`` from its index in ``ordered_ids``.

        Roles missing from ``ordered_ids`` keep their previous position and
        unknown ids are ignored.
        """

        actor = _require_actor(actor_id)
        roles = await self._snapshot(tenant_id, current_roles)
        index = {role_id: position for position, role_id in enumerate(ordered_ids)}
        reordered = _sorted(
            role.model_copy(update={"position": index[role.id]}) if role.id in index else role
            for role in roles
        )

        await self._store.write_tenant_custom_roles(tenant_id, reordered)

        logger.info(
            "roles.custom.reorder.success",
            extra=log_context(tenant_id=tenant_id, user_id=actor, role_count=len(reordered)),
        )
        return reordered

    async def set_default_role_id(
        self,
        tenant_id: str,
        role_id: str | None,
        actor_id: str | None,
    ) -> str | None:
        """Set (or clear, with ``None``) the tenant's default invite role.

        ``role_id`` may be a custom role id or a legacy literal
        (``Editor``/``Viewer``).
        """

        actor = _require_actor(actor_id)
        if role_id is not None:
            roles = await self.list_custom_roles(tenant_id)
            known = {role.id for role in roles} | INVITABLE_LEGACY_ROLES
            if role_id not in known:
                raise RoleNotFoundError(role_id)

        try:
            await self._store.set_tenant_default_role_id(tenant_id, role_id)
        except TenantNotFoundError:
            logger.warning(
                "roles.default.set.tenant_missing",
                extra=log_context(tenant_id=tenant_id, user_id=actor),
            )
            raise

        logger.info(
            "roles.default.set.success",
            extra=log_context(tenant_id=tenant_id, role_id=role_id, user_id=actor),
        )
        return role_id


__all__ = ["RoleCatalogService"]
