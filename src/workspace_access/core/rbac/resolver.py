"""Resolve role values into capability sets and permission sets.

Two query paths exist side by side:

* the capability path (``resolve_capabilities`` / ``check_capability``)
  maps the caller's legacy role onto the static boolean matrix and never
  looks at custom roles;
* the permission path (``resolve_permissions`` / ``check_permission``)
  maps legacy literals to their fixed permission lists and custom role ids
  to the role's own permission set.

Both treat the project owner as fully permitted and both degrade to the
least-privileged answer instead of raising.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .registry import (
    LEGACY_ROLE_CAPABILITIES,
    LEGACY_ROLE_COLORS,
    LEGACY_ROLE_PERMISSIONS,
    NO_CAPABILITIES,
    UNKNOWN_ROLE_COLOR,
    UNKNOWN_ROLE_NAME,
)
from .schemas import CustomRole, ProjectSnapshot
from .types import (
    Capability,
    CapabilitySet,
    CustomRoleRef,
    LegacyRole,
    LegacyRoleValue,
    classify_role_value,
)

# Stale or unknown custom role references resolve to Viewer.
FALLBACK_ROLE = LegacyRole.VIEWER


def _find_custom_role(custom_roles: Iterable[CustomRole] | None, role_id: str) -> CustomRole | None:
    for role in custom_roles or ():
        if role.id == role_id:
            return role
    return None


def resolve_permissions(
    custom_roles: Sequence[CustomRole] | None,
    role_value: str | LegacyRole,
) -> frozenset[str]:
    """Return the permission set granted by ``role_value``.

    A custom role's permissions are authoritative on their own and are not
    merged with any legacy template.
    """

    match classify_role_value(role_value):
        case LegacyRoleValue(role=legacy):
            return LEGACY_ROLE_PERMISSIONS[legacy]
        case CustomRoleRef(role_id=role_id):
            custom = _find_custom_role(custom_roles, role_id)
            if custom is not None:
                return frozenset(custom.permissions)
    return LEGACY_ROLE_PERMISSIONS[FALLBACK_ROLE]


def is_project_owner(project: ProjectSnapshot | None, user_id: str | None) -> bool:
    return project is not None and bool(user_id) and project.owner_id == user_id


def get_user_role(project: ProjectSnapshot | None, user_id: str | None) -> str | None:
    """Return the caller's stored role value in ``project``.

    The owner resolves to ``Owner`` before membership is consulted, even if
    an entry for the owner is (incorrectly) present. The value may be a
    custom role id, which only the permission path can interpret.
    """

    if project is None or not user_id:
        return None
    if project.owner_id == user_id:
        return LegacyRole.OWNER.value
    for member in project.members:
        if member.user_id == user_id:
            return member.role
    return None


def resolve_capabilities(project: ProjectSnapshot | None, user_id: str | None) -> CapabilitySet:
    """Return the static capability set for the caller's legacy role.

    Missing roles and custom role ids yield an all-false set.
    """

    role_value = get_user_role(project, user_id)
    if role_value is None:
        return NO_CAPABILITIES
    match classify_role_value(role_value):
        case LegacyRoleValue(role=legacy):
            return LEGACY_ROLE_CAPABILITIES[legacy]
    return NO_CAPABILITIES


def resolve_user_permissions(
    project: ProjectSnapshot | None,
    user_id: str | None,
    custom_roles: Sequence[CustomRole] | None,
) -> frozenset[str]:
    """Return the caller's effective permission set (empty without a role)."""

    role_value = get_user_role(project, user_id)
    if role_value is None:
        return frozenset()
    return resolve_permissions(custom_roles, role_value)


def check_permission(
    project: ProjectSnapshot | None,
    user_id: str | None,
    permission: str,
    custom_roles: Sequence[CustomRole] | None,
) -> bool:
    if is_project_owner(project, user_id):
        return True
    return permission in resolve_user_permissions(project, user_id, custom_roles)


def check_capability(
    project: ProjectSnapshot | None,
    user_id: str | None,
    capability: Capability | str,
) -> bool:
    if is_project_owner(project, user_id):
        return True
    return resolve_capabilities(project, user_id).allows(capability)


def capabilities_from_permissions(permissions: Iterable[str]) -> CapabilitySet:
    """Collapse a fine-grained permission set into the coarse capability shape."""

    granted = frozenset(permissions)

    def _any(*keys: str) -> bool:
        return any(key in granted for key in keys)

    return CapabilitySet(
        edit="project.update" in granted,
        delete="project.delete" in granted,
        invite="project.invite" in granted,
        manage_tasks=_any("task.create", "task.update", "task.delete"),
        manage_ideas=_any("idea.create", "idea.update", "idea.delete"),
        manage_issues=_any("issue.create", "issue.update", "issue.delete"),
        comment="task.comment" in granted,
        view="project.read" in granted,
        manage_groups=_any("group.create", "group.update", "group.delete"),
    )


def role_display_info(
    custom_roles: Sequence[CustomRole] | None,
    role_value: str | LegacyRole,
) -> tuple[str, str]:
    """Return ``(name, color)`` for rendering ``role_value``."""

    match classify_role_value(role_value):
        case LegacyRoleValue(role=legacy):
            return legacy.value, LEGACY_ROLE_COLORS[legacy]
        case CustomRoleRef(role_id=role_id):
            custom = _find_custom_role(custom_roles, role_id)
            if custom is not None:
                return custom.name, custom.color
    return UNKNOWN_ROLE_NAME, UNKNOWN_ROLE_COLOR


__all__ = [
    "FALLBACK_ROLE",
    "capabilities_from_permissions",
    "check_capability",
    "check_permission",
    "get_user_role",
    "is_project_owner",
    "resolve_capabilities",
    "resolve_permissions",
    "resolve_user_permissions",
    "role_display_info",
]
