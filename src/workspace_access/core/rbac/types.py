"""RBAC type definitions used across the stack."""

from __future__ import annotations

import enum
from dataclasses import asdict, dataclass, fields


class LegacyRole(str, enum.Enum):
    """Project roles from the original three-tier matrix."""

    OWNER = "Owner"
    EDITOR = "Editor"
    VIEWER = "Viewer"


class WorkspaceRole(str, enum.Enum):
    """Workspace-level roles."""

    OWNER = "Owner"
    ADMIN = "Admin"
    MEMBER = "Member"
    GUEST = "Guest"


class Capability(str, enum.Enum):
    """Coarse project capability flags."""

    EDIT = "edit"
    DELETE = "delete"
    INVITE = "invite"
    MANAGE_TASKS = "manage_tasks"
    MANAGE_IDEAS = "manage_ideas"
    MANAGE_ISSUES = "manage_issues"
    COMMENT = "comment"
    VIEW = "view"
    MANAGE_GROUPS = "manage_groups"


class WorkspaceCapability(str, enum.Enum):
    """Coarse workspace capability flags."""

    MANAGE_WORKSPACE = "manage_workspace"
    MANAGE_MEMBERS = "manage_members"
    MANAGE_GROUPS = "manage_groups"
    CREATE_PROJECTS = "create_projects"
    DELETE_PROJECTS = "delete_projects"
    VIEW_ALL_PROJECTS = "view_all_projects"


@dataclass(frozen=True)
class PermissionDef:
    """Static permission definition."""

    key: str
    category: str
    label: str


@dataclass(frozen=True)
class PermissionCategory:
    key: str
    label: str
    permissions: tuple[PermissionDef, ...]


class _FlagSet:
    """Lookup helpers shared by the frozen capability records."""

    _enum: type[enum.Enum]

    def allows(self, capability: str) -> bool:
        """Return the flag for ``capability``; unknown keys are denied."""

        try:
            key = self._enum(capability).value
        except ValueError:
            return False
        return bool(getattr(self, key))

    def as_dict(self) -> dict[str, bool]:
        return asdict(self)  # type: ignore[call-overload]

    @classmethod
    def none(cls):
        return cls(**{field.name: False for field in fields(cls)})  # type: ignore[arg-type]

    @classmethod
    def all(cls):
        return cls(**{field.name: True for field in fields(cls)})  # type: ignore[arg-type]


@dataclass(frozen=True)
class CapabilitySet(_FlagSet):
    """Fixed-shape project capability record tied to a legacy role."""

    _enum = Capability

    edit: bool
    delete: bool
    invite: bool
    manage_tasks: bool
    manage_ideas: bool
    manage_issues: bool
    comment: bool
    view: bool
    manage_groups: bool


@dataclass(frozen=True)
class WorkspaceCapabilitySet(_FlagSet):
    """Fixed-shape workspace capability record tied to a workspace role."""

    _enum = WorkspaceCapability

    manage_workspace: bool
    manage_members: bool
    manage_groups: bool
    create_projects: bool
    delete_projects: bool
    view_all_projects: bool


# -- Role values ---------------------------------------------------------------
# Membership records store either a legacy literal or a custom role id as a
# plain string. ``classify_role_value`` is the only place that tells them apart.


@dataclass(frozen=True)
class LegacyRoleValue:
    role: LegacyRole


@dataclass(frozen=True)
class CustomRoleRef:
    role_id: str


RoleValue = LegacyRoleValue | CustomRoleRef

_LEGACY_BY_VALUE = {role.value: role for role in LegacyRole}


def classify_role_value(value: str | LegacyRole) -> RoleValue:
    """Classify a stored role string as a legacy literal or a custom role id."""

    if isinstance(value, LegacyRole):
        return LegacyRoleValue(value)
    legacy = _LEGACY_BY_VALUE.get(value)
    if legacy is not None:
        return LegacyRoleValue(legacy)
    return CustomRoleRef(value)


__all__ = [
    "Capability",
    "CapabilitySet",
    "CustomRoleRef",
    "LegacyRole",
    "LegacyRoleValue",
    "PermissionCategory",
    "PermissionDef",
    "RoleValue",
    "WorkspaceCapability",
    "WorkspaceCapabilitySet",
    "WorkspaceRole",
    "classify_role_value",
]
