"""Canonical permission vocabulary and the static legacy role tables."""

from __future__ import annotations

from collections.abc import Mapping

from .types import (
    CapabilitySet,
    LegacyRole,
    PermissionCategory,
    PermissionDef,
    WorkspaceCapabilitySet,
    WorkspaceRole,
)


def _category(key: str, label: str, *entries: tuple[str, str]) -> PermissionCategory:
    return PermissionCategory(
        key=key,
        label=label,
        permissions=tuple(
            PermissionDef(key=perm, category=key, label=perm_label) for perm, perm_label in entries
        ),
    )


# ---------------------------------------------------------------------------
# Project permissions
# ---------------------------------------------------------------------------

PERMISSION_CATEGORIES: tuple[PermissionCategory, ...] = (
    _category(
        "project",
        "Project",
        ("project.read", "View project"),
        ("project.update", "Edit project settings"),
        ("project.delete", "Delete project"),
        ("project.invite", "Invite members"),
        ("project.view_settings", "View project settings"),
    ),
    _category(
        "tasks",
        "Tasks",
        ("task.view", "View tasks"),
        ("task.create", "Create tasks"),
        ("task.update", "Edit tasks"),
        ("task.delete", "Delete tasks"),
        ("task.assign", "Assign tasks"),
        ("task.comment", "Comment on tasks"),
    ),
    _category(
        "issues",
        "Issues",
        ("issue.view", "View issues"),
        ("issue.create", "Report issues"),
        ("issue.update", "Edit issues"),
        ("issue.delete", "Delete issues"),
    ),
    _category(
        "ideas",
        "Flows / Ideas",
        ("idea.view", "View flows"),
        ("idea.create", "Create flows"),
        ("idea.update", "Edit flows"),
        ("idea.delete", "Delete flows"),
    ),
    _category(
        "groups",
        "Groups",
        ("group.create", "Create groups"),
        ("group.update", "Edit groups"),
        ("group.delete", "Delete groups"),
    ),
    _category(
        "roles",
        "Roles",
        ("role.manage", "Manage roles"),
    ),
)

PERMISSIONS: tuple[PermissionDef, ...] = tuple(
    definition for category in PERMISSION_CATEGORIES for definition in category.permissions
)

PERMISSION_REGISTRY: Mapping[str, PermissionDef] = {
    definition.key: definition for definition in PERMISSIONS
}

ALL_PERMISSIONS: frozenset[str] = frozenset(PERMISSION_REGISTRY)

# Each tier is built from the one below so the superset chain holds by construction.
_VIEWER_PERMISSIONS: frozenset[str] = frozenset(
    {
        "project.read",
        "task.view",
        "task.comment",
        "issue.view",
        "idea.view",
    }
)
_EDITOR_PERMISSIONS: frozenset[str] = _VIEWER_PERMISSIONS | {
    "project.invite",
    "project.view_settings",
    "task.create",
    "task.update",
    "task.delete",
    "task.assign",
    "issue.create",
    "issue.update",
    "issue.delete",
    "idea.create",
    "idea.update",
    "idea.delete",
    "group.create",
    "group.update",
    "group.delete",
}
_OWNER_PERMISSIONS: frozenset[str] = _EDITOR_PERMISSIONS | {
    "project.update",
    "project.delete",
}

LEGACY_ROLE_PERMISSIONS: Mapping[LegacyRole, frozenset[str]] = {
    LegacyRole.OWNER: _OWNER_PERMISSIONS,
    LegacyRole.EDITOR: _EDITOR_PERMISSIONS,
    LegacyRole.VIEWER: _VIEWER_PERMISSIONS,
}

LEGACY_ROLE_CAPABILITIES: Mapping[LegacyRole, CapabilitySet] = {
    LegacyRole.OWNER: CapabilitySet.all(),
    LegacyRole.EDITOR: CapabilitySet(
        edit=False,
        delete=False,
        invite=False,
        manage_tasks=True,
        manage_ideas=True,
        manage_issues=True,
        comment=True,
        view=True,
        manage_groups=True,
    ),
    LegacyRole.VIEWER: CapabilitySet(
        edit=False,
        delete=False,
        invite=False,
        manage_tasks=False,
        manage_ideas=False,
        manage_issues=False,
        comment=True,
        view=True,
        manage_groups=False,
    ),
}

NO_CAPABILITIES = CapabilitySet.none()

LEGACY_ROLE_COLORS: Mapping[LegacyRole, str] = {
    LegacyRole.OWNER: "#f59e0b",
    LegacyRole.EDITOR: "#3b82f6",
    LegacyRole.VIEWER: "#6b7280",
}
UNKNOWN_ROLE_NAME = "Unknown"
UNKNOWN_ROLE_COLOR = "#6b7280"


# ---------------------------------------------------------------------------
# Workspace permissions
# ---------------------------------------------------------------------------

WORKSPACE_PERMISSION_CATEGORIES: tuple[PermissionCategory, ...] = (
    _category(
        "tenant",
        "Workspace",
        ("tenant.view", "View workspace"),
        ("tenant.settings.view", "View workspace settings"),
        ("tenant.settings.edit", "Edit workspace settings"),
    ),
    _category(
        "tenant.members",
        "Members",
        ("tenant.members.view", "View members"),
        ("tenant.members.invite", "Invite members"),
        ("tenant.members.remove", "Remove members"),
    ),
    _category(
        "tenant.roles",
        "Roles",
        ("tenant.roles.view", "View roles"),
        ("tenant.roles.manage", "Create, edit and delete roles"),
    ),
    _category(
        "tenant.projects",
        "Projects",
        ("tenant.projects.create", "Create projects"),
        ("tenant.projects.delete", "Delete projects"),
        ("tenant.projects.view_all", "View all projects"),
    ),
)

WORKSPACE_PERMISSION_REGISTRY: Mapping[str, PermissionDef] = {
    definition.key: definition
    for category in WORKSPACE_PERMISSION_CATEGORIES
    for definition in category.permissions
}

_GUEST_WORKSPACE_PERMISSIONS: frozenset[str] = frozenset({"tenant.view"})
_MEMBER_WORKSPACE_PERMISSIONS: frozenset[str] = _GUEST_WORKSPACE_PERMISSIONS | {
    "tenant.members.view",
    "tenant.roles.view",
    "tenant.projects.create",
}
_ADMIN_WORKSPACE_PERMISSIONS: frozenset[str] = _MEMBER_WORKSPACE_PERMISSIONS | {
    "tenant.settings.view",
    "tenant.settings.edit",
    "tenant.members.invite",
    "tenant.members.remove",
    "tenant.roles.manage",
    "tenant.projects.view_all",
}

WORKSPACE_ROLE_PERMISSIONS: Mapping[WorkspaceRole, frozenset[str]] = {
    WorkspaceRole.OWNER: frozenset(WORKSPACE_PERMISSION_REGISTRY),
    WorkspaceRole.ADMIN: _ADMIN_WORKSPACE_PERMISSIONS,
    WorkspaceRole.MEMBER: _MEMBER_WORKSPACE_PERMISSIONS,
    WorkspaceRole.GUEST: _GUEST_WORKSPACE_PERMISSIONS,
}

WORKSPACE_ROLE_CAPABILITIES: Mapping[WorkspaceRole, WorkspaceCapabilitySet] = {
    WorkspaceRole.OWNER: WorkspaceCapabilitySet.all(),
    WorkspaceRole.ADMIN: WorkspaceCapabilitySet(
        manage_workspace=True,
        manage_members=True,
        manage_groups=True,
        create_projects=True,
        delete_projects=False,
        view_all_projects=True,
    ),
    WorkspaceRole.MEMBER: WorkspaceCapabilitySet(
        manage_workspace=False,
        manage_members=False,
        manage_groups=False,
        create_projects=True,
        delete_projects=False,
        view_all_projects=False,
    ),
    WorkspaceRole.GUEST: WorkspaceCapabilitySet.none(),
}

NO_WORKSPACE_CAPABILITIES = WorkspaceCapabilitySet.none()

# Historical workspace records stored project-style role names.
WORKSPACE_ROLE_ALIASES: Mapping[str, WorkspaceRole] = {
    "Editor": WorkspaceRole.MEMBER,
    "Viewer": WorkspaceRole.GUEST,
}


def editor_preset() -> frozenset[str]:
    """Permission preset offered when creating an Editor-like custom role."""

    return LEGACY_ROLE_PERMISSIONS[LegacyRole.EDITOR]


def viewer_preset() -> frozenset[str]:
    return LEGACY_ROLE_PERMISSIONS[LegacyRole.VIEWER]


__all__ = [
    "ALL_PERMISSIONS",
    "LEGACY_ROLE_CAPABILITIES",
    "LEGACY_ROLE_COLORS",
    "LEGACY_ROLE_PERMISSIONS",
    "NO_CAPABILITIES",
    "NO_WORKSPACE_CAPABILITIES",
    "PERMISSIONS",
    "PERMISSION_CATEGORIES",
    "PERMISSION_REGISTRY",
    "UNKNOWN_ROLE_COLOR",
    "UNKNOWN_ROLE_NAME",
    "WORKSPACE_PERMISSION_CATEGORIES",
    "WORKSPACE_PERMISSION_REGISTRY",
    "WORKSPACE_ROLE_ALIASES",
    "WORKSPACE_ROLE_CAPABILITIES",
    "WORKSPACE_ROLE_PERMISSIONS",
    "editor_preset",
    "viewer_preset",
]
