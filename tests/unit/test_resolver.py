from __future__ import annotations

import pytest

from workspace_access.core.rbac.registry import LEGACY_ROLE_PERMISSIONS
from workspace_access.core.rbac.resolver import (
    capabilities_from_permissions,
    check_capability,
    check_permission,
    get_user_role,
    resolve_capabilities,
    resolve_permissions,
    role_display_info,
)
from workspace_access.core.rbac.schemas import CustomRole, ProjectMember, ProjectSnapshot
from workspace_access.core.rbac.types import (
    Capability,
    CustomRoleRef,
    LegacyRole,
    LegacyRoleValue,
    classify_role_value,
)

TRIAGER = CustomRole(
    id="role_1700000000000_abcd1234",
    name="Triager",
    color="#10b981",
    permissions=["issue.view", "issue.update"],
)


def _project(*members: tuple[str, str]) -> ProjectSnapshot:
    return ProjectSnapshot(
        id="p1",
        tenant_id="t1",
        owner_id="owner",
        members=[ProjectMember(user_id=user_id, role=role) for user_id, role in members],
    )


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("Owner", LegacyRoleValue(LegacyRole.OWNER)),
        ("Viewer", LegacyRoleValue(LegacyRole.VIEWER)),
        (LegacyRole.EDITOR, LegacyRoleValue(LegacyRole.EDITOR)),
        ("editor", CustomRoleRef("editor")),
        ("role_1_ab", CustomRoleRef("role_1_ab")),
    ],
)
def test_classify_role_value(value, expected) -> None:
    assert classify_role_value(value) == expected


def test_resolve_permissions_uses_custom_role_verbatim() -> None:
    permissions = resolve_permissions([TRIAGER], TRIAGER.id)

    assert permissions == {"issue.view", "issue.update"}
    assert "project.read" not in permissions


def test_resolve_permissions_falls_back_to_viewer_for_stale_id() -> None:
    assert resolve_permissions([TRIAGER], "role_deleted") == LEGACY_ROLE_PERMISSIONS[LegacyRole.VIEWER]
    assert resolve_permissions(None, "role_deleted") == LEGACY_ROLE_PERMISSIONS[LegacyRole.VIEWER]


def test_resolve_permissions_for_legacy_literal_ignores_custom_roles() -> None:
    shadow = TRIAGER.model_copy(update={"id": "Editor"})

    assert resolve_permissions([shadow], "Editor") == LEGACY_ROLE_PERMISSIONS[LegacyRole.EDITOR]


def test_owner_short_circuits_membership() -> None:
    project = _project(("owner", "Viewer"), ("u2", "Editor"))

    assert get_user_role(project, "owner") == "Owner"
    assert check_permission(project, "owner", "project.delete", [])
    assert check_permission(project, "owner", "role.manage", [])
    assert check_capability(project, "owner", Capability.DELETE)


def test_owner_with_empty_membership_passes_every_check() -> None:
    project = ProjectSnapshot(id="p1", tenant_id="t1", owner_id="owner", members=[])

    assert get_user_role(project, "owner") == "Owner"
    assert check_permission(project, "owner", "project.delete", [])
    assert check_permission(project, "owner", "role.manage", [TRIAGER])
    assert all(check_capability(project, "owner", capability) for capability in Capability)
    assert get_user_role(project, "stranger") is None
    assert not check_permission(project, "stranger", "project.read", [])


def test_get_user_role_returns_stored_value() -> None:
    project = _project(("u2", "Editor"), ("u3", TRIAGER.id))

    assert get_user_role(project, "u2") == "Editor"
    assert get_user_role(project, "u3") == TRIAGER.id
    assert get_user_role(project, "stranger") is None
    assert get_user_role(project, None) is None
    assert get_user_role(None, "u2") is None


def test_capability_path_ignores_custom_roles() -> None:
    project = _project(("u3", TRIAGER.id))

    capabilities = resolve_capabilities(project, "u3")

    assert not any(capabilities.as_dict().values())
    assert not check_capability(project, "u3", "view")


def test_capability_checks_for_legacy_members() -> None:
    project = _project(("u2", "Editor"), ("u4", "Viewer"))

    assert check_capability(project, "u2", "manage_tasks")
    assert not check_capability(project, "u2", "invite")
    assert check_capability(project, "u4", Capability.COMMENT)
    assert not check_capability(project, "u4", "manage_ideas")
    assert not check_capability(project, "u2", "launch_rockets")
    assert not check_capability(project, "stranger", "view")


def test_permission_checks_for_members() -> None:
    project = _project(("u2", "Editor"), ("u3", TRIAGER.id), ("u5", "role_gone"))

    assert check_permission(project, "u2", "task.create", [TRIAGER])
    assert not check_permission(project, "u2", "project.delete", [TRIAGER])
    assert check_permission(project, "u3", "issue.update", [TRIAGER])
    assert not check_permission(project, "u3", "task.view", [TRIAGER])
    assert check_permission(project, "u5", "task.view", [TRIAGER])
    assert not check_permission(project, "u5", "task.create", [TRIAGER])
    assert not check_permission(project, "stranger", "project.read", [TRIAGER])
    assert not check_permission(None, "u2", "project.read", [TRIAGER])


def test_capabilities_from_permissions() -> None:
    capabilities = capabilities_from_permissions(LEGACY_ROLE_PERMISSIONS[LegacyRole.EDITOR])

    assert capabilities.manage_tasks and capabilities.manage_groups and capabilities.invite
    assert not capabilities.edit and not capabilities.delete
    assert capabilities_from_permissions(["issue.update"]).manage_issues
    assert not any(capabilities_from_permissions([]).as_dict().values())


def test_role_display_info() -> None:
    assert role_display_info([], "Owner") == ("Owner", "#f59e0b")
    assert role_display_info([], "Editor") == ("Editor", "#3b82f6")
    assert role_display_info([TRIAGER], TRIAGER.id) == ("Triager", "#10b981")
    assert role_display_info([TRIAGER], "role_gone") == ("Unknown", "#6b7280")
