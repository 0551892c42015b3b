from __future__ import annotations

import logging
from datetime import UTC, datetime

from workspace_access.core.rbac.membership import (
    FlatMembership,
    StructuredMembership,
    build_member,
    decode_members,
    get_workspace_role,
    is_flat,
    migrate_members_to_roles,
    normalize_workspace_role,
    resolve_default_role,
)
from workspace_access.core.rbac.schemas import CustomRole, ProjectMember, WorkspaceMember
from workspace_access.core.rbac.types import WorkspaceRole

NOW = datetime(2026, 1, 2, 3, 4, 5, tzinfo=UTC)


def _role(role_id: str, *, is_default: bool = False) -> CustomRole:
    return CustomRole(id=role_id, name=role_id, color="#000000", is_default=is_default)


def test_migrate_flat_list_drops_owner_and_assigns_editor() -> None:
    members = migrate_members_to_roles(["u1", "u2"], "u1", now=NOW)

    assert members == [
        ProjectMember(user_id="u2", role="Editor", joined_at=NOW, invited_by="u1"),
    ]


def test_migrate_structured_input_is_unchanged() -> None:
    existing = [ProjectMember(user_id="u2", role="Viewer", invited_by="u1")]

    assert migrate_members_to_roles(existing, "u1") == existing
    assert migrate_members_to_roles(StructuredMembership(tuple(existing)), "u1") == existing


def test_migrate_empty_inputs() -> None:
    assert migrate_members_to_roles(None, "u1") == []
    assert migrate_members_to_roles([], "u1") == []


def test_decode_members_distinguishes_shapes() -> None:
    flat = decode_members(["u1", "u2"], "u1")
    structured = decode_members([{"userId": "u2", "role": "Viewer"}], "u1")

    assert flat == FlatMembership(user_ids=("u1", "u2"))
    assert isinstance(structured, StructuredMembership)
    assert structured.members[0].role == "Viewer"


def test_decode_members_upgrades_strings_in_mixed_list() -> None:
    decoded = decode_members(["u1", "u3", {"userId": "u2", "role": "Viewer"}], "u1", now=NOW)

    assert isinstance(decoded, StructuredMembership)
    assert [(member.user_id, member.role) for member in decoded.members] == [
        ("u3", "Editor"),
        ("u2", "Viewer"),
    ]
    assert decoded.members[0].invited_by == "u1"


def test_decode_members_skips_malformed_records(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="workspace_access"):
        decoded = decode_members([{"role": "Editor"}, {"userId": "u2", "role": "Viewer"}], "u1")

    assert [member.user_id for member in decoded.members] == ["u2"]
    assert any(record.getMessage() == "membership.decode.invalid_entry" for record in caplog.records)


def test_is_flat() -> None:
    assert is_flat(["u1"])
    assert is_flat(["u1", {"userId": "u2", "role": "Editor"}])
    assert not is_flat([{"userId": "u2", "role": "Editor"}])
    assert not is_flat([])


def test_build_member_accepts_custom_role_id() -> None:
    member = build_member("u9", "role_1_ab", invited_by="u1", now=NOW)

    assert member.role == "role_1_ab"
    assert member.joined_at == NOW


def test_normalize_workspace_role_aliases_legacy_names() -> None:
    assert normalize_workspace_role("Editor") is WorkspaceRole.MEMBER
    assert normalize_workspace_role("Viewer") is WorkspaceRole.GUEST
    assert normalize_workspace_role("Admin") is WorkspaceRole.ADMIN
    assert normalize_workspace_role(WorkspaceRole.OWNER) is WorkspaceRole.OWNER
    assert normalize_workspace_role("Superuser") is None
    assert normalize_workspace_role(None) is None


def test_get_workspace_role() -> None:
    members = [
        WorkspaceMember(user_id="a", role="Admin"),
        WorkspaceMember(user_id="b", role="Viewer"),
    ]

    assert get_workspace_role(members, "t1", "a") is WorkspaceRole.ADMIN
    assert get_workspace_role(members, "t1", "b") is WorkspaceRole.GUEST
    assert get_workspace_role(members, "t1", "c") is None
    assert get_workspace_role(members, "t1", None) is None


def test_personal_workspace_creator_is_owner() -> None:
    assert get_workspace_role([], "u1", "u1") is WorkspaceRole.OWNER


def test_resolve_default_role_preference_order() -> None:
    roles = [_role("role_a"), _role("role_b", is_default=True)]

    assert resolve_default_role(roles, "role_a") == "role_a"
    assert resolve_default_role(roles, "Viewer") == "Viewer"
    assert resolve_default_role(roles, "role_deleted") == "role_b"
    assert resolve_default_role(roles, "Owner") == "role_b"
    assert resolve_default_role([_role("role_a")], None) == "Editor"
    assert resolve_default_role(None, None) == "Editor"
