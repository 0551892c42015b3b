from __future__ import annotations

import logging

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from tests.conftest import LEGACY_PROJECT_ID, OWNER_ID, PROJECT_ID, TENANT_ID
from workspace_access.core.errors import ProjectNotFoundError, TenantNotFoundError
from workspace_access.core.rbac.schemas import CustomRole
from workspace_access.features.projects.gate import ProjectScopeGate
from workspace_access.infra.db.models import TenantRecord
from workspace_access.infra.store import SqlAlchemyAccessStore


async def test_get_project_decodes_structured_members(store: SqlAlchemyAccessStore) -> None:
    project = await store.get_project(PROJECT_ID)

    assert project is not None
    assert project.owner_id == OWNER_ID
    assert [(member.user_id, member.role) for member in project.members] == [
        ("editor", "Editor"),
        ("viewer", "Viewer"),
    ]


async def test_get_project_normalizes_flat_members_without_writing(
    store: SqlAlchemyAccessStore,
) -> None:
    project = await store.get_project(LEGACY_PROJECT_ID)

    assert project is not None
    assert [(member.user_id, member.role) for member in project.members] == [
        ("u2", "Editor"),
        ("u3", "Editor"),
    ]
    assert all(member.invited_by == OWNER_ID for member in project.members)
    assert await store.get_stored_members(LEGACY_PROJECT_ID) == [OWNER_ID, "u2", "u3"]


async def test_missing_records_read_as_empty(store: SqlAlchemyAccessStore) -> None:
    assert await store.get_project("missing") is None
    assert await store.get_tenant_custom_roles("missing") is None
    assert await store.get_tenant_default_role_id("missing") is None
    assert await store.list_workspace_members("missing") == []
    assert await store.get_tenant_custom_roles(TENANT_ID) == []


async def test_writes_to_missing_records_raise(store: SqlAlchemyAccessStore) -> None:
    with pytest.raises(TenantNotFoundError):
        await store.write_tenant_custom_roles("missing", [])
    with pytest.raises(TenantNotFoundError):
        await store.set_tenant_default_role_id("missing", None)
    with pytest.raises(ProjectNotFoundError):
        await store.write_project_members("missing", [])


async def test_custom_roles_round_trip_as_documents(store: SqlAlchemyAccessStore) -> None:
    role = CustomRole(id="role_1_aa", name="QA", color="#111111", permissions=["task.view"])

    await store.write_tenant_custom_roles(TENANT_ID, [role])

    assert await store.get_tenant_custom_roles(TENANT_ID) == [role]


async def test_list_workspace_members_keeps_stored_role(store: SqlAlchemyAccessStore) -> None:
    members = await store.list_workspace_members(TENANT_ID)

    assert {member.user_id: member.role for member in members}["viewer"] == "Viewer"


async def test_malformed_role_documents_are_skipped(
    store: SqlAlchemyAccessStore, session: AsyncSession, caplog
) -> None:
    good = CustomRole(id="role_1_aa", name="QA", color="#111111", permissions=["task.view"])
    tenant = await session.get(TenantRecord, TENANT_ID)
    tenant.custom_roles = [{"id": "role_bad", "name": "Bad"}, good.to_document()]
    await session.flush()

    with caplog.at_level(logging.WARNING, logger="workspace_access.infra.store"):
        roles = await store.get_tenant_custom_roles(TENANT_ID)

    assert roles == [good]
    assert "roles.decode.invalid_entry" in caplog.messages

    gate = await ProjectScopeGate.load(store, PROJECT_ID, "editor")
    assert gate.custom_roles == (good,)
    assert gate.role == "Editor"
    assert gate.has_permission("task.create")
