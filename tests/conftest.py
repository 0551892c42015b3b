"""Shared pytest fixtures for workspace access tests."""

from __future__ import annotations

from collections.abc import AsyncIterator
from pathlib import Path

import pytest
import pytest_asyncio
from asgi_lifespan import LifespanManager
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from workspace_access.features.roles.service import RoleCatalogService
from workspace_access.infra.db.engine import dispose_engine
from workspace_access.infra.db.models import ProjectRecord, TenantRecord, WorkspaceMemberRecord
from workspace_access.infra.db.session import get_sessionmaker, init_models
from workspace_access.infra.store import SqlAlchemyAccessStore
from workspace_access.main import create_app
from workspace_access.settings import Settings

TENANT_ID = "tenant-1"
PROJECT_ID = "project-1"
LEGACY_PROJECT_ID = "project-legacy"
OWNER_ID = "owner"


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Mark tests as unit or integration based on their directory."""

    for item in items:
        parts = Path(str(item.fspath)).parts
        if "unit" in parts:
            item.add_marker(pytest.mark.unit)
        elif "integration" in parts:
            item.add_marker(pytest.mark.integration)


async def seed_database(session: AsyncSession) -> None:
    """Insert one tenant, a structured project, a flat project and workspace members."""

    session.add(TenantRecord(id=TENANT_ID, name="Acme", custom_roles=[]))
    await session.flush()
    session.add_all(
        [
            ProjectRecord(
                id=PROJECT_ID,
                tenant_id=TENANT_ID,
                owner_id=OWNER_ID,
                title="Launch",
                members=[
                    {"userId": "editor", "role": "Editor", "invitedBy": OWNER_ID},
                    {"userId": "viewer", "role": "Viewer", "invitedBy": OWNER_ID},
                ],
            ),
            ProjectRecord(
                id=LEGACY_PROJECT_ID,
                tenant_id=TENANT_ID,
                owner_id=OWNER_ID,
                title="Old board",
                members=[OWNER_ID, "u2", "u3"],
            ),
            WorkspaceMemberRecord(tenant_id=TENANT_ID, user_id=OWNER_ID, role="Owner"),
            WorkspaceMemberRecord(tenant_id=TENANT_ID, user_id="admin", role="Admin"),
            WorkspaceMemberRecord(tenant_id=TENANT_ID, user_id="editor", role="Member"),
            WorkspaceMemberRecord(tenant_id=TENANT_ID, user_id="viewer", role="Viewer"),
        ]
    )
    await session.commit()


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        _env_file=None,
        database_url="sqlite+aiosqlite:///:memory:",
        logging_level="INFO",
    )


@pytest_asyncio.fixture()
async def session(settings: Settings) -> AsyncIterator[AsyncSession]:
    """Yield a session over a freshly seeded in-memory database."""

    await init_models(settings)
    factory = get_sessionmaker(settings)
    async with factory() as db_session:
        await seed_database(db_session)
        yield db_session
    await dispose_engine()


@pytest.fixture()
def store(session: AsyncSession) -> SqlAlchemyAccessStore:
    return SqlAlchemyAccessStore(session)


@pytest.fixture()
def catalog(store: SqlAlchemyAccessStore, settings: Settings) -> RoleCatalogService:
    return RoleCatalogService(store, settings)


@pytest.fixture()
def app(settings: Settings) -> FastAPI:
    return create_app(settings)


@pytest_asyncio.fixture()
async def async_client(app: FastAPI, settings: Settings) -> AsyncIterator[AsyncClient]:
    """Provide an HTTPX client bound to a started app with seeded data."""

    async with LifespanManager(app):
        async with get_sessionmaker(settings)() as db_session:
            await seed_database(db_session)
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://testserver") as client:
            yield client
