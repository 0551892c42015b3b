from __future__ import annotations

import asyncio
from collections.abc import Iterator
from pathlib import Path

import pytest
from typer.testing import CliRunner

from tests.conftest import LEGACY_PROJECT_ID, OWNER_ID, PROJECT_ID, seed_database
from workspace_access.cli import app
from workspace_access.infra.db.engine import dispose_engine
from workspace_access.infra.db.session import get_sessionmaker, init_models
from workspace_access.settings import Settings, reload_settings

runner = CliRunner()


@pytest.fixture()
def cli_database(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Settings]:
    """Point the CLI at a seeded file-backed SQLite database."""

    monkeypatch.setenv(
        "WORKSPACE_ACCESS_DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'access.sqlite'}"
    )
    settings = reload_settings()

    async def _seed() -> None:
        await init_models(settings)
        async with get_sessionmaker(settings)() as session:
            await seed_database(session)
        await dispose_engine()

    asyncio.run(_seed())
    yield settings
    monkeypatch.delenv("WORKSPACE_ACCESS_DATABASE_URL")
    reload_settings()


def test_init_db_creates_database(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    db_path = tmp_path / "nested" / "fresh.sqlite"
    monkeypatch.setenv("WORKSPACE_ACCESS_DATABASE_URL", f"sqlite+aiosqlite:///{db_path}")
    reload_settings()

    result = runner.invoke(app, ["init-db"])

    assert result.exit_code == 0, result.output
    assert db_path.exists()
    monkeypatch.delenv("WORKSPACE_ACCESS_DATABASE_URL")
    reload_settings()


def test_check_allows_and_denies(cli_database: Settings) -> None:
    allowed = runner.invoke(app, ["check", PROJECT_ID, "editor", "task.create"])
    denied = runner.invoke(app, ["check", PROJECT_ID, "viewer", "task.create"])
    owner = runner.invoke(app, ["check", PROJECT_ID, OWNER_ID, "project.delete"])

    assert allowed.exit_code == 0
    assert "allowed role=Editor" in allowed.output
    assert denied.exit_code == 1
    assert "denied role=Viewer" in denied.output
    assert owner.exit_code == 0


def test_check_unknown_project(cli_database: Settings) -> None:
    result = runner.invoke(app, ["check", "missing", "editor", "task.view"])

    assert result.exit_code == 1


def test_migrate_members_dry_run_then_apply(cli_database: Settings) -> None:
    dry = runner.invoke(app, ["migrate-members", LEGACY_PROJECT_ID, "--dry-run"])
    assert dry.exit_code == 0, dry.output
    assert "Dry run" in dry.output

    applied = runner.invoke(app, ["migrate-members", LEGACY_PROJECT_ID])
    assert applied.exit_code == 0, applied.output
    assert "Migrated 2 member(s)" in applied.output

    again = runner.invoke(app, ["migrate-members", LEGACY_PROJECT_ID])
    assert "already uses structured membership" in again.output


def test_migrate_members_unknown_project(cli_database: Settings) -> None:
    result = runner.invoke(app, ["migrate-members", "missing"])

    assert result.exit_code == 1
