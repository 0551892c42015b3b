"""``workspace-access`` command line interface."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Annotated, NoReturn

import typer
from sqlalchemy.ext.asyncio import AsyncSession

from workspace_access.common.logging import setup_logging
from workspace_access.core.errors import AccessError
from workspace_access.features.projects.gate import ProjectScopeGate
from workspace_access.features.projects.service import ProjectMembershipService
from workspace_access.infra.db.engine import dispose_engine
from workspace_access.infra.db.session import get_sessionmaker, init_models
from workspace_access.infra.store import SqlAlchemyAccessStore
from workspace_access.settings import Settings, get_settings

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Workspace access administration commands.",
)


@asynccontextmanager
async def _session_scope(settings: Settings) -> AsyncIterator[AsyncSession]:
    session = get_sessionmaker(settings)()
    try:
        yield session
        await session.commit()
    except Exception:
        await session.rollback()
        raise
    finally:
        await session.close()
        await dispose_engine()


def _settings() -> Settings:
    settings = get_settings()
    setup_logging(settings)
    return settings


def _fail(message: str) -> NoReturn:
    typer.echo(f"error: {message}", err=True)
    raise typer.Exit(code=1)


@app.command(name="init-db", help="Create any missing tables.")
def init_db() -> None:
    settings = _settings()

    async def _run() -> None:
        try:
            await init_models(settings)
        finally:
            await dispose_engine()

    asyncio.run(_run())
    typer.echo(f"Database ready: {settings.database_url}")


@app.command(
    name="migrate-members",
    help="Rewrite a project's flat member list as structured role records.",
)
def migrate_members(
    project_id: Annotated[str, typer.Argument(help="Project identifier.")],
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show the result without writing it."),
    ] = False,
) -> None:
    settings = _settings()

    async def _run():
        async with _session_scope(settings) as session:
            service = ProjectMembershipService(SqlAlchemyAccessStore(session))
            return await service.migrate_project_members(project_id, dry_run=dry_run)

    try:
        result = asyncio.run(_run())
    except AccessError as exc:
        _fail(str(exc))

    for member in result.members:
        typer.echo(f"{member.user_id}\t{member.role}\tinvited_by={member.invited_by or '-'}")
    if result.migrated:
        typer.echo(f"Migrated {len(result.members)} member(s) in project {project_id}")
    elif dry_run:
        typer.echo("Dry run: nothing written")
    else:
        typer.echo(f"Project {project_id} already uses structured membership")


@app.command(name="check", help="Check whether a user holds a project permission.")
def check(
    project_id: Annotated[str, typer.Argument(help="Project identifier.")],
    user_id: Annotated[str, typer.Argument(help="User identifier.")],
    permission: Annotated[str, typer.Argument(help="Permission key, e.g. task.create.")],
) -> None:
    settings = _settings()

    async def _run() -> ProjectScopeGate:
        async with _session_scope(settings) as session:
            return await ProjectScopeGate.load(SqlAlchemyAccessStore(session), project_id, user_id)

    gate = asyncio.run(_run())
    if gate.project is None:
        _fail(f"Project '{project_id}' not found")

    allowed = gate.has_permission(permission)
    typer.echo(f"{'allowed' if allowed else 'denied'} role={gate.role or '-'}")
    if not allowed:
        raise typer.Exit(code=1)


@app.command(name="serve", help="Run the HTTP API with uvicorn.")
def serve(
    host: Annotated[str, typer.Option(help="Bind address.")] = "127.0.0.1",
    port: Annotated[int, typer.Option(help="Bind port.")] = 8000,
    reload: Annotated[bool, typer.Option("--reload", help="Reload on code changes.")] = False,
) -> None:
    import uvicorn

    uvicorn.run(
        "workspace_access.main:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_config=None,
    )


__all__ = ["app"]
