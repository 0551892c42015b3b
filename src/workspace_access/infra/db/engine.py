"""Async engine management."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from sqlalchemy import event
from sqlalchemy.engine import URL, make_url
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import NullPool, StaticPool

from workspace_access.settings import Settings, get_settings

_ENGINE: AsyncEngine | None = None
_ENGINE_KEY: tuple[Any, ...] | None = None


def engine_cache_key(settings: Settings) -> tuple[Any, ...]:
    return (settings.database_url, settings.database_echo)


def is_sqlite_memory_url(url: URL) -> bool:
    database = (url.database or "").strip()
    if not database or database == ":memory:":
        return True
    if database.startswith("file:"):
        return dict(url.query or {}).get("mode") == "memory"
    return False


def ensure_sqlite_database_directory(url: URL) -> None:
    """Create the parent directory of a file-backed SQLite database."""

    database = (url.database or "").strip()
    if not database or database == ":memory:" or database.startswith("file:"):
        return
    path = Path(database)
    if not path.is_absolute():
        path = Path.cwd() / path
    path.parent.mkdir(parents=True, exist_ok=True)


def _create_engine(settings: Settings) -> AsyncEngine:
    url = make_url(settings.database_url)
    engine_kwargs: dict[str, Any] = {"echo": settings.database_echo}

    is_sqlite = url.get_backend_name() == "sqlite"
    if is_sqlite:
        engine_kwargs["connect_args"] = {"check_same_thread": False}
        if is_sqlite_memory_url(url):
            # One shared connection, or every session would see its own empty database.
            engine_kwargs["poolclass"] = StaticPool
        else:
            engine_kwargs["poolclass"] = NullPool
            ensure_sqlite_database_directory(url)
    else:
        engine_kwargs["pool_pre_ping"] = True

    engine = create_async_engine(url.render_as_string(hide_password=False), **engine_kwargs)

    if is_sqlite:

        @event.listens_for(engine.sync_engine, "connect")
        def _set_sqlite_pragma(dbapi_connection, _connection_record) -> None:
            cursor = dbapi_connection.cursor()
            try:
                cursor.execute("PRAGMA foreign_keys=ON")
            finally:
                cursor.close()

    return engine


def get_engine(settings: Settings | None = None) -> AsyncEngine:
    """Return a cached async engine matching the active settings."""

    global _ENGINE, _ENGINE_KEY
    settings = settings or get_settings()
    key = engine_cache_key(settings)
    if _ENGINE is None or _ENGINE_KEY != key:
        if _ENGINE is not None:
            _ENGINE.sync_engine.dispose()
        _ENGINE = _create_engine(settings)
        _ENGINE_KEY = key
    return _ENGINE


def reset_database_state() -> None:
    """Dispose the cached engine and drop the cached session factory."""

    global _ENGINE, _ENGINE_KEY
    if _ENGINE is not None:
        _ENGINE.sync_engine.dispose()
    _ENGINE = None
    _ENGINE_KEY = None

    from . import session as session_module

    session_module.reset_session_state()


async def dispose_engine() -> None:
    """Close pooled connections, then drop the cached engine and sessions."""

    if _ENGINE is not None:
        await _ENGINE.dispose()
    reset_database_state()


__all__ = [
    "dispose_engine",
    "engine_cache_key",
    "ensure_sqlite_database_directory",
    "get_engine",
    "is_sqlite_memory_url",
    "reset_database_state",
]
