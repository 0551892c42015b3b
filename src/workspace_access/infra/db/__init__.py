"""Database engine, sessions and ORM records."""

from .base import Base, NAMING_CONVENTION, metadata
from .engine import dispose_engine, get_engine, reset_database_state
from .session import get_session, get_sessionmaker, init_models

__all__ = [
    "Base",
    "NAMING_CONVENTION",
    "dispose_engine",
    "get_engine",
    "get_session",
    "get_sessionmaker",
    "init_models",
    "metadata",
    "reset_database_state",
]
