"""Database infrastructure helpers (engine, sessions, migrations)."""

from .base import Base
from .exceptions import StoreUnavailableError
from .session import build_engine, build_session_factory, init_db, session_scope

__all__ = [
    "Base",
    "StoreUnavailableError",
    "build_engine",
    "build_session_factory",
    "init_db",
    "session_scope",
]
