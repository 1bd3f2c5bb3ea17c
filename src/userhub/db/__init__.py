"""Database module for userhub."""

from userhub.db.database import (
    close_db,
    create_tables,
    get_session_factory,
    init_db,
)
from userhub.db.models import Base, SessionORM, UserORM
from userhub.db.repositories import SqlSessionStore, SqlUserStore

__all__ = [
    "close_db",
    "create_tables",
    "get_session_factory",
    "init_db",
    "Base",
    "SessionORM",
    "UserORM",
    "SqlSessionStore",
    "SqlUserStore",
]
