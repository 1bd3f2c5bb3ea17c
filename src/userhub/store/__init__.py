"""User and session stores."""

from userhub.store.base import SessionStore, UserStore, parse_user_id
from userhub.store.memory import InMemorySessionStore, InMemoryUserStore

__all__ = [
    "SessionStore",
    "UserStore",
    "InMemorySessionStore",
    "InMemoryUserStore",
    "parse_user_id",
]
