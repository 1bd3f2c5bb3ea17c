"""Store interfaces shared by the SQL and in-memory backends."""

import secrets
import uuid
from abc import ABC, abstractmethod
from datetime import timedelta
from typing import Any, Optional

from userhub.exceptions import InvalidIdError
from userhub.models import Session, User, UserSnapshot

DEFAULT_SESSION_MAX_AGE = timedelta(hours=24)


def new_user_id() -> str:
    """Generate a user id."""
    return str(uuid.uuid4())


def new_session_id() -> str:
    """Generate an opaque session id."""
    return secrets.token_urlsafe(32)


def parse_user_id(user_id: str) -> str:
    """Validate and normalize a user id.

    Raises:
        InvalidIdError: If ``user_id`` is not a UUID
    """
    try:
        return str(uuid.UUID(str(user_id)))
    except ValueError:
        raise InvalidIdError(user_id)


class UserStore(ABC):
    """Keyed collection of user records."""

    @abstractmethod
    async def create(
        self,
        *,
        email: str,
        password: str,
        name: Optional[str] = None,
        phone_number: Optional[str] = None,
        role: Optional[str] = None,
    ) -> User:
        """Insert a user with a generated id.

        Raises:
            DuplicateError: If a user already holds ``email``
        """
        ...

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        """Get a user by email."""
        ...

    @abstractmethod
    async def find_by_id(self, user_id: str) -> Optional[User]:
        """Get a user by id.

        Raises:
            InvalidIdError: If ``user_id`` is malformed
        """
        ...

    @abstractmethod
    async def list_all(self) -> list[User]:
        """Get every user, in store order."""
        ...

    @abstractmethod
    async def update_by_id(self, user_id: str, fields: dict[str, Any]) -> Optional[User]:
        """Overwrite the given fields and return the updated user."""
        ...

    @abstractmethod
    async def delete_by_id(self, user_id: str) -> Optional[User]:
        """Delete a user and return the removed record."""
        ...


class SessionStore(ABC):
    """Maps session ids to session data with a fixed expiry."""

    def __init__(self, max_age: timedelta = DEFAULT_SESSION_MAX_AGE) -> None:
        self.max_age = max_age

    @abstractmethod
    async def create(self, user: UserSnapshot) -> Session:
        """Create a session expiring ``max_age`` from now."""
        ...

    @abstractmethod
    async def get(self, session_id: str) -> Optional[Session]:
        """Get a live session; expired sessions read as absent."""
        ...

    @abstractmethod
    async def destroy(self, session_id: str) -> None:
        """Remove a session. Unknown ids are ignored."""
        ...

    @abstractmethod
    async def purge_expired(self) -> int:
        """Delete expired sessions and return how many were removed."""
        ...
