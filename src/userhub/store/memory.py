"""In-memory store implementations."""

from typing import Any, Optional

from userhub.exceptions import DuplicateError
from userhub.models import Session, User, UserSnapshot
from userhub.models.session import utcnow
from userhub.models.user import merge_user
from userhub.store.base import (
    SessionStore,
    UserStore,
    new_session_id,
    new_user_id,
    parse_user_id,
)


class InMemoryUserStore(UserStore):
    """Process-local user store for tests and development."""

    def __init__(self) -> None:
        self._users: dict[str, User] = {}

    async def create(
        self,
        *,
        email: str,
        password: str,
        name: Optional[str] = None,
        phone_number: Optional[str] = None,
        role: Optional[str] = None,
    ) -> User:
        # No await between the check and the insert.
        if any(u.email == email for u in self._users.values()):
            raise DuplicateError(email)

        user = User(
            id=new_user_id(),
            name=name,
            email=email,
            phone_number=phone_number,
            role=role,
            password=password,
        )
        self._users[user.id] = user
        return user

    async def find_by_email(self, email: str) -> Optional[User]:
        for user in self._users.values():
            if user.email == email:
                return user
        return None

    async def find_by_id(self, user_id: str) -> Optional[User]:
        return self._users.get(parse_user_id(user_id))

    async def list_all(self) -> list[User]:
        return list(self._users.values())

    async def update_by_id(self, user_id: str, fields: dict[str, Any]) -> Optional[User]:
        user_id = parse_user_id(user_id)
        user = self._users.get(user_id)
        if user is None:
            return None
        updated = merge_user(user, fields)
        self._users[user_id] = updated
        return updated

    async def delete_by_id(self, user_id: str) -> Optional[User]:
        return self._users.pop(parse_user_id(user_id), None)


class InMemorySessionStore(SessionStore):
    """Process-local session store for tests and development."""

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._sessions: dict[str, Session] = {}

    async def create(self, user: UserSnapshot) -> Session:
        now = utcnow()
        session = Session(
            id=new_session_id(),
            user=user,
            expires=now + self.max_age,
            created_at=now,
        )
        self._sessions[session.id] = session
        return session

    async def get(self, session_id: str) -> Optional[Session]:
        session = self._sessions.get(session_id)
        if session is None or session.is_expired():
            return None
        return session

    async def destroy(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)

    async def purge_expired(self) -> int:
        now = utcnow()
        expired = [sid for sid, s in self._sessions.items() if s.is_expired(now)]
        for sid in expired:
            del self._sessions[sid]
        return len(expired)
