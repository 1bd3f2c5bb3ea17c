"""Auth service: signup, login, logout and session lookup."""

import logging
from typing import Optional

from userhub.api.auth.password import PasswordService
from userhub.exceptions import (
    DuplicateError,
    InvalidCredentialsError,
    NoSessionError,
    NoSuchUserError,
    UnauthenticatedError,
)
from userhub.models import Session, User, UserSnapshot
from userhub.store.base import SessionStore, UserStore

logger = logging.getLogger(__name__)


class AuthService:
    """Verifies credentials against the user store and issues sessions."""

    def __init__(
        self,
        users: UserStore,
        sessions: SessionStore,
        password_service: Optional[PasswordService] = None,
    ) -> None:
        """Initialize auth service.

        Args:
            users: User store
            sessions: Session store
            password_service: Password hashing, bcrypt with 10 rounds by default
        """
        self.users = users
        self.sessions = sessions
        self._password_service = password_service or PasswordService()

    async def signup(
        self,
        *,
        email: str,
        password: str,
        name: Optional[str] = None,
        phone_number: Optional[str] = None,
        role: Optional[str] = None,
    ) -> User:
        """Register a user with a hashed password.

        Returns:
            Created user, including the password hash

        Raises:
            DuplicateError: If the email is already registered
        """
        if await self.users.find_by_email(email):
            raise DuplicateError(email)

        hashed_password = self._password_service.hash_password(password)
        user = await self.users.create(
            name=name,
            email=email,
            phone_number=phone_number,
            role=role,
            password=hashed_password,
        )
        logger.info("User %s signed up", user.id)
        return user

    async def login(self, email: str, password: str) -> Session:
        """Check credentials and open a session.

        Returns:
            New session holding a snapshot of the user's public fields

        Raises:
            NoSuchUserError: If no user has ``email``
            InvalidCredentialsError: If the password does not match
        """
        user = await self.users.find_by_email(email)
        if user is None:
            raise NoSuchUserError(email)

        if not self._password_service.verify_password(password, user.password):
            raise InvalidCredentialsError(email)

        session = await self.sessions.create(user.snapshot())
        logger.info("User %s logged in", user.id)
        return session

    async def logout(self, session_id: Optional[str]) -> None:
        """Destroy the session.

        Raises:
            NoSessionError: If the request carried no session
        """
        if not session_id:
            raise NoSessionError("No session found")
        await self.sessions.destroy(session_id)
        logger.info("Session logged out")

    async def current_user(self, session_id: Optional[str]) -> UserSnapshot:
        """Get the snapshot stored in a live session.

        Raises:
            UnauthenticatedError: If the session is missing or expired
        """
        if not session_id:
            raise UnauthenticatedError("Not authenticated")
        session = await self.sessions.get(session_id)
        if session is None:
            raise UnauthenticatedError("Not authenticated")
        return session.user
