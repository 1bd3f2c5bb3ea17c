"""Signed session cookie."""

from typing import Optional

from fastapi import Request, Response
from itsdangerous import BadSignature, URLSafeSerializer


class SessionCookie:
    """Carries a session id in a cookie signed with the session secret."""

    def __init__(
        self,
        secret: str,
        name: str = "userhub.sid",
        max_age: int = 24 * 60 * 60,
        secure: bool = False,
    ) -> None:
        self.name = name
        self.max_age = max_age
        self.secure = secure
        self._serializer = URLSafeSerializer(secret_key=secret, salt="userhub-session")

    def sign(self, session_id: str) -> str:
        """Sign a session id for use as the cookie value."""
        return self._serializer.dumps(session_id)

    def unsign(self, value: str) -> Optional[str]:
        """Recover the session id, or None if the signature is bad."""
        try:
            session_id = self._serializer.loads(value)
        except BadSignature:
            return None
        return session_id if isinstance(session_id, str) else None

    def read(self, request: Request) -> Optional[str]:
        """Get the session id carried by ``request``, if any."""
        value = request.cookies.get(self.name)
        if not value:
            return None
        return self.unsign(value)

    def attach(self, response: Response, session_id: str) -> None:
        """Set the session cookie on ``response``."""
        response.set_cookie(
            key=self.name,
            value=self.sign(session_id),
            max_age=self.max_age,
            httponly=True,
            secure=self.secure,
            samesite="lax",
        )

    def clear(self, response: Response) -> None:
        """Expire the session cookie on ``response``."""
        response.delete_cookie(
            key=self.name,
            httponly=True,
            secure=self.secure,
            samesite="lax",
        )
