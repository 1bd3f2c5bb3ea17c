"""Authentication dependencies for FastAPI."""

from typing import Optional

from fastapi import Depends, HTTPException, Request, status

from userhub.api.auth.cookies import SessionCookie
from userhub.api.auth.service import AuthService
from userhub.exceptions import UnauthenticatedError
from userhub.models import UserSnapshot


def get_auth_service(request: Request) -> AuthService:
    """Get the auth service wired at startup."""
    return request.app.state.auth_service


def get_session_cookie(request: Request) -> SessionCookie:
    """Get the session cookie codec."""
    return request.app.state.session_cookie


def get_session_id(
    request: Request,
    cookie: SessionCookie = Depends(get_session_cookie),
) -> Optional[str]:
    """Get the session id from the signed cookie, if present and valid."""
    return cookie.read(request)


async def get_current_user(
    session_id: Optional[str] = Depends(get_session_id),
    auth_service: AuthService = Depends(get_auth_service),
) -> UserSnapshot:
    """Get the session's user snapshot.

    Raises:
        HTTPException: If there is no live session
    """
    try:
        return await auth_service.current_user(session_id)
    except UnauthenticatedError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )


async def directory_guard(
    request: Request,
    session_id: Optional[str] = Depends(get_session_id),
    auth_service: AuthService = Depends(get_auth_service),
) -> None:
    """Require a session on directory routes when configured to."""
    if not request.app.state.settings.DIRECTORY_REQUIRE_SESSION:
        return
    await get_current_user(session_id, auth_service)
