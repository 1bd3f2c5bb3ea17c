"""Authentication router for FastAPI."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from userhub.api.auth.cookies import SessionCookie
from userhub.api.auth.dependencies import (
    get_auth_service,
    get_session_cookie,
    get_session_id,
)
from userhub.api.auth.schemas import (
    CurrentUserResponse,
    LoginRequest,
    SignupRequest,
    UserResponse,
)
from userhub.api.auth.service import AuthService
from userhub.exceptions import (
    DuplicateError,
    InvalidCredentialsError,
    NoSessionError,
    NoSuchUserError,
    UnauthenticatedError,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post("/signup", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    signup_data: SignupRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Register a new user.

    Args:
        signup_data: Signup fields
        auth_service: Auth service

    Returns:
        Created user record
    """
    try:
        user = await auth_service.signup(
            name=signup_data.name,
            email=signup_data.email,
            phone_number=signup_data.phone_number,
            role=signup_data.role,
            password=signup_data.password,
        )
    except DuplicateError as e:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": str(e)})
    except Exception as e:
        logger.exception("Signup failed")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": str(e)}
        )
    return UserResponse.from_user(user)


@router.post("/login")
async def login(
    login_data: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
    cookie: SessionCookie = Depends(get_session_cookie),
) -> JSONResponse:
    """Check credentials and set the session cookie.

    Args:
        login_data: Login credentials
        auth_service: Auth service
        cookie: Session cookie codec

    Returns:
        ``"Success"`` with the session cookie attached
    """
    try:
        session = await auth_service.login(login_data.email, login_data.password)
    except NoSuchUserError:
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content="No Records found")
    except InvalidCredentialsError:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED, content="Password doesn't match"
        )
    except Exception as e:
        logger.exception("Login failed")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": str(e)}
        )

    response = JSONResponse(content="Success")
    cookie.attach(response, session.id)
    return response


@router.post("/logout")
async def logout(
    session_id: Optional[str] = Depends(get_session_id),
    auth_service: AuthService = Depends(get_auth_service),
    cookie: SessionCookie = Depends(get_session_cookie),
) -> JSONResponse:
    """Destroy the current session and clear the cookie."""
    try:
        await auth_service.logout(session_id)
    except NoSessionError:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST, content={"error": "No session found"}
        )
    except Exception:
        logger.exception("Logout failed")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Failed to logout"},
        )

    response = JSONResponse(content="Logout successful")
    cookie.clear(response)
    return response


@router.get("/user", response_model=CurrentUserResponse)
async def get_user(
    session_id: Optional[str] = Depends(get_session_id),
    auth_service: AuthService = Depends(get_auth_service),
):
    """Get the user snapshot stored in the session."""
    try:
        snapshot = await auth_service.current_user(session_id)
    except UnauthenticatedError:
        return JSONResponse(status_code=status.HTTP_401_UNAUTHORIZED, content="Not authenticated")
    return {"user": snapshot.to_dict()}
