"""User directory router: list, get, update and delete user records."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from userhub.api.auth.dependencies import directory_guard
from userhub.api.auth.schemas import UserResponse
from userhub.api.users.schemas import UserUpdate
from userhub.exceptions import InvalidIdError
from userhub.store.base import UserStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["users"], dependencies=[Depends(directory_guard)])


def get_user_store(request: Request) -> UserStore:
    """Get the user store wired at startup."""
    return request.app.state.user_store


def _error(status_code: int, error: Exception) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": str(error)})


@router.get("/users", response_model=list[UserResponse], status_code=status.HTTP_201_CREATED)
async def list_users(store: UserStore = Depends(get_user_store)):
    """List every user record."""
    try:
        users = await store.list_all()
    except Exception as e:
        logger.exception("Listing users failed")
        return _error(status.HTTP_400_BAD_REQUEST, e)
    return [UserResponse.from_user(u) for u in users]


@router.get(
    "/user/{user_id}",
    response_model=Optional[UserResponse],
    status_code=status.HTTP_201_CREATED,
)
async def get_user_by_id(user_id: str, store: UserStore = Depends(get_user_store)):
    """Get a user record by id, or null if there is none."""
    try:
        user = await store.find_by_id(user_id)
    except InvalidIdError as e:
        return _error(status.HTTP_400_BAD_REQUEST, e)
    except Exception as e:
        logger.exception("Fetching user %s failed", user_id)
        return _error(status.HTTP_400_BAD_REQUEST, e)
    return UserResponse.from_user(user) if user else None


@router.patch(
    "/user/{user_id}",
    response_model=Optional[UserResponse],
    status_code=status.HTTP_201_CREATED,
)
async def update_user_by_id(
    user_id: str,
    update: UserUpdate,
    store: UserStore = Depends(get_user_store),
):
    """Overwrite the fields present in the body and return the updated record."""
    try:
        user = await store.update_by_id(user_id, update.to_fields())
    except Exception as e:
        logger.exception("Updating user %s failed", user_id)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, e)
    return UserResponse.from_user(user) if user else None


@router.delete(
    "/user/{user_id}",
    response_model=Optional[UserResponse],
    status_code=status.HTTP_201_CREATED,
)
async def delete_user_by_id(user_id: str, store: UserStore = Depends(get_user_store)):
    """Delete a user record and return it."""
    try:
        user = await store.delete_by_id(user_id)
    except Exception as e:
        logger.exception("Deleting user %s failed", user_id)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, e)
    if user:
        logger.info("Deleted user %s", user.id)
    return UserResponse.from_user(user) if user else None
