"""Domain models."""

from userhub.models.session import Session
from userhub.models.user import USER_FIELDS, User, UserSnapshot

__all__ = ["Session", "User", "UserSnapshot", "USER_FIELDS"]
