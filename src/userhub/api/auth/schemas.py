"""Pydantic schemas for authentication."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from userhub.models import User


class SignupRequest(BaseModel):
    """Schema for signup."""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    name: Optional[str] = None
    email: str
    phone_number: Optional[str] = Field(default=None, alias="phoneNumber")
    role: Optional[str] = None
    password: str

    def __repr__(self) -> str:
        """Hide password in repr."""
        return f"SignupRequest(email={self.email!r}, password='***')"


class LoginRequest(BaseModel):
    """Schema for login request."""

    email: str
    password: str

    def __repr__(self) -> str:
        """Hide password in repr."""
        return f"LoginRequest(email={self.email!r}, password='***')"


class UserResponse(BaseModel):
    """Stored user record as served by the API."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = Field(default=None, alias="phoneNumber")
    role: Optional[str] = None
    password: Optional[str] = None

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        """Build from a domain user."""
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            phone_number=user.phone_number,
            role=user.role,
            password=user.password,
        )


class UserSnapshotResponse(BaseModel):
    """Session user snapshot (no password)."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: Optional[str] = None
    email: str
    phone_number: Optional[str] = Field(default=None, alias="phoneNumber")
    role: Optional[str] = None


class CurrentUserResponse(BaseModel):
    """Schema for ``GET /user``."""

    user: UserSnapshotResponse
