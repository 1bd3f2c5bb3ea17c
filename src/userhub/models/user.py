"""User models."""

from dataclasses import asdict, dataclass
from typing import Any, Optional

# Fields a directory update may overwrite.
USER_FIELDS = ("name", "email", "phone_number", "role", "password")


@dataclass
class User:
    """Registered user record.

    ``password`` holds whatever the store was given: the bcrypt hash when the
    record came from signup.
    """

    id: str
    email: str
    password: str
    name: Optional[str] = None
    phone_number: Optional[str] = None
    role: Optional[str] = None

    def snapshot(self) -> "UserSnapshot":
        """Copy the public fields for embedding in a session."""
        return UserSnapshot(
            id=self.id,
            name=self.name,
            email=self.email,
            phone_number=self.phone_number,
            role=self.role,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to the JSON shape served by the API."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "phoneNumber": self.phone_number,
            "role": self.role,
            "password": self.password,
        }


@dataclass(frozen=True)
class UserSnapshot:
    """Point-in-time copy of a user's public fields.

    Not kept in sync with the user record after it is taken.
    """

    id: str
    email: str
    name: Optional[str] = None
    phone_number: Optional[str] = None
    role: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to the JSON shape served by the API."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "phoneNumber": self.phone_number,
            "role": self.role,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "UserSnapshot":
        """Rebuild a snapshot stored with :meth:`to_dict`."""
        return cls(
            id=data["id"],
            name=data.get("name"),
            email=data["email"],
            phone_number=data.get("phoneNumber"),
            role=data.get("role"),
        )


def merge_user(user: User, fields: dict[str, Any]) -> User:
    """Return a copy of ``user`` with the known ``fields`` overwritten."""
    data = asdict(user)
    for key, value in fields.items():
        if key in USER_FIELDS:
            data[key] = value
    return User(**data)
