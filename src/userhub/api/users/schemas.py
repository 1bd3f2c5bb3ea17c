"""Pydantic schemas for the user directory."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class UserUpdate(BaseModel):
    """Partial user update. Only fields present in the body are applied."""

    model_config = ConfigDict(
        populate_by_name=True, extra="ignore", coerce_numbers_to_str=True
    )

    name: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = Field(default=None, alias="phoneNumber")
    role: Optional[str] = None
    # Stored as given, not re-hashed
    password: Optional[str] = None

    def to_fields(self) -> dict[str, Any]:
        """Get the fields that were set in the request body."""
        return self.model_dump(exclude_unset=True)
