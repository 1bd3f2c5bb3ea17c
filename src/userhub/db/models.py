"""SQLAlchemy ORM models."""

from datetime import datetime
from typing import Optional

from sqlalchemy import JSON, DateTime, String, Text, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from userhub.models import Session, User, UserSnapshot


class Base(DeclarativeBase):
    """SQLAlchemy declarative base."""

    pass


class UserORM(Base):
    """User table."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    # UNIQUE makes concurrent signups with one email fail at insert time
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True, index=True)
    phone_number: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    role: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    password: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    def to_user(self) -> User:
        """Convert to the domain model."""
        return User(
            id=self.id,
            name=self.name,
            email=self.email,
            phone_number=self.phone_number,
            role=self.role,
            password=self.password,
        )


class SessionORM(Base):
    """Session table. ``data`` holds the user snapshot as JSON."""

    __tablename__ = "sessions"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    data: Mapped[dict] = mapped_column(JSON, nullable=False)
    expires: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    def to_session(self) -> Session:
        """Convert to the domain model."""
        return Session(
            id=self.id,
            user=UserSnapshot.from_dict(self.data),
            expires=self.expires,
            created_at=self.created_at,
        )
