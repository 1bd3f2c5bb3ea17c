"""Session model."""

from dataclasses import dataclass, field
from datetime import datetime, timezone

from userhub.models.user import UserSnapshot


def utcnow() -> datetime:
    """Current time, timezone-aware UTC."""
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes (as SQLite returns them) as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


@dataclass
class Session:
    """Server-side session for one authenticated browser context."""

    id: str
    user: UserSnapshot
    expires: datetime
    created_at: datetime = field(default_factory=utcnow)

    def is_expired(self, now: datetime | None = None) -> bool:
        """Check whether the fixed expiry has passed."""
        now = now or utcnow()
        return as_utc(self.expires) <= now
