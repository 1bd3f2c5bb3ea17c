"""Password service for hashing and verification."""

import bcrypt

DEFAULT_ROUNDS = 10

# bcrypt only reads this many bytes of a password
MAX_PASSWORD_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:MAX_PASSWORD_BYTES]


class PasswordService:
    """Service for password hashing and verification."""

    def __init__(self, rounds: int = DEFAULT_ROUNDS) -> None:
        """Initialize password service.

        Args:
            rounds: bcrypt cost factor
        """
        self.rounds = rounds

    def hash_password(self, password: str) -> str:
        """Hash a password using bcrypt.

        Passwords longer than 72 bytes are truncated.

        Args:
            password: Plain text password

        Returns:
            Hashed password
        """
        salt = bcrypt.gensalt(rounds=self.rounds)
        hashed = bcrypt.hashpw(_encode(password), salt)
        return hashed.decode("utf-8")

    def verify_password(self, password: str, hashed: str) -> bool:
        """Verify a password against its hash.

        A stored value that is not a bcrypt hash never matches.

        Args:
            password: Plain text password to verify
            hashed: Hashed password to compare against

        Returns:
            True if password matches, False otherwise
        """
        try:
            return bcrypt.checkpw(_encode(password), hashed.encode("utf-8"))
        except ValueError:
            return False
