"""Error types raised by the stores and the auth service."""


class UserhubError(Exception):
    """Base class for userhub errors."""

    pass


class DuplicateError(UserhubError):
    """Raised when a user with the same email already exists."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__("Email already exists")


class NoSuchUserError(UserhubError):
    """Raised when no user matches a lookup."""

    pass


class InvalidCredentialsError(UserhubError):
    """Raised when a password does not match the stored hash."""

    pass


class InvalidIdError(UserhubError):
    """Raised when a user id is not a well-formed identifier."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"Invalid user id: {value!r}")


class NoSessionError(UserhubError):
    """Raised when a request carries no session to act on."""

    pass


class UnauthenticatedError(UserhubError):
    """Raised when the session is missing, unknown or expired."""

    pass
