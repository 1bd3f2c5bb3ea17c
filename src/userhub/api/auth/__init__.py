"""Authentication module.

Provides cookie-session authentication:
- PasswordService: Password hashing and verification
- SessionCookie: Signed session cookie
- AuthService: Signup, login, logout, current user
"""

from userhub.api.auth.cookies import SessionCookie
from userhub.api.auth.password import PasswordService
from userhub.api.auth.service import AuthService

__all__ = [
    "AuthService",
    "PasswordService",
    "SessionCookie",
]
