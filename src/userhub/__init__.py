"""userhub - user management backend.

Signup, cookie sessions, a user directory and a broadcast chat channel.
"""

__version__ = "0.1.0"
__author__ = "userhub Team"

__all__ = ["__version__", "__author__"]
