"""authbase - session and token lifecycle service.

Sign-up, sign-in, sign-out and refresh over FastAPI, with bcrypt password
hashing, JWT access/refresh tokens and Redis-backed refresh-token rotation.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
