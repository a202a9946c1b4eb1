"""Application services.

Services orchestrate domain objects through the contracts in
``authbase.application.ports``.
"""

from authbase.application.services.auth_service import AuthService

__all__ = ["AuthService"]
