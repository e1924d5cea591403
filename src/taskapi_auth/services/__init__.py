"""Authentication services.

Provides password hashing, JWT token management and signing key loading.
"""

from taskapi_auth.services.jwt_service import JWTService
from taskapi_auth.services.password_service import PasswordHashingService
from taskapi_auth.services.signing_key import load_signing_key

__all__ = [
    "JWTService",
    "PasswordHashingService",
    "load_signing_key",
]
