"""Security adapters: password hashing and token services."""

from lectern.infrastructure.security.bcrypt_password_service import (
    BcryptPasswordService,
)
from lectern.infrastructure.security.email_verification_token_service import (
    EmailVerificationTokenService,
)
from lectern.infrastructure.security.jwt_service import JWTService
from lectern.infrastructure.security.refresh_token_service import RefreshTokenService

__all__ = [
    "BcryptPasswordService",
    "EmailVerificationTokenService",
    "JWTService",
    "RefreshTokenService",
]
