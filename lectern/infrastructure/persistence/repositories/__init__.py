"""SQLAlchemy repository adapters."""

from lectern.infrastructure.persistence.repositories.email_verification_token_repository import (
    EmailVerificationTokenRepository,
)
from lectern.infrastructure.persistence.repositories.login_attempt_repository import (
    LoginAttemptRepository,
)
from lectern.infrastructure.persistence.repositories.refresh_token_repository import (
    RefreshTokenRepository,
)
from lectern.infrastructure.persistence.repositories.user_repository import (
    UserRepository,
)

__all__ = [
    "EmailVerificationTokenRepository",
    "LoginAttemptRepository",
    "RefreshTokenRepository",
    "UserRepository",
]
