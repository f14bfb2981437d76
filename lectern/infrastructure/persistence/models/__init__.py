"""ORM models. Importing this package registers every table on the metadata."""

from lectern.infrastructure.persistence.models.email_verification_token import (
    EmailVerificationTokenModel,
)
from lectern.infrastructure.persistence.models.login_attempt import LoginAttemptModel
from lectern.infrastructure.persistence.models.refresh_token import RefreshTokenModel
from lectern.infrastructure.persistence.models.user import UserModel

__all__ = [
    "EmailVerificationTokenModel",
    "LoginAttemptModel",
    "RefreshTokenModel",
    "UserModel",
]
