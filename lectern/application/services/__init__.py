"""Application services shared by command handlers."""

from lectern.application.services.credential_verifier import CredentialVerifier
from lectern.application.services.email_verification_lifecycle import (
    EmailVerificationLifecycle,
)
from lectern.application.services.login_attempt_guard import (
    GuardDecision,
    LoginAttemptGuard,
)
from lectern.application.services.token_issuer import TokenIssuer

__all__ = [
    "CredentialVerifier",
    "EmailVerificationLifecycle",
    "GuardDecision",
    "LoginAttemptGuard",
    "TokenIssuer",
]
