"""Handler result DTOs."""

from lectern.application.dtos.auth_dtos import (
    AuthenticatedUser,
    AuthTokens,
    LoginResult,
    RegisteredUser,
    RevocationResult,
    VerifiedEmail,
)
from lectern.application.dtos.maintenance_dtos import PurgeResult, ReconcileResult

__all__ = [
    "AuthenticatedUser",
    "AuthTokens",
    "LoginResult",
    "PurgeResult",
    "ReconcileResult",
    "RegisteredUser",
    "RevocationResult",
    "VerifiedEmail",
]
