"""CQRS commands."""

from lectern.application.commands.auth_commands import (
    AuthenticateUser,
    LoginUser,
    RegisterUser,
    ResendVerification,
    VerifyEmail,
)
from lectern.application.commands.maintenance_commands import (
    PurgeExpiredCredentials,
    ReconcileEmailVerifications,
)
from lectern.application.commands.session_commands import LogoutUser, RevokeAllSessions
from lectern.application.commands.token_commands import RefreshAccessToken

__all__ = [
    "AuthenticateUser",
    "LoginUser",
    "LogoutUser",
    "PurgeExpiredCredentials",
    "ReconcileEmailVerifications",
    "RefreshAccessToken",
    "RegisterUser",
    "ResendVerification",
    "RevokeAllSessions",
    "VerifyEmail",
]
