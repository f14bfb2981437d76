"""Authentication DTOs (Data Transfer Objects).

Result dataclasses carried from handlers back to the presentation layer.
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True, kw_only=True)
class AuthenticatedUser:
    """Identity summary returned by a successful authentication.

    Attributes:
        user_id: User's unique identifier.
        email: Normalized email.
        email_verified: Verification status (informational; login is allowed).
    """

    user_id: UUID
    email: str
    email_verified: bool


@dataclass(frozen=True, kw_only=True)
class AuthTokens:
    """Access/refresh pair returned to the client.

    Attributes:
        access_token: Signed access token (short-lived).
        refresh_token: Opaque refresh value (shown once, stored as a digest).
        refresh_token_id: Stored row id of the refresh token (for logs).
        refresh_expires_at: Refresh token expiry.
        token_type: Always "bearer".
        expires_in: Access token lifetime in seconds.
    """

    access_token: str
    refresh_token: str
    refresh_token_id: UUID
    refresh_expires_at: datetime
    token_type: str = "bearer"
    expires_in: int = 900


@dataclass(frozen=True, kw_only=True)
class LoginResult:
    """Successful login: identity summary plus the issued pair."""

    user: AuthenticatedUser
    tokens: AuthTokens


@dataclass(frozen=True, kw_only=True)
class RegisteredUser:
    """Newly registered identity."""

    user_id: UUID
    email: str


@dataclass(frozen=True, kw_only=True)
class VerifiedEmail:
    """Identity whose email was just verified."""

    user_id: UUID


@dataclass(frozen=True, kw_only=True)
class RevocationResult:
    """Number of refresh tokens removed (0 on a repeated revoke)."""

    revoked_count: int
