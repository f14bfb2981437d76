"""Authentication commands (CQRS write operations).

Commands represent user intent to change system state.
All commands are immutable (frozen=True) and keyword-only (kw_only=True).

Pattern:
- Commands are data containers (no logic)
- Handlers execute business logic and return Result types
- Field types are the Annotated domain types; the presentation layer
  validates them before a command is built
"""

from dataclasses import dataclass, field

from lectern.domain.types import Email, LoginSecret, Password, VerificationToken
from lectern.domain.value_objects import DeviceContext


@dataclass(frozen=True, kw_only=True)
class AuthenticateUser:
    """Check credentials and apply lockout policy.

    Does NOT issue tokens (see LoginUser).

    Attributes:
        email: Submitted email (normalized by the handler as well).
        password: Submitted secret (no strength rules at login).
        device: Device context for the audit trail.

    Example:
        >>> command = AuthenticateUser(email="reader@example.com", password="wrongpass1")
        >>> result = await handler.handle(command)
    """

    email: Email
    password: LoginSecret
    device: DeviceContext = field(default_factory=DeviceContext)


@dataclass(frozen=True, kw_only=True)
class LoginUser:
    """Authenticate, then issue an access/refresh pair bound to the device."""

    email: Email
    password: LoginSecret
    device: DeviceContext = field(default_factory=DeviceContext)


@dataclass(frozen=True, kw_only=True)
class RegisterUser:
    """Register a new identity and send its first verification link.

    Attributes:
        email: Email address (validated, normalized).
        password: New password (strength rules apply).
    """

    email: Email
    password: Password


@dataclass(frozen=True, kw_only=True)
class VerifyEmail:
    """Consume a verification token and mark its owner verified."""

    token: VerificationToken


@dataclass(frozen=True, kw_only=True)
class ResendVerification:
    """Issue a fresh verification token for an unverified identity."""

    email: Email
