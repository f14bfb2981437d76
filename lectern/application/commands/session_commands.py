"""Session revocation commands (logout)."""

from dataclasses import dataclass
from uuid import UUID

from lectern.domain.types import RefreshToken


@dataclass(frozen=True, kw_only=True)
class LogoutUser:
    """Revoke one refresh token by value (logout this device)."""

    refresh_token: RefreshToken


@dataclass(frozen=True, kw_only=True)
class RevokeAllSessions:
    """Revoke every refresh token of an identity (logout all devices)."""

    user_id: UUID
