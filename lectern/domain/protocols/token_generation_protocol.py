"""Token generation protocol for domain layer.

Interface for short-lived access tokens. Refresh tokens are opaque values
handled by RefreshTokenServiceProtocol.

Token Strategy:
    - Access tokens: signed JWT, minutes-long expiry, never persisted
    - Stateless validation (no database lookup)
"""

from typing import Any, Protocol
from uuid import UUID

from lectern.core.result import Result
from lectern.domain.errors import TokenError


class TokenGenerationProtocol(Protocol):
    """Access token generation and validation interface.

    Usage:
        token = token_service.generate_access_token(user_id=user.id, email=user.email)

        match token_service.validate_access_token(token):
            case Success(value=payload):
                user_id = UUID(payload["sub"])
            case Failure(error=error):
                ...
    """

    def generate_access_token(self, user_id: UUID, email: str) -> str:
        """Generate a signed access token.

        Claims: sub, email, type="access", iat, exp, jti, iss, aud.

        Args:
            user_id: User identifier (stored in 'sub').
            email: User email address.

        Returns:
            Encoded token (header.payload.signature).
        """
        ...

    def validate_access_token(self, token: str) -> Result[dict[str, Any], TokenError]:
        """Validate an access token and return its claims.

        Returns:
            Success(payload) for a valid access token;
            Failure(TokenError) with TOKEN_EXPIRED or TOKEN_INVALID otherwise.
        """
        ...

    @property
    def access_token_expire_seconds(self) -> int:
        """Access token lifetime in seconds (for expires_in responses)."""
        ...
