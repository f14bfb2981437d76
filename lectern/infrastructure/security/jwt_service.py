"""JWT token service (adapter).

Implements TokenGenerationProtocol using PyJWT with HMAC-SHA256.

Security:
    - HS256 with a 256-bit minimum key
    - Short expiry (Settings.access_token_expire_minutes)
    - Issuer and audience pinned on both encode and decode
    - type="access" discriminator so no other token kind is accepted
"""

from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import UUID

import jwt
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError
from uuid_extensions import uuid7

from lectern.core.enums import ErrorCode
from lectern.core.result import Failure, Result, Success
from lectern.domain.errors import TokenError

ACCESS_TOKEN_TYPE = "access"


class JWTService:
    """JWT access token generation and validation service.

    Usage:
        from lectern.core.container import get_token_service

        token_service = get_token_service()
        token = token_service.generate_access_token(user_id=user.id, email=user.email)
        result = token_service.validate_access_token(token)
    """

    def __init__(
        self,
        secret_key: str,
        expiration_minutes: int = 15,
        issuer: str = "lectern",
        audience: str = "lectern-app",
    ) -> None:
        """Initialize JWT service.

        Args:
            secret_key: HMAC-SHA256 signing key, at least 32 bytes.
            expiration_minutes: Token lifetime in minutes.
            issuer: Value of the iss claim.
            audience: Value of the aud claim.

        Raises:
            ValueError: If secret_key is too short (< 32 bytes).
        """
        if len(secret_key) < 32:
            msg = "JWT secret key must be at least 32 bytes (256 bits)"
            raise ValueError(msg)
        self._secret_key = secret_key
        self._expiration_minutes = expiration_minutes
        self._issuer = issuer
        self._audience = audience
        self._algorithm = "HS256"

    @property
    def access_token_expire_seconds(self) -> int:
        return self._expiration_minutes * 60

    def generate_access_token(self, user_id: UUID, email: str) -> str:
        """Generate a signed access token.

        Example:
            >>> service = JWTService(secret_key="x" * 32)
            >>> token = service.generate_access_token(uuid7(), "reader@example.com")
            >>> len(token.split("."))
            3
        """
        now = datetime.now(UTC)
        expires_at = now + timedelta(minutes=self._expiration_minutes)

        payload = {
            "sub": str(user_id),
            "email": email,
            "type": ACCESS_TOKEN_TYPE,
            "iat": int(now.timestamp()),
            "exp": int(expires_at.timestamp()),
            "jti": str(uuid7()),
            "iss": self._issuer,
            "aud": self._audience,
        }

        token: str = jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
        return token

    def validate_access_token(self, token: str) -> Result[dict[str, Any], TokenError]:
        """Validate an access token and extract its claims.

        PyJWT checks signature, exp, iss, and aud; the type claim is checked
        here.

        Returns:
            Success(payload), or Failure(TokenError) with TOKEN_EXPIRED for an
            expired token and TOKEN_INVALID for anything else.
        """
        try:
            payload: dict[str, Any] = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                issuer=self._issuer,
                audience=self._audience,
                options={"require": ["sub", "exp", "iat", "type"]},
            )
        except ExpiredSignatureError:
            return Failure(
                error=TokenError(
                    code=ErrorCode.TOKEN_EXPIRED,
                    message="Access token expired",
                )
            )
        except InvalidTokenError:
            return Failure(
                error=TokenError(
                    code=ErrorCode.TOKEN_INVALID,
                    message="Invalid access token",
                )
            )

        if payload.get("type") != ACCESS_TOKEN_TYPE:
            return Failure(
                error=TokenError(
                    code=ErrorCode.TOKEN_INVALID,
                    message="Invalid access token",
                )
            )
        return Success(value=payload)
