"""Refresh token service.

Opaque refresh tokens with a deterministic keyed digest for storage.

Token Strategy:
    - Opaque tokens (NOT JWT), 32 random bytes (urlsafe base64)
    - Stored as HMAC-SHA256(pepper, token); the raw value is never persisted
    - Deterministic digest, so lookup is a single indexed equality match
    - Rotated on every use
"""

import hashlib
import hmac
import secrets
from datetime import UTC, datetime, timedelta


class RefreshTokenService:
    """Refresh token generation and hashing service.

    Usage:
        service = RefreshTokenService(pepper=settings.refresh_token_key, expiration_days=7)
        token, token_hash = service.generate_token()
        await refresh_token_repo.save(user_id=user_id, token_hash=token_hash, ...)

        # On rotation
        stored = await refresh_token_repo.consume(service.hash_token(presented))
    """

    def __init__(self, pepper: str, expiration_days: int = 7) -> None:
        """Initialize refresh token service.

        Args:
            pepper: Server-held HMAC key. Without it a leaked table cannot be
                matched against guessed tokens.
            expiration_days: Token lifetime in days.

        Raises:
            ValueError: If pepper is empty.
        """
        if not pepper:
            raise ValueError("Refresh token pepper must not be empty")
        self._pepper = pepper.encode("utf-8")
        self._expiration_days = expiration_days

    def generate_token(self) -> tuple[str, str]:
        """Generate refresh token and its digest.

        Returns:
            Tuple of (token, token_hash).

        Example:
            >>> token, token_hash = service.generate_token()
            >>> len(token)  # 256 bits of entropy
            43
            >>> len(token_hash)
            64
        """
        token = secrets.token_urlsafe(32)
        return token, self.hash_token(token)

    def hash_token(self, token: str) -> str:
        """Hex HMAC-SHA256 digest of a token."""
        return hmac.new(self._pepper, token.encode("utf-8"), hashlib.sha256).hexdigest()

    def calculate_expiration(self) -> datetime:
        """Expiration datetime (UTC) for a token issued now."""
        return datetime.now(UTC) + timedelta(days=self._expiration_days)
