"""Refresh token service protocol.

Generates opaque refresh values and derives the digest used for storage
and lookup. The raw value is only ever returned to the client.
"""

from datetime import datetime
from typing import Protocol


class RefreshTokenServiceProtocol(Protocol):
    """Opaque refresh token generation interface.

    Implementations:
        - RefreshTokenService: token_urlsafe(32) + HMAC-SHA256 digest
    """

    def generate_token(self) -> tuple[str, str]:
        """Generate a new refresh token.

        Returns:
            Tuple of (token, token_hash). The token goes to the client; the
            hash is what the repository stores.
        """
        ...

    def hash_token(self, token: str) -> str:
        """Derive the stored digest for a presented token (deterministic)."""
        ...

    def calculate_expiration(self) -> datetime:
        """Expiration timestamp for a token issued now."""
        ...
