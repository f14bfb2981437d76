"""Verification link tokens.

64 hex characters from 32 random bytes. The raw value is stored because
it is single use and expires after Settings.email_verification_expire_hours.
"""

import secrets
from datetime import UTC, datetime, timedelta

TOKEN_BYTES = 32


class EmailVerificationTokenService:
    """Mints verification tokens and their expiry.

    EmailVerificationLifecycle pairs the two when it writes a new row.
    """

    def __init__(self, expiration_hours: int = 24) -> None:
        self._lifetime = timedelta(hours=expiration_hours)

    def generate_token(self) -> str:
        return secrets.token_hex(TOKEN_BYTES)

    def calculate_expiration(self) -> datetime:
        """Expiry for a token minted now (UTC)."""
        return datetime.now(UTC) + self._lifetime
