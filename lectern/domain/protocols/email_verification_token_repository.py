"""EmailVerificationTokenRepository protocol (port) for domain layer.

consume() flips consumed_at in one conditional statement, so a token can be
consumed once and only while unexpired.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from uuid import UUID


@dataclass
class EmailVerificationTokenData:
    """Data transfer object for email verification token information."""

    id: UUID
    user_id: UUID
    token: str
    expires_at: datetime
    consumed_at: datetime | None
    created_at: datetime

    def is_expired(self, now: datetime) -> bool:
        """True once expires_at has been reached."""
        return now >= self.expires_at

    @property
    def is_consumed(self) -> bool:
        return self.consumed_at is not None


class EmailVerificationTokenRepository(Protocol):
    """Protocol for email verification token persistence operations."""

    async def save(
        self,
        user_id: UUID,
        token: str,
        expires_at: datetime,
    ) -> EmailVerificationTokenData:
        """Create an unconsumed token."""
        ...

    async def find_by_token(self, token: str) -> EmailVerificationTokenData | None:
        """Find token regardless of state, or None."""
        ...

    async def consume(
        self, token: str, now: datetime
    ) -> EmailVerificationTokenData | None:
        """Mark the token consumed if it is unconsumed and unexpired.

        Returns:
            The consumed token, or None when nothing matched. Callers use
            find_by_token to tell missing, expired, and consumed apart.
        """
        ...

    async def delete_unconsumed_for_user(self, user_id: UUID) -> int:
        """Delete outstanding tokens for a user (before a resend)."""
        ...

    async def find_consumed_for_unverified_users(
        self,
    ) -> list[EmailVerificationTokenData]:
        """Consumed tokens whose user is still unverified.

        These mark verifications interrupted between consume and the user
        update.
        """
        ...

    async def delete_expired_unconsumed(self, now: datetime) -> int:
        """Delete unconsumed tokens past expiry. Returns rows removed."""
        ...
