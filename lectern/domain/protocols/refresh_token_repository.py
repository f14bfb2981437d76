"""RefreshTokenRepository protocol (port) for domain layer.

Tokens are stored by digest only. consume() is the replay boundary: it
removes and returns the row in one statement, so of two concurrent callers
presenting the same value exactly one gets the row.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from uuid import UUID

from lectern.domain.value_objects.device_context import DeviceContext


@dataclass
class RefreshTokenData:
    """Data transfer object for refresh token information.

    Used by protocol methods to return token data without
    exposing infrastructure model classes to domain/application layers.
    """

    id: UUID
    user_id: UUID
    token_hash: str
    device_id: str | None
    user_agent: str | None
    ip_address: str | None
    expires_at: datetime
    created_at: datetime
    last_used_at: datetime | None
    rotation_count: int

    @property
    def device(self) -> DeviceContext:
        """Device context the token was issued to."""
        return DeviceContext(
            device_id=self.device_id,
            user_agent=self.user_agent,
            ip_address=self.ip_address,
        )

    def is_expired(self, now: datetime) -> bool:
        """True once expires_at has been reached."""
        return now >= self.expires_at


class RefreshTokenRepository(Protocol):
    """Protocol for refresh token persistence operations.

    Token Lifecycle:
        1. Created at login (digest + device context)
        2. Consumed exactly once on rotation, replaced in the same transaction
        3. Deleted on logout (one) or logout-all (every token of a user)
        4. Expired rows purged by retention
    """

    async def save(
        self,
        user_id: UUID,
        token_hash: str,
        expires_at: datetime,
        device: DeviceContext,
        rotation_count: int = 0,
    ) -> RefreshTokenData:
        """Create a refresh token row."""
        ...

    async def consume(self, token_hash: str) -> RefreshTokenData | None:
        """Delete the token with this digest and return it.

        Returns:
            The removed token, or None if no such token exists (never issued,
            already rotated, or revoked).
        """
        ...

    async def delete_by_token_hash(self, token_hash: str) -> int:
        """Delete one token by digest. Returns rows removed (0 or 1)."""
        ...

    async def delete_all_for_user(self, user_id: UUID) -> int:
        """Delete every token a user holds. Returns rows removed."""
        ...

    async def find_by_user_id(self, user_id: UUID) -> list[RefreshTokenData]:
        """List live token rows for a user (newest first)."""
        ...

    async def delete_expired(self, now: datetime) -> int:
        """Delete tokens past expiry. Returns rows removed."""
        ...
