"""UserRepository protocol (port) for domain layer.

Besides plain lookups, this port exposes the atomic counter primitives the
login guard relies on. Each primitive is a single conditional statement in
the store, so two concurrent callers on the same user always observe each
other's writes.

Implementations never commit; the caller's unit of work does.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from uuid import UUID

from lectern.domain.entities.user import User


@dataclass(frozen=True)
class LockoutState:
    """Counter state returned by record_failed_login.

    Attributes:
        failed_login_attempts: Counter value after the increment.
        locked_until: Lock end after the increment (None if still open).
    """

    failed_login_attempts: int
    locked_until: datetime | None


class UserRepository(Protocol):
    """User repository protocol (port).

    Raises:
        StoreUnavailable: From any method when the store fails.
    """

    async def find_by_id(self, user_id: UUID) -> User | None:
        """Find user by ID, or None."""
        ...

    async def find_by_email(self, email: str) -> User | None:
        """Find user by normalized email, or None."""
        ...

    async def exists_by_email(self, email: str) -> bool:
        """Check whether a normalized email is registered."""
        ...

    async def save(self, user: User) -> bool:
        """Insert a new user.

        Returns:
            True when inserted; False when the email is already taken
            (unique index violation).
        """
        ...

    async def delete(self, user_id: UUID) -> bool:
        """Delete a user (account removal). True if a row was removed."""
        ...

    async def record_failed_login(
        self,
        user_id: UUID,
        max_attempts: int,
        lock_until: datetime,
        now: datetime,
    ) -> LockoutState | None:
        """Atomically increment the failure counter and lock on threshold.

        Sets locked_until to ``lock_until`` when the incremented counter
        reaches ``max_attempts``; otherwise leaves it unchanged.

        Returns:
            Post-increment state, or None if the user no longer exists.
        """
        ...

    async def release_expired_lock(self, user_id: UUID, now: datetime) -> bool:
        """Reset counter and lock only if the lock window has passed.

        Returns:
            True if an expired lock was released.
        """
        ...

    async def reset_failed_login(self, user_id: UUID, now: datetime) -> bool:
        """Reset the counter after a successful login.

        Applies only when no active lock exists, so a lock written by a
        concurrent failure is never cleared by a racing success.

        Returns:
            True if the reset applied; False if an active lock blocked it.
        """
        ...

    async def mark_verified(self, user_id: UUID) -> bool:
        """Set is_verified. True if the user exists."""
        ...
