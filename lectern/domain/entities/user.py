"""User domain entity for authentication.

Pure business logic, no framework dependencies.

Lockout:
    - failed_login_attempts: consecutive failures since the last success
    - locked_until: end of the active lock window (None when open)
    - Counter changes are applied by the store's atomic primitives; the
      methods here only read state or mirror a transition locally.
"""

from dataclasses import dataclass
from datetime import UTC, datetime
from math import ceil
from uuid import UUID

from lectern.domain.value_objects.lockout_policy import LockoutPolicy


@dataclass
class User:
    """User (identity) domain entity with lockout rules.

    Represents an authenticated principal: normalized email, bcrypt hash,
    verified flag, and the durable failure counter that drives lockout.

    Business Rules:
        - Email is stored normalized (trimmed, lowercase) and unique
        - Account locks once the counter reaches the policy threshold
        - Counter resets on successful login or when the lock window expires
        - Email verification does not block login

    Attributes:
        id: Unique user identifier
        email: Normalized email address
        password_hash: Bcrypt hashed password (never plaintext)
        is_verified: Email verification status
        failed_login_attempts: Consecutive failed login counter
        locked_until: Timestamp until which account is locked (None if not locked)
        created_at: Timestamp when user was created
        updated_at: Timestamp when user was last updated

    Example:
        >>> user = User(
        ...     id=uuid7(),
        ...     email="reader@example.com",
        ...     password_hash="$2b$10$...",
        ...     is_verified=False,
        ...     failed_login_attempts=0,
        ...     locked_until=None,
        ...     created_at=datetime.now(UTC),
        ...     updated_at=datetime.now(UTC),
        ... )
        >>> user.is_locked()
        False
    """

    id: UUID
    email: str
    password_hash: str
    is_verified: bool
    failed_login_attempts: int
    locked_until: datetime | None
    created_at: datetime
    updated_at: datetime

    def is_locked(self, now: datetime | None = None) -> bool:
        """Check if account is currently locked.

        Account is locked if locked_until is in the future.

        Args:
            now: Reference time (defaults to current UTC time).

        Returns:
            bool: True if account is locked, False otherwise.

        Example:
            >>> user.locked_until = datetime.now(UTC) + timedelta(minutes=10)
            >>> user.is_locked()
            True
        """
        if self.locked_until is None:
            return False
        return (now or datetime.now(UTC)) < self.locked_until

    def lock_expired(self, now: datetime | None = None) -> bool:
        """Check if a lock was set and its window has passed.

        An expired lock still needs its counter released before the
        attempt is evaluated normally.

        Args:
            now: Reference time (defaults to current UTC time).

        Returns:
            bool: True if locked_until is set and not in the future.
        """
        if self.locked_until is None:
            return False
        return (now or datetime.now(UTC)) >= self.locked_until

    def lock_remaining_seconds(self, now: datetime | None = None) -> int:
        """Seconds until the lock window ends (0 when not locked).

        Rounded up so a caller told to retry after N seconds is never early.
        """
        if not self.is_locked(now):
            return 0
        assert self.locked_until is not None
        remaining = self.locked_until - (now or datetime.now(UTC))
        return max(1, ceil(remaining.total_seconds()))

    def apply_failed_login(self, policy: LockoutPolicy, now: datetime) -> None:
        """Mirror one failed attempt onto this instance.

        Used by in-memory stores; SQL stores perform the same transition in a
        single UPDATE statement.

        Side Effects:
            - Increments failed_login_attempts by 1
            - Sets locked_until when the counter reaches the threshold
        """
        self.failed_login_attempts += 1
        if self.failed_login_attempts >= policy.max_attempts:
            self.locked_until = now + policy.lockout_duration
        self.updated_at = now

    def reset_failed_login(self, now: datetime | None = None) -> None:
        """Reset failed login counter and clear the lock.

        Side Effects:
            - Resets failed_login_attempts to 0
            - Clears locked_until (sets to None)
        """
        self.failed_login_attempts = 0
        self.locked_until = None
        self.updated_at = now or datetime.now(UTC)

    def verify_email(self) -> None:
        """Mark email as verified."""
        self.is_verified = True
        self.updated_at = datetime.now(UTC)
