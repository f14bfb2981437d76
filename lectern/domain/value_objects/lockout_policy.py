"""Lockout policy value object.

Threshold and lock window are deployment policy; Settings supplies them.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta


@dataclass(frozen=True)
class LockoutPolicy:
    """Brute-force lockout policy.

    Attributes:
        max_attempts: Consecutive failures that lock the identity.
        lockout_duration: Length of the lock window.

    Raises:
        ValueError: If either value is not positive.

    Example:
        >>> policy = LockoutPolicy(max_attempts=5, lockout_duration=timedelta(minutes=15))
        >>> policy.lock_until(datetime(2025, 1, 1, tzinfo=UTC))
        datetime.datetime(2025, 1, 1, 0, 15, tzinfo=datetime.timezone.utc)
    """

    max_attempts: int
    lockout_duration: timedelta

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.lockout_duration <= timedelta(0):
            raise ValueError("lockout_duration must be positive")

    def lock_until(self, now: datetime) -> datetime:
        """End of a lock window that starts at ``now``."""
        return now + self.lockout_duration
