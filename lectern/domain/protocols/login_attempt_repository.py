"""LoginAttemptRepository protocol (port).

Append-only audit trail of authentication attempts.
"""

from datetime import datetime
from typing import Protocol

from lectern.domain.entities.login_attempt import LoginAttempt


class LoginAttemptRepository(Protocol):
    """Login attempt audit trail."""

    async def append(self, attempt: LoginAttempt) -> None:
        """Stage one attempt record."""
        ...

    async def find_by_email(
        self, email: str, since: datetime | None = None
    ) -> list[LoginAttempt]:
        """Attempts for an email, oldest first, optionally since a time."""
        ...

    async def delete_older_than(self, cutoff: datetime) -> int:
        """Retention purge. Returns rows removed."""
        ...
