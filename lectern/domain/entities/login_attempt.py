"""Login attempt audit record.

Append-only: created once per authentication attempt, removed only by the
retention purge. Lockout decisions read the User counter, not this trail.
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class LoginAttempt:
    """One authentication attempt.

    Attributes:
        id: Record identifier.
        email: Normalized email that was submitted (may match no user).
        success: Whether the attempt authenticated.
        ip_address: Origin address (optional).
        user_agent: Client User-Agent (optional).
        failure_reason: Internal reason code for failures (never shown to callers).
        created_at: When the attempt happened.
    """

    id: UUID
    email: str
    success: bool
    ip_address: str | None
    user_agent: str | None
    failure_reason: str | None
    created_at: datetime
