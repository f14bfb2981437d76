"""Maintenance commands run by operators or schedulers."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, kw_only=True)
class ReconcileEmailVerifications:
    """Mark verified every identity whose verification token was consumed."""


@dataclass(frozen=True, kw_only=True)
class PurgeExpiredCredentials:
    """Delete expired tokens and login attempts outside retention.

    Attributes:
        now: Reference time (defaults to the current UTC time).
    """

    now: datetime | None = None
