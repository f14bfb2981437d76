"""Maintenance job DTOs."""

from dataclasses import dataclass, field
from uuid import UUID


@dataclass(frozen=True, kw_only=True)
class ReconcileResult:
    """Outcome of a verification reconcile run.

    Attributes:
        repaired_user_ids: Identities marked verified by this run.
        missing_user_ids: Token owners that no longer exist.
    """

    repaired_user_ids: list[UUID] = field(default_factory=list)
    missing_user_ids: list[UUID] = field(default_factory=list)


@dataclass(frozen=True, kw_only=True)
class PurgeResult:
    """Rows removed by a purge run."""

    refresh_tokens: int
    verification_tokens: int
    login_attempts: int
