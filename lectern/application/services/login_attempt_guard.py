"""Login attempt guard (brute-force lockout).

Per-identity state machine over the durable counter on the users row:

    Open   --success-->                 Open   (counter = 0)
    Open   --failure, count < max-->    Open   (counter += 1)
    Open   --failure, count == max-->   Locked (locked_until = now + window)
    Locked --attempt before window end-->  Locked (rejected, no hashing)
    Locked --attempt after window end-->   Open   (counter = 0, then evaluated)

Every transition goes through a single-statement store primitive, and
every attempt appends a LoginAttempt in the same transaction as its
counter change. The caller commits.
"""

from dataclasses import dataclass
from datetime import datetime
from math import ceil

from uuid_extensions import uuid7

from lectern.domain.entities.login_attempt import LoginAttempt
from lectern.domain.entities.user import User
from lectern.domain.protocols import LoginAttemptRepository, UserRepository
from lectern.domain.protocols.user_repository import LockoutState
from lectern.domain.value_objects import DeviceContext, LockoutPolicy


class FailureReason:
    """Internal failure reasons written to the audit trail."""

    UNKNOWN_IDENTITY = "unknown_identity"
    INVALID_PASSWORD = "invalid_password"
    ACCOUNT_LOCKED = "account_locked"
    LOCKED_CONCURRENTLY = "locked_concurrently"


@dataclass(frozen=True)
class GuardDecision:
    """Whether an attempt may proceed.

    Attributes:
        locked: True if the identity is (now) locked.
        retry_after_seconds: Remaining lock time when locked, else 0.
    """

    locked: bool
    retry_after_seconds: int = 0

    @classmethod
    def open(cls) -> "GuardDecision":
        return cls(locked=False)


def _remaining_seconds(locked_until: datetime, now: datetime) -> int:
    return max(1, ceil((locked_until - now).total_seconds()))


class LoginAttemptGuard:
    """Lockout policy enforcement and login audit trail.

    Args:
        user_repo: Owner of the durable counter primitives.
        attempt_repo: Append-only audit trail.
        policy: Threshold and lock window.
    """

    def __init__(
        self,
        user_repo: UserRepository,
        attempt_repo: LoginAttemptRepository,
        policy: LockoutPolicy,
    ) -> None:
        self._user_repo = user_repo
        self._attempt_repo = attempt_repo
        self._policy = policy

    @property
    def policy(self) -> LockoutPolicy:
        return self._policy

    async def check(self, user: User, now: datetime) -> GuardDecision:
        """Pre-check before the secret is verified.

        Releases an expired lock (counter back to 0) so the attempt is then
        evaluated normally.
        """
        if user.is_locked(now):
            return GuardDecision(
                locked=True, retry_after_seconds=user.lock_remaining_seconds(now)
            )
        if user.lock_expired(now):
            await self._user_repo.release_expired_lock(user.id, now)
            user.reset_failed_login(now)
        return GuardDecision.open()

    async def record_failure(
        self, user: User, device: DeviceContext, now: datetime
    ) -> GuardDecision:
        """Count a wrong secret; lock when the threshold is reached."""
        state: LockoutState | None = await self._user_repo.record_failed_login(
            user.id,
            max_attempts=self._policy.max_attempts,
            lock_until=self._policy.lock_until(now),
            now=now,
        )
        await self._append(user.email, False, device, now, FailureReason.INVALID_PASSWORD)
        if state is None or state.locked_until is None or state.locked_until <= now:
            return GuardDecision.open()
        return GuardDecision(
            locked=True,
            retry_after_seconds=_remaining_seconds(state.locked_until, now),
        )

    async def record_locked(
        self, user: User, device: DeviceContext, now: datetime
    ) -> None:
        """Audit an attempt rejected by the pre-check."""
        await self._append(user.email, False, device, now, FailureReason.ACCOUNT_LOCKED)

    async def record_unknown_identity(
        self, email: str, device: DeviceContext, now: datetime
    ) -> None:
        """Audit an attempt against an email with no identity."""
        await self._append(email, False, device, now, FailureReason.UNKNOWN_IDENTITY)

    async def record_success(
        self, user: User, device: DeviceContext, now: datetime
    ) -> GuardDecision | None:
        """Reset the counter after a correct secret.

        If a concurrent failure locked the identity in between, the reset
        does not apply and the attempt is rejected as locked.

        Returns:
            The decision, or None if the identity was deleted meanwhile.
        """
        if await self._user_repo.reset_failed_login(user.id, now):
            user.reset_failed_login(now)
            await self._append(user.email, True, device, now, None)
            return GuardDecision.open()

        await self._append(
            user.email, False, device, now, FailureReason.LOCKED_CONCURRENTLY
        )
        current = await self._user_repo.find_by_id(user.id)
        if current is None:
            return None
        if current.locked_until is None:
            return GuardDecision(
                locked=True,
                retry_after_seconds=int(self._policy.lockout_duration.total_seconds()),
            )
        return GuardDecision(
            locked=True,
            retry_after_seconds=_remaining_seconds(current.locked_until, now),
        )

    async def _append(
        self,
        email: str,
        success: bool,
        device: DeviceContext,
        now: datetime,
        failure_reason: str | None,
    ) -> None:
        await self._attempt_repo.append(
            LoginAttempt(
                id=uuid7(),
                email=email,
                success=success,
                ip_address=device.ip_address,
                user_agent=device.user_agent,
                failure_reason=failure_reason,
                created_at=now,
            )
        )
