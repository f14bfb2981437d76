"""Purge expired credentials handler.

Removes expired refresh tokens, expired unconsumed verification tokens,
and login attempts older than the retention window, in one transaction.
Consumed verification tokens are kept: reconcile reads them.
"""

from datetime import UTC, datetime, timedelta

from lectern.application.commands.maintenance_commands import PurgeExpiredCredentials
from lectern.application.dtos import PurgeResult
from lectern.core.result import Failure, Result, Success
from lectern.domain.errors import StoreUnavailable, StoreUnavailableError
from lectern.domain.protocols import (
    EmailVerificationTokenRepository,
    LoggerProtocol,
    LoginAttemptRepository,
    RefreshTokenRepository,
    UnitOfWork,
)


class PurgeExpiredCredentialsHandler:
    """Handler for the PurgeExpiredCredentials command."""

    def __init__(
        self,
        refresh_token_repo: RefreshTokenRepository,
        verification_token_repo: EmailVerificationTokenRepository,
        attempt_repo: LoginAttemptRepository,
        uow: UnitOfWork,
        logger: LoggerProtocol,
        attempt_retention: timedelta,
    ) -> None:
        self._refresh_token_repo = refresh_token_repo
        self._verification_token_repo = verification_token_repo
        self._attempt_repo = attempt_repo
        self._uow = uow
        self._logger = logger
        self._attempt_retention = attempt_retention

    async def handle(
        self, cmd: PurgeExpiredCredentials
    ) -> Result[PurgeResult, StoreUnavailableError]:
        now = cmd.now or datetime.now(UTC)
        try:
            refresh_tokens = await self._refresh_token_repo.delete_expired(now)
            verification_tokens = (
                await self._verification_token_repo.delete_expired_unconsumed(now)
            )
            login_attempts = await self._attempt_repo.delete_older_than(
                now - self._attempt_retention
            )
            await self._uow.commit()
        except StoreUnavailable as e:
            await self._uow.rollback()
            self._logger.error("credential_purge_failed", error=e, operation=e.operation)
            return Failure(error=StoreUnavailableError.from_exception(e))

        result = PurgeResult(
            refresh_tokens=refresh_tokens,
            verification_tokens=verification_tokens,
            login_attempts=login_attempts,
        )
        self._logger.info(
            "credentials_purged",
            refresh_tokens=result.refresh_tokens,
            verification_tokens=result.verification_tokens,
            login_attempts=result.login_attempts,
        )
        return Success(value=result)
