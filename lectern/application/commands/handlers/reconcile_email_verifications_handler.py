"""Reconcile email verifications handler.

Repairs identities left unverified after their token was consumed (a
failure between the two steps of VerifyEmailHandler). Safe to run
repeatedly; each repair commits on its own.
"""

from uuid import UUID

from lectern.application.commands.maintenance_commands import (
    ReconcileEmailVerifications,
)
from lectern.application.dtos import ReconcileResult
from lectern.core.result import Failure, Result, Success
from lectern.domain.errors import StoreUnavailable, StoreUnavailableError
from lectern.domain.protocols import (
    EmailVerificationTokenRepository,
    LoggerProtocol,
    UnitOfWork,
    UserRepository,
)


class ReconcileEmailVerificationsHandler:
    """Handler for the ReconcileEmailVerifications command."""

    def __init__(
        self,
        token_repo: EmailVerificationTokenRepository,
        user_repo: UserRepository,
        uow: UnitOfWork,
        logger: LoggerProtocol,
    ) -> None:
        self._token_repo = token_repo
        self._user_repo = user_repo
        self._uow = uow
        self._logger = logger

    async def handle(
        self, cmd: ReconcileEmailVerifications
    ) -> Result[ReconcileResult, StoreUnavailableError]:
        repaired: list[UUID] = []
        missing: list[UUID] = []
        try:
            pending = await self._token_repo.find_consumed_for_unverified_users()
            for user_id in dict.fromkeys(token.user_id for token in pending):
                if await self._user_repo.mark_verified(user_id):
                    await self._uow.commit()
                    repaired.append(user_id)
                    self._logger.info(
                        "email_verification_reconciled", user_id=str(user_id)
                    )
                else:
                    missing.append(user_id)
        except StoreUnavailable as e:
            await self._uow.rollback()
            self._logger.error(
                "email_verification_reconcile_failed",
                error=e,
                repaired_count=len(repaired),
            )
            return Failure(error=StoreUnavailableError.from_exception(e))

        return Success(
            value=ReconcileResult(repaired_user_ids=repaired, missing_user_ids=missing)
        )
