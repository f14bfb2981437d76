"""Verify email handler.

Flow:
1. Consume the token (conditional UPDATE) and commit
2. Mark the owner verified and commit

Consume-then-update makes the consumed token the guard against duplicate
verification. A failure between the two commits leaves a consumed token
and an unverified identity; that is reported as VERIFICATION_INCOMPLETE,
logged as email_verification_reconcile_required, and repaired by
ReconcileEmailVerificationsHandler. Presenting the token again does not
repair it.
"""

from datetime import UTC, datetime

from lectern.application.commands.auth_commands import VerifyEmail
from lectern.application.dtos import VerifiedEmail
from lectern.application.services import EmailVerificationLifecycle
from lectern.core.enums import ErrorCode
from lectern.core.result import Failure, Result, Success
from lectern.domain.errors import StoreUnavailable, StoreUnavailableError, TokenError
from lectern.domain.protocols import LoggerProtocol, UnitOfWork, UserRepository


class VerifyEmailHandler:
    """Handler for the VerifyEmail command."""

    def __init__(
        self,
        lifecycle: EmailVerificationLifecycle,
        user_repo: UserRepository,
        uow: UnitOfWork,
        logger: LoggerProtocol,
    ) -> None:
        self._lifecycle = lifecycle
        self._user_repo = user_repo
        self._uow = uow
        self._logger = logger

    async def handle(
        self, cmd: VerifyEmail
    ) -> Result[VerifiedEmail, TokenError | StoreUnavailableError]:
        """Handle the VerifyEmail command.

        Returns:
            Success(VerifiedEmail) once the identity is verified.
            Failure(TokenError) with TOKEN_INVALID, TOKEN_EXPIRED,
            TOKEN_ALREADY_CONSUMED, IDENTITY_NOT_FOUND, or
            VERIFICATION_INCOMPLETE.
            Failure(StoreUnavailableError) if consumption itself fails.
        """
        now = datetime.now(UTC)
        token_prefix = cmd.token[:8]

        try:
            consumed = await self._lifecycle.consume(cmd.token, now)
            match consumed:
                case Failure(error=error):
                    await self._uow.rollback()
                    self._logger.warning(
                        "email_verification_rejected",
                        reason=error.code.value,
                        token_prefix=token_prefix,
                    )
                    return Failure(error=error)
            await self._uow.commit()
        except StoreUnavailable as e:
            await self._uow.rollback()
            self._logger.error(
                "email_verification_store_unavailable",
                error=e,
                operation=e.operation,
                token_prefix=token_prefix,
            )
            return Failure(error=StoreUnavailableError.from_exception(e))

        token = consumed.value
        try:
            updated = await self._user_repo.mark_verified(token.user_id)
            await self._uow.commit()
        except StoreUnavailable as e:
            await self._uow.rollback()
            self._logger.error(
                "email_verification_reconcile_required",
                error=e,
                user_id=str(token.user_id),
                verification_token_id=str(token.id),
                token_prefix=token_prefix,
            )
            return Failure(
                error=TokenError(
                    code=ErrorCode.VERIFICATION_INCOMPLETE,
                    message="Email verification could not be completed",
                    details={"user_id": str(token.user_id)},
                )
            )

        if not updated:
            self._logger.warning(
                "email_verification_rejected",
                reason=ErrorCode.IDENTITY_NOT_FOUND.value,
                user_id=str(token.user_id),
            )
            return Failure(
                error=TokenError(
                    code=ErrorCode.IDENTITY_NOT_FOUND,
                    message="User not found",
                )
            )

        self._logger.info("email_verified", user_id=str(token.user_id))
        return Success(value=VerifiedEmail(user_id=token.user_id))
