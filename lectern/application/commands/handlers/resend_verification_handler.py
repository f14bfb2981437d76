"""Resend verification handler.

Always reports success so the endpoint cannot be used to probe which
emails are registered or verified. Outstanding tokens of the identity are
replaced by the new one.
"""

from lectern.application.commands.auth_commands import ResendVerification
from lectern.application.commands.handlers.register_user_handler import (
    send_verification,
)
from lectern.application.services import EmailVerificationLifecycle
from lectern.core.result import Failure, Result, Success
from lectern.domain.errors import StoreUnavailable, StoreUnavailableError
from lectern.domain.protocols import (
    EmailProtocol,
    LoggerProtocol,
    UnitOfWork,
    UserRepository,
)
from lectern.domain.validators import normalize_email


class ResendVerificationHandler:
    """Handler for the ResendVerification command."""

    def __init__(
        self,
        user_repo: UserRepository,
        lifecycle: EmailVerificationLifecycle,
        email_service: EmailProtocol,
        uow: UnitOfWork,
        logger: LoggerProtocol,
        verification_url: str,
    ) -> None:
        self._user_repo = user_repo
        self._lifecycle = lifecycle
        self._email_service = email_service
        self._uow = uow
        self._logger = logger
        self._verification_url = verification_url

    async def handle(
        self, cmd: ResendVerification
    ) -> Result[None, StoreUnavailableError]:
        """Handle the ResendVerification command.

        Returns:
            Success(None) whether or not a link was sent.
            Failure(StoreUnavailableError) if the store fails.
        """
        email = normalize_email(cmd.email)
        try:
            user = await self._user_repo.find_by_email(email)
            if user is None or user.is_verified:
                self._logger.info(
                    "verification_resend_skipped",
                    reason="unknown" if user is None else "already_verified",
                )
                return Success(value=None)

            token = await self._lifecycle.reissue(user.id)
            await self._uow.commit()
        except StoreUnavailable as e:
            await self._uow.rollback()
            self._logger.error("verification_resend_store_unavailable", error=e)
            return Failure(error=StoreUnavailableError.from_exception(e))

        self._logger.info("verification_resent", user_id=str(user.id))
        await send_verification(
            self._email_service,
            self._logger,
            to_email=user.email,
            url=f"{self._verification_url}?token={token.token}",
        )
        return Success(value=None)
