"""Register user handler.

Flow:
1. Reject a taken email
2. Hash the password (a hashing failure propagates; nothing is stored)
3. Stage the user and its first verification token, commit
4. Send the verification link (delivery failure is logged; the user can
   request a resend)
"""

from datetime import UTC, datetime

from uuid_extensions import uuid7

from lectern.application.commands.auth_commands import RegisterUser
from lectern.application.dtos import RegisteredUser
from lectern.application.services import EmailVerificationLifecycle
from lectern.core.enums import ErrorCode
from lectern.core.result import Failure, Result, Success
from lectern.domain.entities.user import User
from lectern.domain.errors import StoreUnavailable, StoreUnavailableError, UserError
from lectern.domain.protocols import (
    EmailProtocol,
    LoggerProtocol,
    PasswordHashingProtocol,
    UnitOfWork,
    UserRepository,
)
from lectern.domain.validators import normalize_email


def email_taken() -> UserError:
    return UserError(
        code=ErrorCode.EMAIL_ALREADY_EXISTS,
        message="Email already registered",
    )


class RegisterUserHandler:
    """Handler for the RegisterUser command."""

    def __init__(
        self,
        user_repo: UserRepository,
        password_service: PasswordHashingProtocol,
        lifecycle: EmailVerificationLifecycle,
        email_service: EmailProtocol,
        uow: UnitOfWork,
        logger: LoggerProtocol,
        verification_url: str,
    ) -> None:
        self._user_repo = user_repo
        self._password_service = password_service
        self._lifecycle = lifecycle
        self._email_service = email_service
        self._uow = uow
        self._logger = logger
        self._verification_url = verification_url

    async def handle(
        self, cmd: RegisterUser
    ) -> Result[RegisteredUser, UserError | StoreUnavailableError]:
        email = normalize_email(cmd.email)
        try:
            if await self._user_repo.exists_by_email(email):
                self._logger.info("registration_rejected", reason="email_taken")
                return Failure(error=email_taken())

            now = datetime.now(UTC)
            user = User(
                id=uuid7(),
                email=email,
                password_hash=self._password_service.hash_password(cmd.password),
                is_verified=False,
                failed_login_attempts=0,
                locked_until=None,
                created_at=now,
                updated_at=now,
            )
            if not await self._user_repo.save(user):
                await self._uow.rollback()
                self._logger.info("registration_rejected", reason="email_taken")
                return Failure(error=email_taken())

            token = await self._lifecycle.issue(user.id)
            await self._uow.commit()
        except StoreUnavailable as e:
            await self._uow.rollback()
            self._logger.error("registration_store_unavailable", error=e, operation=e.operation)
            return Failure(error=StoreUnavailableError.from_exception(e))

        self._logger.info("user_registered", user_id=str(user.id))
        await send_verification(
            self._email_service,
            self._logger,
            to_email=user.email,
            url=f"{self._verification_url}?token={token.token}",
        )
        return Success(value=RegisteredUser(user_id=user.id, email=user.email))


async def send_verification(
    email_service: EmailProtocol, logger: LoggerProtocol, *, to_email: str, url: str
) -> None:
    """Send a verification link; a delivery error is logged, not raised."""
    try:
        await email_service.send_verification_email(to_email=to_email, verification_url=url)
    except Exception as e:
        logger.error("verification_email_failed", error=e, to_email=to_email)
        # Registration stands; the user can request a resend
