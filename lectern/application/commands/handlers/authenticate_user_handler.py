"""Authenticate user handler.

Single responsibility: decide whether a login attempt succeeds.
Does NOT issue tokens (LoginUserHandler does).

Flow:
1. Normalize email and look up the identity
2. Unknown email: dummy hash check, audit, generic failure
3. Lockout pre-check: locked identities are rejected without hashing;
   expired locks are released
4. Verify the secret
5. Wrong secret: atomic counter increment (+ lock at threshold), audit
6. Correct secret: conditional counter reset, audit
7. Commit: the audit record and counter change are durable before the
   caller sees the outcome

Architecture:
- Application layer ONLY imports from domain layer
- Repositories and unit of work are injected via protocols
"""

from datetime import UTC, datetime

from lectern.application.commands.auth_commands import AuthenticateUser
from lectern.application.dtos import AuthenticatedUser
from lectern.application.services import CredentialVerifier, LoginAttemptGuard
from lectern.application.services.credential_verifier import invalid_credentials
from lectern.core.enums import ErrorCode
from lectern.core.result import Failure, Result, Success
from lectern.domain.errors import (
    AuthenticationError,
    StoreUnavailable,
    StoreUnavailableError,
)
from lectern.domain.protocols import LoggerProtocol, UnitOfWork


def account_locked(retry_after_seconds: int) -> AuthenticationError:
    return AuthenticationError(
        code=ErrorCode.ACCOUNT_LOCKED,
        message=AuthenticationError.ACCOUNT_LOCKED_MESSAGE,
        retry_after_seconds=retry_after_seconds,
    )


class AuthenticateUserHandler:
    """Handler for the AuthenticateUser command.

    Follows hexagonal architecture:
    - Application layer (this handler)
    - Domain layer (User entity, protocols)
    - Infrastructure layer (repositories via dependency injection)
    """

    def __init__(
        self,
        verifier: CredentialVerifier,
        guard: LoginAttemptGuard,
        uow: UnitOfWork,
        logger: LoggerProtocol,
    ) -> None:
        """Initialize authentication handler with dependencies.

        Args:
            verifier: Identity lookup and secret verification.
            guard: Lockout policy and audit trail.
            uow: Transaction boundary for counter and audit writes.
            logger: Structured logger.
        """
        self._verifier = verifier
        self._guard = guard
        self._uow = uow
        self._logger = logger

    async def handle(
        self, cmd: AuthenticateUser
    ) -> Result[AuthenticatedUser, AuthenticationError | StoreUnavailableError]:
        """Handle the AuthenticateUser command.

        Returns:
            Success(AuthenticatedUser) on a correct secret for an open identity.
            Failure(AuthenticationError) with INVALID_CREDENTIALS or
            ACCOUNT_LOCKED (retry_after_seconds set).
            Failure(StoreUnavailableError) if the store fails; nothing from
            the attempt is persisted in that case.
        """
        now = datetime.now(UTC)
        email = self._verifier.normalize_email(cmd.email)
        try:
            return await self._authenticate(cmd, email, now)
        except StoreUnavailable as e:
            await self._uow.rollback()
            self._logger.error(
                "login_store_unavailable",
                error=e,
                operation=e.operation,
                cause=repr(e.cause),
            )
            return Failure(error=StoreUnavailableError.from_exception(e))

    async def _authenticate(
        self, cmd: AuthenticateUser, email: str, now: datetime
    ) -> Result[AuthenticatedUser, AuthenticationError | StoreUnavailableError]:
        user = await self._verifier.lookup(email)

        if user is None:
            # Same hashing cost and failure as a wrong password
            self._verifier.authenticate(None, cmd.password)
            await self._guard.record_unknown_identity(email, cmd.device, now)
            await self._uow.commit()
            self._logger.warning(
                "login_failed", reason="unknown_identity", ip=cmd.device.ip_address
            )
            return Failure(error=invalid_credentials())

        decision = await self._guard.check(user, now)
        if decision.locked:
            await self._guard.record_locked(user, cmd.device, now)
            await self._uow.commit()
            self._logger.warning(
                "login_rejected_locked",
                user_id=str(user.id),
                retry_after_seconds=decision.retry_after_seconds,
            )
            return Failure(error=account_locked(decision.retry_after_seconds))

        match self._verifier.authenticate(user, cmd.password):
            case Failure(error=error):
                outcome = await self._guard.record_failure(user, cmd.device, now)
                await self._uow.commit()
                if outcome.locked:
                    self._logger.warning(
                        "account_locked",
                        user_id=str(user.id),
                        retry_after_seconds=outcome.retry_after_seconds,
                    )
                    return Failure(error=account_locked(outcome.retry_after_seconds))
                self._logger.warning(
                    "login_failed", reason="invalid_password", user_id=str(user.id)
                )
                return Failure(error=error)

        outcome = await self._guard.record_success(user, cmd.device, now)
        await self._uow.commit()
        if outcome is None:
            self._logger.warning(
                "login_failed", reason="identity_deleted", user_id=str(user.id)
            )
            return Failure(error=invalid_credentials())
        if outcome.locked:
            self._logger.warning(
                "login_rejected_locked",
                user_id=str(user.id),
                retry_after_seconds=outcome.retry_after_seconds,
            )
            return Failure(error=account_locked(outcome.retry_after_seconds))

        self._logger.info("login_succeeded", user_id=str(user.id))
        return Success(
            value=AuthenticatedUser(
                user_id=user.id,
                email=user.email,
                email_verified=user.is_verified,
            )
        )
