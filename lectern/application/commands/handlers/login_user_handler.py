"""Login handler.

Flow:
1. Authenticate (lockout + audit, committed by AuthenticateUserHandler)
2. Issue an access/refresh pair bound to the device context
3. Commit the refresh row

The audit record is already durable when issuance starts, so a failure
while issuing never loses the attempt.
"""

from lectern.application.commands.auth_commands import AuthenticateUser, LoginUser
from lectern.application.commands.handlers.authenticate_user_handler import (
    AuthenticateUserHandler,
)
from lectern.application.dtos import LoginResult
from lectern.application.services import TokenIssuer
from lectern.core.result import Failure, Result, Success
from lectern.domain.errors import (
    AuthenticationError,
    StoreUnavailable,
    StoreUnavailableError,
)
from lectern.domain.protocols import LoggerProtocol, UnitOfWork


class LoginUserHandler:
    """Handler for the LoginUser command (authenticate + issue)."""

    def __init__(
        self,
        authenticate_handler: AuthenticateUserHandler,
        token_issuer: TokenIssuer,
        uow: UnitOfWork,
        logger: LoggerProtocol,
    ) -> None:
        self._authenticate_handler = authenticate_handler
        self._token_issuer = token_issuer
        self._uow = uow
        self._logger = logger

    async def handle(
        self, cmd: LoginUser
    ) -> Result[LoginResult, AuthenticationError | StoreUnavailableError]:
        """Handle the LoginUser command.

        Returns:
            Success(LoginResult) with identity summary and tokens.
            Failure from authentication unchanged, or
            Failure(StoreUnavailableError) if issuing fails.
        """
        auth_result = await self._authenticate_handler.handle(
            AuthenticateUser(email=cmd.email, password=cmd.password, device=cmd.device)
        )
        match auth_result:
            case Failure(error=error):
                return Failure(error=error)
        user = auth_result.value

        try:
            tokens = await self._token_issuer.issue(
                user_id=user.user_id,
                email=user.email,
                device=cmd.device,
            )
            await self._uow.commit()
        except StoreUnavailable as e:
            await self._uow.rollback()
            self._logger.error(
                "token_issue_failed",
                error=e,
                user_id=str(user.user_id),
                operation=e.operation,
            )
            return Failure(error=StoreUnavailableError.from_exception(e))

        self._logger.info(
            "tokens_issued",
            user_id=str(user.user_id),
            refresh_token_id=str(tokens.refresh_token_id),
            device_id=cmd.device.device_id,
        )
        return Success(value=LoginResult(user=user, tokens=tokens))
