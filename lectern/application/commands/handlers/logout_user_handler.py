"""Logout handler (revoke one refresh token).

Idempotent: revoking an absent token succeeds with revoked_count=0.
"""

from lectern.application.commands.session_commands import LogoutUser
from lectern.application.dtos import RevocationResult
from lectern.core.result import Failure, Result, Success
from lectern.domain.errors import StoreUnavailable, StoreUnavailableError
from lectern.domain.protocols import (
    LoggerProtocol,
    RefreshTokenRepository,
    RefreshTokenServiceProtocol,
    UnitOfWork,
)


class LogoutUserHandler:
    """Handler for the LogoutUser command."""

    def __init__(
        self,
        refresh_token_repo: RefreshTokenRepository,
        refresh_token_service: RefreshTokenServiceProtocol,
        uow: UnitOfWork,
        logger: LoggerProtocol,
    ) -> None:
        self._refresh_token_repo = refresh_token_repo
        self._refresh_token_service = refresh_token_service
        self._uow = uow
        self._logger = logger

    async def handle(
        self, cmd: LogoutUser
    ) -> Result[RevocationResult, StoreUnavailableError]:
        token_hash = self._refresh_token_service.hash_token(cmd.refresh_token)
        try:
            revoked = await self._refresh_token_repo.delete_by_token_hash(token_hash)
            await self._uow.commit()
        except StoreUnavailable as e:
            await self._uow.rollback()
            self._logger.error("logout_store_unavailable", error=e, operation=e.operation)
            return Failure(error=StoreUnavailableError.from_exception(e))

        self._logger.info("refresh_token_revoked", revoked_count=revoked)
        return Success(value=RevocationResult(revoked_count=revoked))
