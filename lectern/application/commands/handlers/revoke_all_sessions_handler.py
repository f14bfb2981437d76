"""Revoke all sessions handler (logout from every device).

Idempotent: a second call removes nothing and still succeeds.
"""

from lectern.application.commands.session_commands import RevokeAllSessions
from lectern.application.dtos import RevocationResult
from lectern.core.result import Failure, Result, Success
from lectern.domain.errors import StoreUnavailable, StoreUnavailableError
from lectern.domain.protocols import LoggerProtocol, RefreshTokenRepository, UnitOfWork


class RevokeAllSessionsHandler:
    """Handler for the RevokeAllSessions command."""

    def __init__(
        self,
        refresh_token_repo: RefreshTokenRepository,
        uow: UnitOfWork,
        logger: LoggerProtocol,
    ) -> None:
        self._refresh_token_repo = refresh_token_repo
        self._uow = uow
        self._logger = logger

    async def handle(
        self, cmd: RevokeAllSessions
    ) -> Result[RevocationResult, StoreUnavailableError]:
        try:
            revoked = await self._refresh_token_repo.delete_all_for_user(cmd.user_id)
            await self._uow.commit()
        except StoreUnavailable as e:
            await self._uow.rollback()
            self._logger.error(
                "revoke_all_store_unavailable",
                error=e,
                user_id=str(cmd.user_id),
                operation=e.operation,
            )
            return Failure(error=StoreUnavailableError.from_exception(e))

        self._logger.info(
            "all_refresh_tokens_revoked", user_id=str(cmd.user_id), revoked_count=revoked
        )
        return Success(value=RevocationResult(revoked_count=revoked))
