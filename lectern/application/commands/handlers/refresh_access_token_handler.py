"""Refresh access token handler (rotation).

Flow (one transaction):
1. Consume the presented token by digest (DELETE ... RETURNING)
   - nothing returned: never issued, already rotated, or revoked -> TOKEN_INVALID
2. Expired: commit the deletion (garbage collection) -> TOKEN_EXPIRED
3. Owner gone: commit the deletion -> IDENTITY_NOT_FOUND
4. Issue a new pair, inheriting the consumed token's device context
   unless a new one is supplied
5. Commit: consumption and replacement become durable together

Delete-before-issue is the replay boundary. Of two concurrent rotations of
the same value the store hands the row to exactly one; the other gets
TOKEN_INVALID. Reuse of a consumed value is rejected only; sibling tokens
are left alone.
"""

from datetime import UTC, datetime

from lectern.application.commands.token_commands import RefreshAccessToken
from lectern.application.dtos import AuthTokens
from lectern.application.services import TokenIssuer
from lectern.core.enums import ErrorCode
from lectern.core.result import Failure, Result, Success
from lectern.domain.errors import StoreUnavailable, StoreUnavailableError, TokenError
from lectern.domain.protocols import (
    LoggerProtocol,
    RefreshTokenRepository,
    RefreshTokenServiceProtocol,
    UnitOfWork,
    UserRepository,
)


class RefreshAccessTokenHandler:
    """Handler for the RefreshAccessToken command."""

    def __init__(
        self,
        user_repo: UserRepository,
        refresh_token_repo: RefreshTokenRepository,
        refresh_token_service: RefreshTokenServiceProtocol,
        token_issuer: TokenIssuer,
        uow: UnitOfWork,
        logger: LoggerProtocol,
    ) -> None:
        self._user_repo = user_repo
        self._refresh_token_repo = refresh_token_repo
        self._refresh_token_service = refresh_token_service
        self._token_issuer = token_issuer
        self._uow = uow
        self._logger = logger

    async def handle(
        self, cmd: RefreshAccessToken
    ) -> Result[AuthTokens, TokenError | StoreUnavailableError]:
        """Handle the RefreshAccessToken command.

        Returns:
            Success(AuthTokens) with a new pair.
            Failure(TokenError) with TOKEN_INVALID, TOKEN_EXPIRED, or
            IDENTITY_NOT_FOUND.
            Failure(StoreUnavailableError); the presented token stays valid.
        """
        try:
            return await self._rotate(cmd, datetime.now(UTC))
        except StoreUnavailable as e:
            await self._uow.rollback()
            self._logger.error(
                "refresh_store_unavailable", error=e, operation=e.operation
            )
            return Failure(error=StoreUnavailableError.from_exception(e))

    async def _rotate(
        self, cmd: RefreshAccessToken, now: datetime
    ) -> Result[AuthTokens, TokenError | StoreUnavailableError]:
        token_hash = self._refresh_token_service.hash_token(cmd.refresh_token)
        consumed = await self._refresh_token_repo.consume(token_hash)

        if consumed is None:
            await self._uow.rollback()
            self._logger.warning("refresh_token_rejected", reason="unknown_or_reused")
            return Failure(
                error=TokenError(
                    code=ErrorCode.TOKEN_INVALID,
                    message="Invalid refresh token",
                )
            )

        if consumed.is_expired(now):
            await self._uow.commit()
            self._logger.info(
                "refresh_token_rejected",
                reason="expired",
                user_id=str(consumed.user_id),
                refresh_token_id=str(consumed.id),
            )
            return Failure(
                error=TokenError(
                    code=ErrorCode.TOKEN_EXPIRED,
                    message="Refresh token expired",
                )
            )

        user = await self._user_repo.find_by_id(consumed.user_id)
        if user is None:
            await self._uow.commit()
            self._logger.warning(
                "refresh_token_rejected",
                reason="identity_not_found",
                user_id=str(consumed.user_id),
            )
            return Failure(
                error=TokenError(
                    code=ErrorCode.IDENTITY_NOT_FOUND,
                    message="User not found",
                )
            )

        device = cmd.device if cmd.device is not None else consumed.device
        tokens = await self._token_issuer.issue(
            user_id=user.id,
            email=user.email,
            device=device,
            rotation_count=consumed.rotation_count + 1,
        )
        await self._uow.commit()

        self._logger.info(
            "refresh_token_rotated",
            user_id=str(user.id),
            previous_refresh_token_id=str(consumed.id),
            refresh_token_id=str(tokens.refresh_token_id),
            rotation_count=consumed.rotation_count + 1,
            rotated_at=now.isoformat(),
        )
        return Success(value=tokens)
