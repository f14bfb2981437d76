"""Email verification token lifecycle.

issue() stages a fresh unconsumed token. consume() flips it to consumed
exactly once and classifies every miss as not found, expired, or already
consumed.
"""

from datetime import datetime
from uuid import UUID

from lectern.core.enums import ErrorCode
from lectern.core.result import Failure, Result, Success
from lectern.domain.errors import TokenError
from lectern.domain.protocols import (
    EmailVerificationTokenData,
    EmailVerificationTokenRepository,
    EmailVerificationTokenServiceProtocol,
)


class EmailVerificationLifecycle:
    """Issue and consume single-use verification tokens."""

    def __init__(
        self,
        token_repo: EmailVerificationTokenRepository,
        token_service: EmailVerificationTokenServiceProtocol,
    ) -> None:
        self._token_repo = token_repo
        self._token_service = token_service

    async def issue(self, user_id: UUID) -> EmailVerificationTokenData:
        """Stage a new token for a user."""
        return await self._token_repo.save(
            user_id=user_id,
            token=self._token_service.generate_token(),
            expires_at=self._token_service.calculate_expiration(),
        )

    async def reissue(self, user_id: UUID) -> EmailVerificationTokenData:
        """Replace any outstanding tokens of a user with a new one."""
        await self._token_repo.delete_unconsumed_for_user(user_id)
        return await self.issue(user_id)

    async def consume(
        self, token: str, now: datetime
    ) -> Result[EmailVerificationTokenData, TokenError]:
        """Consume a token.

        Returns:
            Success(token data) on the first consumption; otherwise
            Failure with TOKEN_INVALID (unknown), TOKEN_EXPIRED, or
            TOKEN_ALREADY_CONSUMED.
        """
        consumed = await self._token_repo.consume(token, now)
        if consumed is not None:
            return Success(value=consumed)

        existing = await self._token_repo.find_by_token(token)
        if existing is None:
            return Failure(
                error=TokenError(
                    code=ErrorCode.TOKEN_INVALID,
                    message="Verification token not found",
                )
            )
        if existing.is_consumed:
            return Failure(
                error=TokenError(
                    code=ErrorCode.TOKEN_ALREADY_CONSUMED,
                    message="Verification token already used",
                )
            )
        return Failure(
            error=TokenError(
                code=ErrorCode.TOKEN_EXPIRED,
                message="Verification token expired",
            )
        )
