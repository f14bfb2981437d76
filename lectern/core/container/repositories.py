"""Repository dependency factories.

Request-scoped repository instances. FastAPI resolves get_db_session once
per request, so every repository (and the unit of work) built for one
request shares the same session and transaction.
"""

from typing import TYPE_CHECKING

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from lectern.core.container.infrastructure import get_db_session

if TYPE_CHECKING:
    from lectern.infrastructure.persistence.repositories import (
        EmailVerificationTokenRepository,
        LoginAttemptRepository,
        RefreshTokenRepository,
        UserRepository,
    )


async def get_user_repository(
    session: AsyncSession = Depends(get_db_session),
) -> "UserRepository":
    """Get user repository (request-scoped)."""
    from lectern.infrastructure.persistence.repositories import UserRepository

    return UserRepository(session=session)


async def get_refresh_token_repository(
    session: AsyncSession = Depends(get_db_session),
) -> "RefreshTokenRepository":
    """Get refresh token repository (request-scoped)."""
    from lectern.infrastructure.persistence.repositories import RefreshTokenRepository

    return RefreshTokenRepository(session=session)


async def get_email_verification_token_repository(
    session: AsyncSession = Depends(get_db_session),
) -> "EmailVerificationTokenRepository":
    """Get email verification token repository (request-scoped)."""
    from lectern.infrastructure.persistence.repositories import (
        EmailVerificationTokenRepository,
    )

    return EmailVerificationTokenRepository(session=session)


async def get_login_attempt_repository(
    session: AsyncSession = Depends(get_db_session),
) -> "LoginAttemptRepository":
    """Get login attempt repository (request-scoped)."""
    from lectern.infrastructure.persistence.repositories import LoginAttemptRepository

    return LoginAttemptRepository(session=session)
