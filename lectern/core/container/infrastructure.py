"""Infrastructure dependency factories.

Application-scoped singletons (cached with lru_cache) and the request-scoped
database session. Adapters are imported lazily so importing the container
does not pull in every driver.
"""

from collections.abc import AsyncGenerator
from datetime import timedelta
from functools import lru_cache
from typing import TYPE_CHECKING

from sqlalchemy.ext.asyncio import AsyncSession

from lectern.core.config import settings
from lectern.domain.value_objects import LockoutPolicy
from lectern.infrastructure.persistence.database import Database

if TYPE_CHECKING:
    from lectern.domain.protocols import (
        EmailProtocol,
        EmailVerificationTokenServiceProtocol,
        LoggerProtocol,
        PasswordHashingProtocol,
        RefreshTokenServiceProtocol,
        TokenGenerationProtocol,
    )


# ============================================================================
# Application-Scoped Dependencies (Singletons)
# ============================================================================


@lru_cache()
def get_database() -> Database:
    """Get database manager singleton (app-scoped).

    Returns:
        Database manager owning the engine and connection pool.
    """
    return Database(
        database_url=settings.database_url,
        echo=settings.db_echo,
    )


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger singleton.

    Human-readable console output in development, JSON everywhere else.
    """
    from lectern.infrastructure.logging import ConsoleAdapter

    return ConsoleAdapter(
        use_json=not settings.is_development,
        level=settings.log_level,
    )


@lru_cache()
def get_password_service() -> "PasswordHashingProtocol":
    """Get password hashing service singleton (app-scoped).

    Cost factor comes from settings.bcrypt_rounds. The placeholder digest
    used for dummy verification is generated once here.
    """
    from lectern.infrastructure.security import BcryptPasswordService

    return BcryptPasswordService(cost_factor=settings.bcrypt_rounds)


@lru_cache()
def get_token_service() -> "TokenGenerationProtocol":
    """Get access token (JWT) service singleton (app-scoped)."""
    from lectern.infrastructure.security import JWTService

    return JWTService(
        secret_key=settings.secret_key,
        expiration_minutes=settings.access_token_expire_minutes,
        issuer=settings.jwt_issuer,
        audience=settings.jwt_audience,
    )


@lru_cache()
def get_refresh_token_service() -> "RefreshTokenServiceProtocol":
    """Get refresh token service singleton (app-scoped)."""
    from lectern.infrastructure.security import RefreshTokenService

    return RefreshTokenService(
        pepper=settings.refresh_token_key,
        expiration_days=settings.refresh_token_expire_days,
    )


@lru_cache()
def get_email_verification_token_service() -> "EmailVerificationTokenServiceProtocol":
    """Get email verification token service singleton (app-scoped)."""
    from lectern.infrastructure.security import EmailVerificationTokenService

    return EmailVerificationTokenService(
        expiration_hours=settings.email_verification_expire_hours,
    )


@lru_cache()
def get_email_service() -> "EmailProtocol":
    """Get email service singleton (app-scoped).

    Only the logging stub ships; a delivery backend plugs in here.
    """
    from lectern.infrastructure.email import StubEmailService

    return StubEmailService(logger=get_logger())


@lru_cache()
def get_lockout_policy() -> LockoutPolicy:
    """Brute-force lockout policy from settings."""
    return LockoutPolicy(
        max_attempts=settings.login_max_attempts,
        lockout_duration=timedelta(minutes=settings.login_lockout_minutes),
    )


# ============================================================================
# Request-Scoped Dependencies (Per-Request)
# ============================================================================


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session (request-scoped).

    Handlers commit through their unit of work; the session is rolled back
    on exception and always closed.

    Yields:
        Database session for request duration.
    """
    db = get_database()
    async with db.get_session() as session:
        yield session
