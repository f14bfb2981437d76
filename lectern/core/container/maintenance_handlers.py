"""Maintenance handler factories.

Built directly from a session so scheduled jobs can run them outside a
request:

    async with get_database().get_session() as session:
        handler = build_purge_expired_credentials_handler(session)
        await handler.handle(PurgeExpiredCredentials())
"""

from datetime import timedelta
from typing import TYPE_CHECKING

from sqlalchemy.ext.asyncio import AsyncSession

from lectern.core.config import settings
from lectern.core.container.infrastructure import get_logger
from lectern.infrastructure.persistence.unit_of_work import SqlAlchemyUnitOfWork

if TYPE_CHECKING:
    from lectern.application.commands.handlers.purge_expired_credentials_handler import (
        PurgeExpiredCredentialsHandler,
    )
    from lectern.application.commands.handlers.reconcile_email_verifications_handler import (
        ReconcileEmailVerificationsHandler,
    )


def build_reconcile_email_verifications_handler(
    session: AsyncSession,
) -> "ReconcileEmailVerificationsHandler":
    """Handler that repairs consumed-but-unverified identities."""
    from lectern.application.commands.handlers.reconcile_email_verifications_handler import (
        ReconcileEmailVerificationsHandler,
    )
    from lectern.infrastructure.persistence.repositories import (
        EmailVerificationTokenRepository,
        UserRepository,
    )

    return ReconcileEmailVerificationsHandler(
        token_repo=EmailVerificationTokenRepository(session=session),
        user_repo=UserRepository(session=session),
        uow=SqlAlchemyUnitOfWork(session),
        logger=get_logger(),
    )


def build_purge_expired_credentials_handler(
    session: AsyncSession,
) -> "PurgeExpiredCredentialsHandler":
    """Handler that deletes expired credentials and old login attempts."""
    from lectern.application.commands.handlers.purge_expired_credentials_handler import (
        PurgeExpiredCredentialsHandler,
    )
    from lectern.infrastructure.persistence.repositories import (
        EmailVerificationTokenRepository,
        LoginAttemptRepository,
        RefreshTokenRepository,
    )

    return PurgeExpiredCredentialsHandler(
        refresh_token_repo=RefreshTokenRepository(session=session),
        verification_token_repo=EmailVerificationTokenRepository(session=session),
        attempt_repo=LoginAttemptRepository(session=session),
        uow=SqlAlchemyUnitOfWork(session),
        logger=get_logger(),
        attempt_retention=timedelta(days=settings.login_attempt_retention_days),
    )
