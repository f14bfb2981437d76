"""Authentication handler factories.

Request-scoped command handlers wired from repositories (request-scoped)
and security services (app-scoped). Each handler gets a unit of work over
the request session; repositories never commit.

Usage:
    @router.post("/sessions")
    async def create_session(
        handler: LoginUserHandler = Depends(get_login_user_handler),
    ):
        result = await handler.handle(command)
"""

from typing import TYPE_CHECKING

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from lectern.core.config import settings
from lectern.core.container.infrastructure import (
    get_db_session,
    get_email_service,
    get_email_verification_token_service,
    get_lockout_policy,
    get_logger,
    get_password_service,
    get_refresh_token_service,
    get_token_service,
)
from lectern.core.container.repositories import (
    get_email_verification_token_repository,
    get_login_attempt_repository,
    get_refresh_token_repository,
    get_user_repository,
)
from lectern.infrastructure.persistence.unit_of_work import SqlAlchemyUnitOfWork

if TYPE_CHECKING:
    from lectern.application.commands.handlers.authenticate_user_handler import (
        AuthenticateUserHandler,
    )
    from lectern.application.commands.handlers.login_user_handler import (
        LoginUserHandler,
    )
    from lectern.application.commands.handlers.logout_user_handler import (
        LogoutUserHandler,
    )
    from lectern.application.commands.handlers.refresh_access_token_handler import (
        RefreshAccessTokenHandler,
    )
    from lectern.application.commands.handlers.register_user_handler import (
        RegisterUserHandler,
    )
    from lectern.application.commands.handlers.resend_verification_handler import (
        ResendVerificationHandler,
    )
    from lectern.application.commands.handlers.revoke_all_sessions_handler import (
        RevokeAllSessionsHandler,
    )
    from lectern.application.commands.handlers.verify_email_handler import (
        VerifyEmailHandler,
    )
    from lectern.application.services import EmailVerificationLifecycle, TokenIssuer
    from lectern.infrastructure.persistence.repositories import (
        EmailVerificationTokenRepository,
        LoginAttemptRepository,
        RefreshTokenRepository,
        UserRepository,
    )


def _token_issuer(refresh_token_repo: "RefreshTokenRepository") -> "TokenIssuer":
    from lectern.application.services import TokenIssuer

    return TokenIssuer(
        token_service=get_token_service(),
        refresh_token_service=get_refresh_token_service(),
        refresh_token_repo=refresh_token_repo,
    )


def verification_link_base() -> str:
    """Target of verification links (the GET email-verifications endpoint)."""
    return f"{settings.verification_url_base}{settings.api_v1_prefix}/email-verifications"


def _verification_lifecycle(
    token_repo: "EmailVerificationTokenRepository",
) -> "EmailVerificationLifecycle":
    from lectern.application.services import EmailVerificationLifecycle

    return EmailVerificationLifecycle(
        token_repo=token_repo,
        token_service=get_email_verification_token_service(),
    )


async def get_authenticate_user_handler(
    session: AsyncSession = Depends(get_db_session),
    user_repo: "UserRepository" = Depends(get_user_repository),
    attempt_repo: "LoginAttemptRepository" = Depends(get_login_attempt_repository),
) -> "AuthenticateUserHandler":
    """Get AuthenticateUser command handler (request-scoped).

    Verifies credentials under the lockout policy and writes the audit
    trail. Does not issue tokens.
    """
    from lectern.application.commands.handlers.authenticate_user_handler import (
        AuthenticateUserHandler,
    )
    from lectern.application.services import CredentialVerifier, LoginAttemptGuard

    return AuthenticateUserHandler(
        verifier=CredentialVerifier(
            user_repo=user_repo,
            password_service=get_password_service(),
        ),
        guard=LoginAttemptGuard(
            user_repo=user_repo,
            attempt_repo=attempt_repo,
            policy=get_lockout_policy(),
        ),
        uow=SqlAlchemyUnitOfWork(session),
        logger=get_logger(),
    )


async def get_login_user_handler(
    session: AsyncSession = Depends(get_db_session),
    authenticate_handler: "AuthenticateUserHandler" = Depends(
        get_authenticate_user_handler
    ),
    refresh_token_repo: "RefreshTokenRepository" = Depends(
        get_refresh_token_repository
    ),
) -> "LoginUserHandler":
    """Get LoginUser command handler (request-scoped).

    Authentication (committed first) followed by token issuance.
    """
    from lectern.application.commands.handlers.login_user_handler import (
        LoginUserHandler,
    )

    return LoginUserHandler(
        authenticate_handler=authenticate_handler,
        token_issuer=_token_issuer(refresh_token_repo),
        uow=SqlAlchemyUnitOfWork(session),
        logger=get_logger(),
    )


async def get_refresh_access_token_handler(
    session: AsyncSession = Depends(get_db_session),
    user_repo: "UserRepository" = Depends(get_user_repository),
    refresh_token_repo: "RefreshTokenRepository" = Depends(
        get_refresh_token_repository
    ),
) -> "RefreshAccessTokenHandler":
    """Get RefreshAccessToken command handler (request-scoped)."""
    from lectern.application.commands.handlers.refresh_access_token_handler import (
        RefreshAccessTokenHandler,
    )

    return RefreshAccessTokenHandler(
        user_repo=user_repo,
        refresh_token_repo=refresh_token_repo,
        refresh_token_service=get_refresh_token_service(),
        token_issuer=_token_issuer(refresh_token_repo),
        uow=SqlAlchemyUnitOfWork(session),
        logger=get_logger(),
    )


async def get_logout_user_handler(
    session: AsyncSession = Depends(get_db_session),
    refresh_token_repo: "RefreshTokenRepository" = Depends(
        get_refresh_token_repository
    ),
) -> "LogoutUserHandler":
    """Get LogoutUser command handler (request-scoped)."""
    from lectern.application.commands.handlers.logout_user_handler import (
        LogoutUserHandler,
    )

    return LogoutUserHandler(
        refresh_token_repo=refresh_token_repo,
        refresh_token_service=get_refresh_token_service(),
        uow=SqlAlchemyUnitOfWork(session),
        logger=get_logger(),
    )


async def get_revoke_all_sessions_handler(
    session: AsyncSession = Depends(get_db_session),
    refresh_token_repo: "RefreshTokenRepository" = Depends(
        get_refresh_token_repository
    ),
) -> "RevokeAllSessionsHandler":
    """Get RevokeAllSessions command handler (request-scoped)."""
    from lectern.application.commands.handlers.revoke_all_sessions_handler import (
        RevokeAllSessionsHandler,
    )

    return RevokeAllSessionsHandler(
        refresh_token_repo=refresh_token_repo,
        uow=SqlAlchemyUnitOfWork(session),
        logger=get_logger(),
    )


async def get_verify_email_handler(
    session: AsyncSession = Depends(get_db_session),
    user_repo: "UserRepository" = Depends(get_user_repository),
    token_repo: "EmailVerificationTokenRepository" = Depends(
        get_email_verification_token_repository
    ),
) -> "VerifyEmailHandler":
    """Get VerifyEmail command handler (request-scoped)."""
    from lectern.application.commands.handlers.verify_email_handler import (
        VerifyEmailHandler,
    )

    return VerifyEmailHandler(
        lifecycle=_verification_lifecycle(token_repo),
        user_repo=user_repo,
        uow=SqlAlchemyUnitOfWork(session),
        logger=get_logger(),
    )


async def get_register_user_handler(
    session: AsyncSession = Depends(get_db_session),
    user_repo: "UserRepository" = Depends(get_user_repository),
    token_repo: "EmailVerificationTokenRepository" = Depends(
        get_email_verification_token_repository
    ),
) -> "RegisterUserHandler":
    """Get RegisterUser command handler (request-scoped)."""
    from lectern.application.commands.handlers.register_user_handler import (
        RegisterUserHandler,
    )

    return RegisterUserHandler(
        user_repo=user_repo,
        password_service=get_password_service(),
        lifecycle=_verification_lifecycle(token_repo),
        email_service=get_email_service(),
        uow=SqlAlchemyUnitOfWork(session),
        logger=get_logger(),
        verification_url=verification_link_base(),
    )


async def get_resend_verification_handler(
    session: AsyncSession = Depends(get_db_session),
    user_repo: "UserRepository" = Depends(get_user_repository),
    token_repo: "EmailVerificationTokenRepository" = Depends(
        get_email_verification_token_repository
    ),
) -> "ResendVerificationHandler":
    """Get ResendVerification command handler (request-scoped)."""
    from lectern.application.commands.handlers.resend_verification_handler import (
        ResendVerificationHandler,
    )

    return ResendVerificationHandler(
        user_repo=user_repo,
        lifecycle=_verification_lifecycle(token_repo),
        email_service=get_email_service(),
        uow=SqlAlchemyUnitOfWork(session),
        logger=get_logger(),
        verification_url=verification_link_base(),
    )
