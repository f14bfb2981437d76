"""Container module - centralized dependency injection.

Re-exports the factory functions from the submodules:

    from lectern.core.container import get_logger, get_login_user_handler

- infrastructure: app-scoped services and the request-scoped session
- repositories: request-scoped repository factories
- auth_handlers: credential and session handler factories
- maintenance_handlers: handlers for scheduled jobs
"""

from lectern.core.container.auth_handlers import (
    get_authenticate_user_handler,
    get_login_user_handler,
    get_logout_user_handler,
    get_refresh_access_token_handler,
    get_register_user_handler,
    get_resend_verification_handler,
    get_revoke_all_sessions_handler,
    get_verify_email_handler,
)
from lectern.core.container.infrastructure import (
    get_database,
    get_db_session,
    get_email_service,
    get_email_verification_token_service,
    get_lockout_policy,
    get_logger,
    get_password_service,
    get_refresh_token_service,
    get_token_service,
)
from lectern.core.container.maintenance_handlers import (
    build_purge_expired_credentials_handler,
    build_reconcile_email_verifications_handler,
)
from lectern.core.container.repositories import (
    get_email_verification_token_repository,
    get_login_attempt_repository,
    get_refresh_token_repository,
    get_user_repository,
)

__all__ = [
    "build_purge_expired_credentials_handler",
    "build_reconcile_email_verifications_handler",
    "get_authenticate_user_handler",
    "get_database",
    "get_db_session",
    "get_email_service",
    "get_email_verification_token_service",
    "get_email_verification_token_repository",
    "get_lockout_policy",
    "get_logger",
    "get_login_attempt_repository",
    "get_login_user_handler",
    "get_logout_user_handler",
    "get_password_service",
    "get_refresh_access_token_handler",
    "get_refresh_token_repository",
    "get_refresh_token_service",
    "get_register_user_handler",
    "get_resend_verification_handler",
    "get_revoke_all_sessions_handler",
    "get_token_service",
    "get_user_repository",
    "get_verify_email_handler",
]
