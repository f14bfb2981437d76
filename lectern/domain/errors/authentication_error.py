"""Authentication error types.

Returned (never raised) when a login attempt is rejected.

Usage:
    from lectern.domain.errors import AuthenticationError
    from lectern.core.enums import ErrorCode
    from lectern.core.result import Failure

    return Failure(error=AuthenticationError(
        code=ErrorCode.ACCOUNT_LOCKED,
        message=AuthenticationError.ACCOUNT_LOCKED_MESSAGE,
        retry_after_seconds=840,
    ))
"""

from dataclasses import dataclass

from lectern.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthenticationError(DomainError):
    """Login rejection.

    The same generic message is used for unknown emails and wrong
    passwords so callers cannot tell the two apart.

    Attributes:
        code: INVALID_CREDENTIALS or ACCOUNT_LOCKED.
        message: Caller-safe message.
        details: Log-only context.
        retry_after_seconds: Remaining lock time (ACCOUNT_LOCKED only).
    """

    retry_after_seconds: int | None = None

    INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"
    ACCOUNT_LOCKED_MESSAGE = "Too many failed login attempts. Try again later."
