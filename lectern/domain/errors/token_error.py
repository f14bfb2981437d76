"""Token error types.

Covers refresh credential rotation and email verification token
consumption (TOKEN_INVALID, TOKEN_EXPIRED, TOKEN_ALREADY_CONSUMED,
IDENTITY_NOT_FOUND, VERIFICATION_INCOMPLETE).
"""

from dataclasses import dataclass

from lectern.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class TokenError(DomainError):
    """Refresh or verification token failure."""

    pass  # Inherits all fields from DomainError
