"""Domain-level error codes (machine-readable).

Error codes follow ENTITY_ACTION_REASON naming where it reads naturally.
Used with Result types for railway-oriented programming.

Categories:
- Validation errors (INVALID_*)
- Credential errors (INVALID_CREDENTIALS, ACCOUNT_LOCKED)
- Token errors (TOKEN_*)
- Resource errors (*_NOT_FOUND, *_ALREADY_EXISTS)
- Infrastructure errors (STORE_UNAVAILABLE, VERIFICATION_INCOMPLETE)
"""

from enum import Enum


class ErrorCode(Enum):
    """Domain-level error codes (machine-readable)."""

    # Validation errors
    INVALID_EMAIL = "invalid_email"
    INVALID_PASSWORD = "invalid_password"
    PASSWORD_TOO_WEAK = "password_too_weak"

    # Credential errors
    INVALID_CREDENTIALS = "invalid_credentials"
    ACCOUNT_LOCKED = "account_locked"

    # Token errors
    TOKEN_INVALID = "token_invalid"
    TOKEN_EXPIRED = "token_expired"
    TOKEN_ALREADY_CONSUMED = "token_already_consumed"

    # Resource errors
    IDENTITY_NOT_FOUND = "identity_not_found"
    EMAIL_ALREADY_EXISTS = "email_already_exists"

    # Infrastructure errors
    STORE_UNAVAILABLE = "store_unavailable"
    VERIFICATION_INCOMPLETE = "verification_incomplete"
