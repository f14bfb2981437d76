"""Validation functions used by Annotated types."""

from lectern.domain.validators.functions import (
    BCRYPT_MAX_BYTES,
    normalize_email,
    validate_email,
    validate_refresh_token_format,
    validate_strong_password,
    validate_token_format,
)

__all__ = [
    "BCRYPT_MAX_BYTES",
    "normalize_email",
    "validate_email",
    "validate_refresh_token_format",
    "validate_strong_password",
    "validate_token_format",
]
