"""Centralized validation functions.

Validators are pure functions that raise ValueError on failure. They back
the Annotated types in lectern.domain.types.
"""

import re

_EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
_SPECIAL_CHARACTERS = '!@#$%^&*(),.?":{}|<>'

# bcrypt only reads the first 72 bytes of a secret
BCRYPT_MAX_BYTES = 72


def normalize_email(v: str) -> str:
    """Trim and lowercase an email address.

    Example:
        >>> normalize_email("  Reader@Example.COM ")
        'reader@example.com'
    """
    return v.strip().lower()


def validate_email(v: str) -> str:
    """Validate email format.

    Args:
        v: Email address to validate.

    Returns:
        Normalized email (trimmed, lowercase).

    Raises:
        ValueError: If email format is invalid.

    Example:
        >>> validate_email("User@Example.COM")
        'user@example.com'
    """
    normalized = normalize_email(v)
    if not _EMAIL_PATTERN.match(normalized):
        raise ValueError("Invalid email format")
    return normalized


def validate_strong_password(v: str) -> str:
    """Validate password strength for new passwords.

    Args:
        v: Password to validate.

    Returns:
        Password unchanged (validation only).

    Raises:
        ValueError: If password doesn't meet requirements.

    Example:
        >>> validate_strong_password("SecurePass123!")
        'SecurePass123!'
        >>> validate_strong_password("weak")
        ValueError: Password must be at least 8 characters
    """
    if len(v) < 8:
        raise ValueError("Password must be at least 8 characters")
    if len(v.encode("utf-8")) > BCRYPT_MAX_BYTES:
        raise ValueError("Password must be at most 72 bytes")
    if not any(c.isupper() for c in v):
        raise ValueError("Password must contain uppercase letter")
    if not any(c.islower() for c in v):
        raise ValueError("Password must contain lowercase letter")
    if not any(c.isdigit() for c in v):
        raise ValueError("Password must contain digit")
    if not any(c in _SPECIAL_CHARACTERS for c in v):
        raise ValueError("Password must contain special character")
    return v


def validate_token_format(v: str) -> str:
    """Validate verification token format (hex string).

    Raises:
        ValueError: If the token is empty or not hexadecimal.
    """
    if not v:
        raise ValueError("Token cannot be empty")
    if not re.fullmatch(r"[a-fA-F0-9]+", v):
        raise ValueError("Token must be hexadecimal")
    return v.lower()


def validate_refresh_token_format(v: str) -> str:
    """Validate refresh token format (urlsafe base64).

    Raises:
        ValueError: If the token is empty or has characters outside the
            urlsafe alphabet.
    """
    if not v:
        raise ValueError("Token cannot be empty")
    if not re.fullmatch(r"[A-Za-z0-9_-]+", v):
        raise ValueError("Token must be urlsafe base64")
    return v
