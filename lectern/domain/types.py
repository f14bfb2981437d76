"""Annotated types with centralized validation.

Define validation once, use everywhere (request schemas and commands).

Usage:
    from lectern.domain.types import Email, LoginSecret

    class LoginRequest(BaseModel):
        email: Email
        password: LoginSecret
"""

from typing import Annotated

from pydantic import AfterValidator, Field

from lectern.domain.validators import (
    validate_email,
    validate_refresh_token_format,
    validate_strong_password,
    validate_token_format,
)

Email = Annotated[
    str,
    Field(
        min_length=5,
        max_length=255,
        description="Email address",
        examples=["reader@example.com"],
    ),
    AfterValidator(validate_email),
]
"""Email address, normalized to trimmed lowercase.

Examples:
    >>> class UserCreate(BaseModel):
    ...     email: Email
    >>> UserCreate(email="User@Example.COM").email
    'user@example.com'
"""

Password = Annotated[
    str,
    Field(
        min_length=8,
        max_length=72,
        description="New password with strength requirements",
        examples=["SecurePass123!"],
    ),
    AfterValidator(validate_strong_password),
]
"""New password (registration).

Requirements:
- 8 characters to 72 bytes
- Upper, lower, digit, and special character
"""

LoginSecret = Annotated[
    str,
    Field(
        min_length=1,
        max_length=128,
        description="Password as submitted at login",
        examples=["SecurePass123!"],
    ),
]
"""Password supplied at login.

Strength rules are not applied: a login with a weak secret must fail as
invalid credentials, not as a validation error that reveals the policy.
"""

VerificationToken = Annotated[
    str,
    Field(
        min_length=16,
        max_length=128,
        description="Email verification token (hex)",
        examples=["a3f1c9e2b4d6f8a0c2e4b6d8f0a2c4e6"],
    ),
    AfterValidator(validate_token_format),
]

RefreshToken = Annotated[
    str,
    Field(
        min_length=16,
        max_length=256,
        description="Opaque refresh token (urlsafe base64)",
        examples=["dGhpcyBpcyBhIHJhbmRvbSB0b2tlbg"],
    ),
    AfterValidator(validate_refresh_token_format),
]
