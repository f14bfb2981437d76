"""Authentication request/response schemas.

Pydantic models for API request validation and response serialization.
Kept separate from domain entities - these are HTTP-layer concerns.

RESTful Endpoints (resource-based):
    POST   /api/v1/users                        - Create user (registration)
    POST   /api/v1/sessions                     - Create session (login)
    DELETE /api/v1/sessions/current             - Delete session (logout)
    DELETE /api/v1/sessions                     - Delete all sessions
    POST   /api/v1/tokens                       - Create tokens (refresh)
    POST   /api/v1/email-verifications          - Create verification (verify email)
    POST   /api/v1/email-verifications/resends  - Resend verification link
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from lectern.domain.types import (
    Email,
    LoginSecret,
    Password,
    RefreshToken,
    VerificationToken,
)


# =============================================================================
# Registration
# =============================================================================


class UserCreateRequest(BaseModel):
    """Request schema for user creation (registration).

    POST /api/v1/users
    Returns: 201 Created
    """

    email: Email
    password: Password

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "reader@example.com",
                "password": "SecurePass123!",
            }
        }
    )


class UserCreateResponse(BaseModel):
    """Response schema for user creation (201 Created)."""

    id: UUID = Field(..., description="Created user's ID")
    email: str = Field(..., description="Normalized email address")
    message: str = Field(
        default="Registration successful. Check your email to verify your account.",
        description="Success message",
    )


# =============================================================================
# Login / Logout
# =============================================================================


class SessionCreateRequest(BaseModel):
    """Request schema for session creation (login).

    POST /api/v1/sessions
    Returns: 201 Created

    User agent and origin address are taken from the request itself.
    """

    email: Email
    password: LoginSecret
    device_id: str | None = Field(
        default=None,
        max_length=255,
        description="Client-chosen device identifier",
        examples=["ios-7f3a"],
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "reader@example.com",
                "password": "SecurePass123!",
                "device_id": "ios-7f3a",
            }
        }
    )


class IdentitySummary(BaseModel):
    """Identity summary returned with a new session."""

    id: UUID = Field(..., description="User ID")
    email: str = Field(..., description="Normalized email address")
    email_verified: bool = Field(..., description="Whether the email is verified")


class TokenPairResponse(BaseModel):
    """Access/refresh pair (JWT access + opaque refresh)."""

    access_token: str = Field(..., description="JWT access token")
    refresh_token: str = Field(..., description="Opaque single-use refresh token")
    token_type: str = Field(
        default="bearer", description="Token type for Authorization header"
    )
    expires_in: int = Field(
        default=900, description="Access token expiration in seconds"
    )


class SessionCreateResponse(TokenPairResponse):
    """Response schema for session creation (201 Created)."""

    user: IdentitySummary


class SessionDeleteRequest(BaseModel):
    """Request schema for logout of the current device.

    DELETE /api/v1/sessions/current
    Returns: 204 No Content
    """

    refresh_token: RefreshToken


# =============================================================================
# Token refresh
# =============================================================================


class TokenCreateRequest(BaseModel):
    """Request schema for token rotation.

    POST /api/v1/tokens
    Returns: 201 Created

    When device_id is omitted the new refresh token keeps the device
    context of the one it replaces.
    """

    refresh_token: RefreshToken
    device_id: str | None = Field(
        default=None,
        max_length=255,
        description="New device identifier (optional)",
    )


# =============================================================================
# Email verification
# =============================================================================


class EmailVerificationRequest(BaseModel):
    """Request schema for email verification.

    POST /api/v1/email-verifications
    Returns: 200 OK
    """

    token: VerificationToken


class EmailVerificationResponse(BaseModel):
    """Response schema for a completed email verification."""

    user_id: UUID = Field(..., description="Verified user's ID")
    message: str = Field(default="Email verified successfully.")


class VerificationResendRequest(BaseModel):
    """Request schema for resending a verification link.

    POST /api/v1/email-verifications/resends
    Returns: 202 Accepted (whether or not the email is registered)
    """

    email: Email


class AcceptedResponse(BaseModel):
    """Generic acknowledgement body."""

    message: str
