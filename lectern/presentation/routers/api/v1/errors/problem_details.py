"""Problem Details (RFC 7807) response bodies.

RFC 7807: https://tools.ietf.org/html/rfc7807

Exports:
    ErrorDetail: Individual field-specific error
    ProblemDetails: RFC 7807 compliant error response schema
"""

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """Individual field-specific error (validation failures)."""

    field: str = Field(..., description="Dotted path of the offending field")
    code: str = Field(..., description="pydantic error type")
    message: str = Field(..., description="Why the value was rejected")


class ProblemDetails(BaseModel):
    """RFC 7807 Problem Details for HTTP APIs.

    Attributes:
        type: URI reference identifying the problem type
        title: Short, human-readable summary of the problem type
        status: HTTP status code for this occurrence
        detail: Human-readable explanation specific to this occurrence
        instance: URI reference identifying the specific occurrence
        errors: Optional list of field-specific errors (for validation failures)
        retry_after: Seconds until the request may be retried (lockout only)
        trace_id: Optional request trace ID for debugging

    Examples:
        >>> problem = ProblemDetails(
        ...     type="http://localhost:8000/errors/account_locked",
        ...     title="Too Many Attempts",
        ...     status=429,
        ...     detail="Too many failed login attempts. Try again later.",
        ...     instance="/api/v1/sessions",
        ...     retry_after=840,
        ... )
    """

    type: str = Field(
        ...,
        description="URI reference identifying the problem type",
        examples=["http://localhost:8000/errors/invalid_credentials"],
    )
    title: str = Field(..., description="Stable summary of the problem type")
    status: int = Field(..., description="HTTP status code")
    detail: str = Field(..., description="Caller-safe explanation of this occurrence")
    instance: str = Field(
        ...,
        description="URI reference identifying this occurrence",
        examples=["/api/v1/sessions"],
    )
    errors: list[ErrorDetail] | None = Field(
        None,
        description="Per-field errors (422 only)",
    )
    retry_after: int | None = Field(
        None,
        description="Seconds until the identity is unlocked",
    )
    trace_id: str | None = Field(
        None,
        description="X-Trace-Id of the request",
    )
