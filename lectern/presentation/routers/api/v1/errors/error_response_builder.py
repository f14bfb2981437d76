"""Error response builder for RFC 7807 Problem Details.

Converts the DomainError values handlers return into problem-details JSON
responses. Messages come from the error itself, which is always
caller-safe; error details are log-only and never serialized.

Exports:
    ErrorResponseBuilder: Utility class for building RFC 7807 responses
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse

from lectern.core.config import settings
from lectern.core.enums import ErrorCode
from lectern.core.errors import DomainError
from lectern.domain.errors import AuthenticationError
from lectern.presentation.routers.api.middleware.trace_middleware import get_trace_id
from lectern.presentation.routers.api.v1.errors.problem_details import ProblemDetails

_STATUS_BY_CODE: dict[ErrorCode, int] = {
    ErrorCode.INVALID_EMAIL: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_PASSWORD: status.HTTP_400_BAD_REQUEST,
    ErrorCode.PASSWORD_TOO_WEAK: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.ACCOUNT_LOCKED: status.HTTP_429_TOO_MANY_REQUESTS,
    ErrorCode.TOKEN_INVALID: status.HTTP_404_NOT_FOUND,
    ErrorCode.TOKEN_EXPIRED: status.HTTP_410_GONE,
    ErrorCode.TOKEN_ALREADY_CONSUMED: status.HTTP_409_CONFLICT,
    ErrorCode.IDENTITY_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.EMAIL_ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    ErrorCode.STORE_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorCode.VERIFICATION_INCOMPLETE: status.HTTP_503_SERVICE_UNAVAILABLE,
}

_TITLE_BY_CODE: dict[ErrorCode, str] = {
    ErrorCode.INVALID_EMAIL: "Validation Failed",
    ErrorCode.INVALID_PASSWORD: "Validation Failed",
    ErrorCode.PASSWORD_TOO_WEAK: "Validation Failed",
    ErrorCode.INVALID_CREDENTIALS: "Invalid Credentials",
    ErrorCode.ACCOUNT_LOCKED: "Too Many Attempts",
    ErrorCode.TOKEN_INVALID: "Token Not Found",
    ErrorCode.TOKEN_EXPIRED: "Token Expired",
    ErrorCode.TOKEN_ALREADY_CONSUMED: "Token Already Used",
    ErrorCode.IDENTITY_NOT_FOUND: "Resource Not Found",
    ErrorCode.EMAIL_ALREADY_EXISTS: "Resource Conflict",
    ErrorCode.STORE_UNAVAILABLE: "Service Unavailable",
    ErrorCode.VERIFICATION_INCOMPLETE: "Service Unavailable",
}


class ErrorResponseBuilder:
    """Build RFC 7807 Problem Details error responses.

    Example:
        >>> match result:
        ...     case Failure(error=error):
        ...         return ErrorResponseBuilder.from_domain_error(error, request)
    """

    @staticmethod
    def from_domain_error(error: DomainError, request: Request) -> JSONResponse:
        """Convert a DomainError to an RFC 7807 JSON response.

        ACCOUNT_LOCKED responses carry a Retry-After header.
        """
        status_code = _STATUS_BY_CODE.get(
            error.code, status.HTTP_500_INTERNAL_SERVER_ERROR
        )
        retry_after = (
            error.retry_after_seconds if isinstance(error, AuthenticationError) else None
        )
        return ErrorResponseBuilder.build(
            request,
            status_code=status_code,
            slug=error.code.value,
            title=_TITLE_BY_CODE.get(error.code, "Internal Server Error"),
            detail=error.message,
            retry_after=retry_after,
        )

    @staticmethod
    def build(
        request: Request,
        *,
        status_code: int,
        slug: str,
        title: str,
        detail: str,
        retry_after: int | None = None,
        headers: dict[str, str] | None = None,
    ) -> JSONResponse:
        """Build a problem-details response with the current trace ID."""
        problem = ProblemDetails(
            type=f"{settings.api_base_url}/errors/{slug}",
            title=title,
            status=status_code,
            detail=detail,
            instance=str(request.url.path),
            retry_after=retry_after,
            trace_id=get_trace_id(),
        )
        response_headers = dict(headers or {})
        if retry_after is not None:
            response_headers["Retry-After"] = str(retry_after)
        return JSONResponse(
            status_code=status_code,
            content=problem.model_dump(exclude_none=True),
            headers=response_headers or None,
        )
