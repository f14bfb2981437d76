"""Email verifications resource router.

Endpoints:
    POST /api/v1/email-verifications          - Verify email (token in body)
    GET  /api/v1/email-verifications?token=   - Verify email (link target)
    POST /api/v1/email-verifications/resends  - Resend verification link
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import JSONResponse

from lectern.application.commands import ResendVerification, VerifyEmail
from lectern.application.commands.handlers.resend_verification_handler import (
    ResendVerificationHandler,
)
from lectern.application.commands.handlers.verify_email_handler import (
    VerifyEmailHandler,
)
from lectern.core.container import (
    get_resend_verification_handler,
    get_verify_email_handler,
)
from lectern.core.result import Failure, Success
from lectern.presentation.routers.api.v1.errors import (
    ErrorResponseBuilder,
    ProblemDetails,
)
from lectern.schemas.auth_schemas import (
    AcceptedResponse,
    EmailVerificationRequest,
    EmailVerificationResponse,
    VerificationResendRequest,
)

router = APIRouter(prefix="/email-verifications", tags=["Email Verifications"])

_VERIFY_RESPONSES: dict[int | str, dict[str, object]] = {
    404: {"description": "Token not found", "model": ProblemDetails},
    409: {"description": "Token already used", "model": ProblemDetails},
    410: {"description": "Token expired", "model": ProblemDetails},
    503: {"description": "Service unavailable", "model": ProblemDetails},
}


async def _verify(
    request: Request, token: str, handler: VerifyEmailHandler
) -> EmailVerificationResponse | JSONResponse:
    result = await handler.handle(VerifyEmail(token=token))

    match result:
        case Success(value=verified):
            return EmailVerificationResponse(user_id=verified.user_id)
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(error, request)


@router.post(
    "",
    status_code=status.HTTP_200_OK,
    response_model=EmailVerificationResponse,
    responses=_VERIFY_RESPONSES,
    summary="Create email verification",
    description="Verify an email address with the token from the verification link.",
)
async def create_email_verification(
    request: Request,
    data: EmailVerificationRequest,
    handler: VerifyEmailHandler = Depends(get_verify_email_handler),
) -> EmailVerificationResponse | JSONResponse:
    """POST /api/v1/email-verifications → 200 OK"""
    return await _verify(request, data.token, handler)


@router.get(
    "",
    status_code=status.HTTP_200_OK,
    response_model=EmailVerificationResponse,
    responses=_VERIFY_RESPONSES,
    summary="Verify email from link",
)
async def get_email_verification(
    request: Request,
    query: Annotated[EmailVerificationRequest, Query()],
    handler: VerifyEmailHandler = Depends(get_verify_email_handler),
) -> EmailVerificationResponse | JSONResponse:
    """GET /api/v1/email-verifications?token=... → 200 OK"""
    return await _verify(request, query.token, handler)


@router.post(
    "/resends",
    status_code=status.HTTP_202_ACCEPTED,
    response_model=AcceptedResponse,
    responses={503: {"description": "Service unavailable", "model": ProblemDetails}},
    summary="Resend verification link",
    description="Answers 202 whether or not the email is registered.",
)
async def create_verification_resend(
    request: Request,
    data: VerificationResendRequest,
    handler: ResendVerificationHandler = Depends(get_resend_verification_handler),
) -> AcceptedResponse | JSONResponse:
    """POST /api/v1/email-verifications/resends → 202 Accepted"""
    result = await handler.handle(ResendVerification(email=data.email))

    match result:
        case Success():
            return AcceptedResponse(
                message="If the address needs verification, a new link has been sent."
            )
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(error, request)
