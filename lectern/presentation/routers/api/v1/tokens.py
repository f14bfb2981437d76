"""Tokens resource router.

Endpoints:
    POST /api/v1/tokens - Create new tokens (refresh rotation)
"""

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from lectern.application.commands import RefreshAccessToken
from lectern.application.commands.handlers.refresh_access_token_handler import (
    RefreshAccessTokenHandler,
)
from lectern.core.container import get_refresh_access_token_handler
from lectern.core.enums import ErrorCode
from lectern.core.result import Failure, Success
from lectern.presentation.routers.api.middleware.device_context import (
    device_context_from_request,
)
from lectern.presentation.routers.api.v1.errors import (
    ErrorResponseBuilder,
    ProblemDetails,
)
from lectern.schemas.auth_schemas import TokenCreateRequest, TokenPairResponse

router = APIRouter(prefix="/tokens", tags=["Tokens"])

REFRESH_REJECTED_DETAIL = "Refresh token is invalid or expired"


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=TokenPairResponse,
    responses={
        401: {"description": "Refresh token rejected", "model": ProblemDetails},
        503: {"description": "Service unavailable", "model": ProblemDetails},
    },
    summary="Create tokens",
    description="Exchange a refresh token for a new pair. The presented token is consumed.",
)
async def create_tokens(
    request: Request,
    data: TokenCreateRequest,
    handler: RefreshAccessTokenHandler = Depends(get_refresh_access_token_handler),
) -> TokenPairResponse | JSONResponse:
    """Rotate a refresh token.

    POST /api/v1/tokens → 201 Created

    Unknown, reused, expired, and orphaned tokens all answer the same 401.
    """
    device = (
        device_context_from_request(request, data.device_id)
        if data.device_id is not None
        else None
    )
    result = await handler.handle(
        RefreshAccessToken(refresh_token=data.refresh_token, device=device)
    )

    match result:
        case Success(value=tokens):
            return TokenPairResponse(
                access_token=tokens.access_token,
                refresh_token=tokens.refresh_token,
                token_type=tokens.token_type,
                expires_in=tokens.expires_in,
            )
        case Failure(error=error) if error.code == ErrorCode.STORE_UNAVAILABLE:
            return ErrorResponseBuilder.from_domain_error(error, request)
        case Failure():
            return ErrorResponseBuilder.build(
                request,
                status_code=status.HTTP_401_UNAUTHORIZED,
                slug="invalid_refresh_token",
                title="Authentication Required",
                detail=REFRESH_REJECTED_DETAIL,
            )
