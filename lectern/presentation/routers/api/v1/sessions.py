"""Sessions resource router.

Endpoints:
    POST   /api/v1/sessions         - Create session (login)
    DELETE /api/v1/sessions/current - Delete current session (logout)
    DELETE /api/v1/sessions         - Delete all sessions of the bearer
"""

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse, Response

from lectern.application.commands import LoginUser, LogoutUser, RevokeAllSessions
from lectern.application.commands.handlers.login_user_handler import LoginUserHandler
from lectern.application.commands.handlers.logout_user_handler import (
    LogoutUserHandler,
)
from lectern.application.commands.handlers.revoke_all_sessions_handler import (
    RevokeAllSessionsHandler,
)
from lectern.core.container import (
    get_login_user_handler,
    get_logout_user_handler,
    get_revoke_all_sessions_handler,
)
from lectern.core.result import Failure, Success
from lectern.presentation.routers.api.middleware.auth_dependencies import (
    CurrentUser,
    get_current_user,
)
from lectern.presentation.routers.api.middleware.device_context import (
    device_context_from_request,
)
from lectern.presentation.routers.api.v1.errors import (
    ErrorResponseBuilder,
    ProblemDetails,
)
from lectern.schemas.auth_schemas import (
    IdentitySummary,
    SessionCreateRequest,
    SessionCreateResponse,
    SessionDeleteRequest,
)

router = APIRouter(prefix="/sessions", tags=["Sessions"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=SessionCreateResponse,
    responses={
        401: {"description": "Invalid credentials", "model": ProblemDetails},
        429: {"description": "Account locked", "model": ProblemDetails},
        503: {"description": "Service unavailable", "model": ProblemDetails},
    },
    summary="Create session",
    description="Authenticate and receive an access/refresh token pair.",
)
async def create_session(
    request: Request,
    data: SessionCreateRequest,
    handler: LoginUserHandler = Depends(get_login_user_handler),
) -> SessionCreateResponse | JSONResponse:
    """Create a new session (login).

    POST /api/v1/sessions → 201 Created

    Unknown email and wrong password both answer 401 with the same body.
    A locked identity answers 429 with Retry-After.
    """
    command = LoginUser(
        email=data.email,
        password=data.password,
        device=device_context_from_request(request, data.device_id),
    )
    result = await handler.handle(command)

    match result:
        case Success(value=login):
            return SessionCreateResponse(
                access_token=login.tokens.access_token,
                refresh_token=login.tokens.refresh_token,
                token_type=login.tokens.token_type,
                expires_in=login.tokens.expires_in,
                user=IdentitySummary(
                    id=login.user.user_id,
                    email=login.user.email,
                    email_verified=login.user.email_verified,
                ),
            )
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(error, request)


@router.delete(
    "/current",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={503: {"description": "Service unavailable", "model": ProblemDetails}},
    summary="Delete current session",
    description="Revoke the presented refresh token. Idempotent.",
)
async def delete_current_session(
    request: Request,
    data: SessionDeleteRequest,
    handler: LogoutUserHandler = Depends(get_logout_user_handler),
) -> Response:
    """Logout this device.

    DELETE /api/v1/sessions/current → 204 No Content
    """
    result = await handler.handle(LogoutUser(refresh_token=data.refresh_token))

    match result:
        case Success():
            return Response(status_code=status.HTTP_204_NO_CONTENT)
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(error, request)


@router.delete(
    "",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        401: {"description": "Missing or invalid access token", "model": ProblemDetails},
        503: {"description": "Service unavailable", "model": ProblemDetails},
    },
    summary="Delete all sessions",
    description="Revoke every refresh token of the authenticated identity.",
)
async def delete_all_sessions(
    request: Request,
    current_user: CurrentUser = Depends(get_current_user),
    handler: RevokeAllSessionsHandler = Depends(get_revoke_all_sessions_handler),
) -> Response:
    """Logout all devices.

    DELETE /api/v1/sessions → 204 No Content
    """
    result = await handler.handle(RevokeAllSessions(user_id=current_user.user_id))

    match result:
        case Success():
            return Response(status_code=status.HTTP_204_NO_CONTENT)
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(error, request)
