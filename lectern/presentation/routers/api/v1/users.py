"""Users resource router.

Endpoints:
    POST /api/v1/users - Create user (registration)
"""

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from lectern.application.commands import RegisterUser
from lectern.application.commands.handlers.register_user_handler import (
    RegisterUserHandler,
)
from lectern.core.container import get_register_user_handler
from lectern.core.result import Failure, Success
from lectern.presentation.routers.api.v1.errors import (
    ErrorResponseBuilder,
    ProblemDetails,
)
from lectern.schemas.auth_schemas import UserCreateRequest, UserCreateResponse

router = APIRouter(prefix="/users", tags=["Users"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=UserCreateResponse,
    responses={
        409: {"description": "Email already registered", "model": ProblemDetails},
        503: {"description": "Service unavailable", "model": ProblemDetails},
    },
    summary="Create user",
    description="Register an identity and send its verification link.",
)
async def create_user(
    request: Request,
    data: UserCreateRequest,
    handler: RegisterUserHandler = Depends(get_register_user_handler),
) -> UserCreateResponse | JSONResponse:
    """Create a new user (registration).

    POST /api/v1/users → 201 Created
    """
    result = await handler.handle(RegisterUser(email=data.email, password=data.password))

    match result:
        case Success(value=user):
            return UserCreateResponse(id=user.user_id, email=user.email)
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(error, request)
