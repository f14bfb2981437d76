"""Access token authentication dependencies.

Usage:
    @router.delete("/sessions")
    async def delete_all_sessions(
        current_user: CurrentUser = Depends(get_current_user),
    ): ...
"""

from dataclasses import dataclass
from typing import Annotated
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from lectern.core.container import get_token_service
from lectern.core.result import Failure, Success
from lectern.domain.protocols import TokenGenerationProtocol

# auto_error=True answers 401 when no bearer token is sent
bearer_scheme = HTTPBearer(auto_error=True)


@dataclass(frozen=True, slots=True, kw_only=True)
class CurrentUser:
    """Identity extracted from a valid access token.

    Attributes:
        user_id: From the 'sub' claim.
        email: From the 'email' claim.
        token_jti: From the 'jti' claim.
    """

    user_id: UUID
    email: str
    token_jti: str | None = None


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(bearer_scheme)],
    token_service: Annotated[TokenGenerationProtocol, Depends(get_token_service)],
) -> CurrentUser:
    """Validate the bearer access token and return its identity.

    Raises:
        HTTPException 401: If the token is missing, invalid, or expired.
    """
    result = token_service.validate_access_token(credentials.credentials)

    match result:
        case Success(value=payload):
            try:
                jti = payload.get("jti")
                return CurrentUser(
                    user_id=UUID(str(payload["sub"])),
                    email=str(payload["email"]),
                    token_jti=str(jti) if jti else None,
                )
            except (KeyError, ValueError) as e:
                raise _unauthorized("Invalid token payload") from e
        case Failure(error=error):
            raise _unauthorized(error.message)
