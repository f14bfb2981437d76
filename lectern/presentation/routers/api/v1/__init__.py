"""API v1 routers.

Resources:
    /api/v1/users                - User registration
    /api/v1/sessions             - Session management (login/logout)
    /api/v1/tokens               - Token rotation (refresh)
    /api/v1/email-verifications  - Email verification
"""

from fastapi import APIRouter

from lectern.core.config import settings
from lectern.presentation.routers.api.v1 import (
    email_verifications,
    sessions,
    tokens,
    users,
)

v1_router = APIRouter(prefix=settings.api_v1_prefix)
v1_router.include_router(users.router)
v1_router.include_router(sessions.router)
v1_router.include_router(tokens.router)
v1_router.include_router(email_verifications.router)

__all__ = [
    "v1_router",
]
