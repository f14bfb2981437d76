"""
Main FastAPI application entry point.

Wires the trace middleware, RFC 7807 exception handlers, the v1 routers,
and the system endpoints. Schema management is Alembic's job; the app
never creates tables.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from lectern.core.config import settings
from lectern.core.container import get_database, get_logger
from lectern.presentation.routers import system
from lectern.presentation.routers.api.middleware.trace_middleware import TraceMiddleware
from lectern.presentation.routers.api.v1 import v1_router
from lectern.presentation.routers.api.v1.errors import register_exception_handlers


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: log startup, dispose the engine on shutdown."""
    logger = get_logger()
    logger.info(
        "application_started",
        environment=settings.environment.value,
        version=settings.app_version,
    )

    yield

    await get_database().close()
    logger.info("application_stopped")


app = FastAPI(
    title=settings.app_name,
    description="Credential and session lifecycle API",
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    debug=settings.debug,
    lifespan=lifespan,
)

# Request correlation
app.add_middleware(TraceMiddleware)

# RFC 7807 error responses
register_exception_handlers(app)

app.include_router(v1_router)
app.include_router(system.router)
