"""Unit tests for TraceMiddleware (request tracing).

Tests cover:
- Trace ID generation and reuse of an incoming X-Trace-Id
- get_trace_id() during and after a request
- structlog contextvars binding

Architecture:
- Mocked Request/Response; no ASGI app
"""

from unittest.mock import AsyncMock, MagicMock
from uuid import UUID

import pytest
import structlog

from lectern.presentation.routers.api.middleware.trace_middleware import (
    TraceMiddleware,
    get_trace_id,
)


def make_response():
    response = MagicMock()
    response.headers = {}
    return response


@pytest.mark.unit
class TestTraceMiddleware:
    @pytest.mark.asyncio
    async def test_generates_trace_id_when_missing(self):
        request = MagicMock()
        request.headers = {}
        call_next = AsyncMock(return_value=make_response())

        response = await TraceMiddleware(app=MagicMock()).dispatch(request, call_next)

        UUID(response.headers["X-Trace-Id"])

    @pytest.mark.asyncio
    async def test_reuses_incoming_trace_id(self):
        request = MagicMock()
        request.headers = {"X-Trace-Id": "trace-abc-123"}
        call_next = AsyncMock(return_value=make_response())

        response = await TraceMiddleware(app=MagicMock()).dispatch(request, call_next)

        assert response.headers["X-Trace-Id"] == "trace-abc-123"

    @pytest.mark.asyncio
    async def test_trace_id_visible_inside_request_only(self):
        seen = {}

        async def call_next(_request):
            seen["trace_id"] = get_trace_id()
            seen["log_context"] = structlog.contextvars.get_contextvars()
            return make_response()

        request = MagicMock()
        request.headers = {"X-Trace-Id": "trace-inside"}

        await TraceMiddleware(app=MagicMock()).dispatch(request, call_next)

        assert seen["trace_id"] == "trace-inside"
        assert seen["log_context"]["trace_id"] == "trace-inside"
        assert get_trace_id() is None
        assert "trace_id" not in structlog.contextvars.get_contextvars()

    @pytest.mark.asyncio
    async def test_context_reset_when_handler_raises(self):
        request = MagicMock()
        request.headers = {}
        call_next = AsyncMock(side_effect=RuntimeError("boom"))

        with pytest.raises(RuntimeError):
            await TraceMiddleware(app=MagicMock()).dispatch(request, call_next)

        assert get_trace_id() is None

    def test_get_trace_id_outside_request_is_none(self):
        assert get_trace_id() is None
