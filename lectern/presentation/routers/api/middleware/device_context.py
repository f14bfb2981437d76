"""Device context extraction from the HTTP request."""

from fastapi import Request

from lectern.domain.value_objects import DeviceContext

# Stored column width for user agents
USER_AGENT_MAX_LENGTH = 512


def device_context_from_request(
    request: Request, device_id: str | None = None
) -> DeviceContext:
    """Build a DeviceContext from the client address and User-Agent header."""
    user_agent = request.headers.get("user-agent")
    return DeviceContext(
        device_id=device_id,
        user_agent=user_agent[:USER_AGENT_MAX_LENGTH] if user_agent else None,
        ip_address=request.client.host if request.client else None,
    )
