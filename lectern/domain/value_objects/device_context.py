"""Device context value object.

Advisory metadata bound to a refresh token for audit and per-device logout.
It never gates authentication.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class DeviceContext:
    """Client device metadata captured at login or rotation.

    Attributes:
        device_id: Client-chosen device identifier (optional).
        user_agent: User-Agent header value (optional).
        ip_address: Origin address of the request (optional).
    """

    device_id: str | None = None
    user_agent: str | None = None
    ip_address: str | None = None

    def is_empty(self) -> bool:
        """True when no field carries a value."""
        return self.device_id is None and self.user_agent is None and self.ip_address is None
