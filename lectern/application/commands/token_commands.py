"""Refresh token commands."""

from dataclasses import dataclass

from lectern.domain.types import RefreshToken
from lectern.domain.value_objects import DeviceContext


@dataclass(frozen=True, kw_only=True)
class RefreshAccessToken:
    """Rotate a refresh token into a new access/refresh pair.

    Attributes:
        refresh_token: Presented refresh value (consumed exactly once).
        device: New device context; None keeps the consumed token's context.
    """

    refresh_token: RefreshToken
    device: DeviceContext | None = None
