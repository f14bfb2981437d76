"""Outbound mail port used by registration and resend.

The only message lectern sends is the verification link. Delivery is not
part of the core; the bundled adapter just logs the link.
"""

from typing import Protocol


class EmailProtocol(Protocol):
    """Sends verification links to readers."""

    async def send_verification_email(self, to_email: str, verification_url: str) -> None:
        """Deliver the link. Raising is allowed; callers log and carry on."""
        ...
