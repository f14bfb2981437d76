"""Email verification token service protocol."""

from datetime import datetime
from typing import Protocol


class EmailVerificationTokenServiceProtocol(Protocol):
    """Single-use verification token generation interface."""

    def generate_token(self) -> str:
        """Generate a random hex token (64 characters)."""
        ...

    def calculate_expiration(self) -> datetime:
        """Expiration timestamp for a token issued now."""
        ...
