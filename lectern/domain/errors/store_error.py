"""Persistence failure types.

Two shapes of the same condition:

- StoreUnavailable: exception raised by infrastructure adapters when the
  durable store fails. Handlers catch it at their boundary.
- StoreUnavailableError: the error value handlers return in a Failure.
  Its message is opaque; detail goes to logs only.
"""

from dataclasses import dataclass

from lectern.core.enums import ErrorCode
from lectern.core.errors import DomainError


class StoreUnavailable(Exception):
    """Raised by repositories and the unit of work when the store fails.

    Args:
        operation: Name of the store operation that failed.
        cause: Underlying driver/ORM exception.
    """

    def __init__(self, operation: str, cause: Exception | None = None) -> None:
        super().__init__(f"store operation failed: {operation}")
        self.operation = operation
        self.cause = cause


@dataclass(frozen=True, slots=True, kw_only=True)
class StoreUnavailableError(DomainError):
    """Transient infrastructure failure surfaced to callers."""

    MESSAGE = "Service temporarily unavailable"

    @classmethod
    def from_exception(cls, exc: StoreUnavailable) -> "StoreUnavailableError":
        """Build the caller-facing error from a raised StoreUnavailable."""
        return cls(
            code=ErrorCode.STORE_UNAVAILABLE,
            message=cls.MESSAGE,
            details={"operation": exc.operation},
        )
