"""Error values carried inside Failure.

Handlers return these; they are never raised. Infrastructure faults travel
as the StoreUnavailable exception until a handler boundary turns them into
StoreUnavailableError.

Subclasses add fields where a caller needs more than code and message,
e.g. AuthenticationError.retry_after_seconds.
"""

from dataclasses import dataclass

from lectern.core.enums import ErrorCode


@dataclass(frozen=True, slots=True, kw_only=True)
class DomainError:
    """Base error value.

    Attributes:
        code: ErrorCode; the presentation layer maps it to a status.
        message: Safe to show to the caller.
        details: Log-only context, never serialized into responses.
    """

    code: ErrorCode
    message: str
    details: dict[str, str] | None = None

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"
