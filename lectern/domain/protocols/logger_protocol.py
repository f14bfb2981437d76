"""LoggerProtocol definition for structured logging.

Handlers and services log through this port; the structlog adapter lives in
infrastructure. Calls are structured (event name + key-value context).

Security:
    - NEVER log passwords, raw refresh tokens, or verification tokens
    - A verification token may appear only as an 8-character prefix

Usage:
    from lectern.core.container import get_logger

    logger = get_logger()
    logger.info("refresh_token_rotated", user_id=str(user_id))
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Protocol for structured logging adapters.

    Five levels plus context binding for request-scoped loggers.
    """

    def debug(self, message: str, /, **context: Any) -> None:
        """Log a debug-level event."""
        ...

    def info(self, message: str, /, **context: Any) -> None:
        """Log an info-level event."""
        ...

    def warning(self, message: str, /, **context: Any) -> None:
        """Log a warning-level event."""
        ...

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log an error-level event.

        Args:
            message: Event name.
            error: Optional exception; adapters add error_type and
                error_message fields.
            **context: Structured key-value context fields.
        """
        ...

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log a critical-level event (same fields as error())."""
        ...

    def bind(self, **context: Any) -> LoggerProtocol:
        """Return a new logger with permanently bound context.

        The original instance is unchanged.

        Example:
            request_logger = logger.bind(trace_id=trace_id)
            request_logger.info("login_attempted")  # trace_id included
        """
        ...
