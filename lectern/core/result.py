"""Result types for railway-oriented programming.

Every credential and session operation returns a Result instead of raising
for expected outcomes (wrong password, locked account, consumed token).
Exceptions are reserved for infrastructure failure.

Usage:
    def rotate(value: str) -> Result[AuthTokens, TokenError]:
        if not value:
            return Failure(error=TokenError(...))
        return Success(value=tokens)

    match await handler.handle(cmd):
        case Success(value=tokens):
            ...
        case Failure(error=error):
            ...
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Successful operation result.

    Attributes:
        value: The successful result value.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Failed operation result.

    Attributes:
        error: The error that occurred.
    """

    error: E


type Result[T, E] = Success[T] | Failure[E]
