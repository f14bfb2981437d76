"""Translation of driver/ORM failures into the domain's StoreUnavailable."""

from collections.abc import Awaitable, Callable
from functools import wraps
from typing import ParamSpec, TypeVar

from sqlalchemy.exc import SQLAlchemyError

from lectern.domain.errors import StoreUnavailable

P = ParamSpec("P")
R = TypeVar("R")


def store_operation(
    operation: str,
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """Re-raise SQLAlchemyError from a repository method as StoreUnavailable.

    Usage:
        @store_operation("users.find_by_id")
        async def find_by_id(self, user_id: UUID) -> User | None: ...
    """

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            try:
                return await func(*args, **kwargs)
            except SQLAlchemyError as e:
                raise StoreUnavailable(operation, e) from e

        return wrapper

    return decorator
