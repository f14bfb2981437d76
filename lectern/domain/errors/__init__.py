"""Domain errors package.

Usage:
    from lectern.domain.errors import AuthenticationError, TokenError
    from lectern.domain.errors import StoreUnavailable, StoreUnavailableError
"""

from lectern.domain.errors.authentication_error import AuthenticationError
from lectern.domain.errors.store_error import StoreUnavailable, StoreUnavailableError
from lectern.domain.errors.token_error import TokenError
from lectern.domain.errors.user_error import UserError

__all__ = [
    "AuthenticationError",
    "StoreUnavailable",
    "StoreUnavailableError",
    "TokenError",
    "UserError",
]
