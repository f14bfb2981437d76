"""Core error types.

Usage:
    from lectern.core.errors import DomainError
"""

from lectern.core.errors.domain_error import DomainError

__all__ = ["DomainError"]
