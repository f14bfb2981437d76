"""Core enums package.

Usage:
    from lectern.core.enums import ErrorCode, Environment
"""

from lectern.core.enums.environment import Environment
from lectern.core.enums.error_code import ErrorCode

__all__ = ["ErrorCode", "Environment"]
