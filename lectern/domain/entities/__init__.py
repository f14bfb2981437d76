"""Domain entities.

Usage:
    from lectern.domain.entities import LoginAttempt, User
"""

from lectern.domain.entities.login_attempt import LoginAttempt
from lectern.domain.entities.user import User

__all__ = ["LoginAttempt", "User"]
