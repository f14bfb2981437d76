"""User lifecycle errors (registration)."""

from dataclasses import dataclass

from lectern.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class UserError(DomainError):
    """Registration failure (EMAIL_ALREADY_EXISTS)."""

    pass  # Inherits all fields from DomainError
