"""User database model.

Stores the identity row the lockout counter lives on.
"""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Integer, String, false
from sqlalchemy.orm import Mapped, mapped_column

from lectern.infrastructure.persistence.base import BaseMutableModel


class UserModel(BaseMutableModel):
    """User account row.

    Fields:
        email: Normalized email (unique index)
        password_hash: Bcrypt hash
        is_verified: Email verification status
        failed_login_attempts: Consecutive failures (atomic updates only)
        locked_until: End of the active lock window (nullable)
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
        comment="Normalized email (trimmed, lowercase)",
    )
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Bcrypt hashed password (NEVER plaintext)",
    )
    is_verified: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
    )
    failed_login_attempts: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default="0",
    )
    locked_until: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
