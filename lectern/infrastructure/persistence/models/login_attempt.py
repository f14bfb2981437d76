"""Login attempt audit model (append-only)."""

from sqlalchemy import Boolean, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from lectern.infrastructure.persistence.base import BaseModel


class LoginAttemptModel(BaseModel):
    """One authentication attempt.

    No foreign key to users: attempts against unknown emails are recorded
    too, and the trail outlives account deletion until retention purges it.
    """

    __tablename__ = "login_attempts"
    __table_args__ = (
        Index("idx_login_attempts_email_created_at", "email", "created_at"),
        Index("idx_login_attempts_created_at", "created_at"),
    )

    email: Mapped[str] = mapped_column(String(255), nullable=False)
    success: Mapped[bool] = mapped_column(Boolean, nullable=False)
    ip_address: Mapped[str | None] = mapped_column(String(45), nullable=True)
    user_agent: Mapped[str | None] = mapped_column(String(512), nullable=True)
    failure_reason: Mapped[str | None] = mapped_column(String(64), nullable=True)
