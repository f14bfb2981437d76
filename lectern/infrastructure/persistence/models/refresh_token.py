"""Refresh token database model.

Security:
    - token_hash: HMAC-SHA256 digest (NOT plaintext), unique
    - Rows are deleted on rotation and revocation; there is no revoked state
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from lectern.infrastructure.persistence.base import BaseModel


class RefreshTokenModel(BaseModel):
    """Refresh token row (immutable; deleted on use).

    Indexes:
        - token_hash (unique) for rotation lookup
        - user_id for logout-all
        - expires_at for the purge job
    """

    __tablename__ = "refresh_tokens"

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    token_hash: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        unique=True,
        index=True,
        comment="HMAC-SHA256 of the refresh token (NEVER plaintext)",
    )
    device_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    user_agent: Mapped[str | None] = mapped_column(String(512), nullable=True)
    ip_address: Mapped[str | None] = mapped_column(String(45), nullable=True)
    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
    )
    last_used_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    rotation_count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default="0",
    )
