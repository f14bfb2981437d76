"""Base model and mixins for all database entities.

- BaseModel: id (uuid7) and created_at for every table
- BaseMutableModel: adds updated_at for rows that change in place

Domain entities never inherit from these; repositories map between the two.

Architecture:
    BaseModel (id, created_at)
        ├── BaseMutableModel (+ updated_at)
        │   └── UserModel
        └── RefreshTokenModel, EmailVerificationTokenModel, LoginAttemptModel
"""

from datetime import UTC, datetime
from typing import Any
from uuid import UUID as PythonUUID

from sqlalchemy import DateTime, Uuid, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from uuid_extensions import uuid7


def utc_now() -> datetime:
    """Current UTC time (column default)."""
    return datetime.now(UTC)


class BaseModel(DeclarativeBase):
    """Base class for all database models.

    Timestamps are set in Python as well as by the server so a flushed row
    carries them without a refresh round-trip.
    """

    __abstract__ = True

    id: Mapped[PythonUUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid7,
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(id={self.id})>"

    def to_dict(self) -> dict[str, Any]:
        """Convert model to dictionary (for debugging/logging)."""
        return {
            "id": str(self.id),
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


class TimestampMixin:
    """Adds updated_at, refreshed on every ORM update."""

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        server_default=func.now(),
        onupdate=utc_now,
    )


class BaseMutableModel(TimestampMixin, BaseModel):
    """Base for mutable models (id, created_at, updated_at)."""

    __abstract__ = True

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["updated_at"] = self.updated_at.isoformat() if self.updated_at else None
        return data


def as_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive datetimes read back from the store.

    SQLite drops tzinfo; PostgreSQL timestamptz values pass through.
    """
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=UTC)
