"""UserRepository - SQLAlchemy implementation of UserRepository protocol.

Maps between domain User entities and UserModel, and implements the lockout
counter primitives as single UPDATE ... RETURNING statements.
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, case, delete, literal, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from lectern.domain.entities.user import User
from lectern.domain.protocols.user_repository import LockoutState
from lectern.infrastructure.persistence.base import as_utc
from lectern.infrastructure.persistence.models.user import UserModel
from lectern.infrastructure.persistence.repositories.errors import store_operation


class UserRepository:
    """SQLAlchemy implementation of UserRepository protocol.

    Never commits; the handler's unit of work owns the transaction.

    Example:
        >>> async with database.get_session() as session:
        ...     repo = UserRepository(session)
        ...     user = await repo.find_by_email("reader@example.com")
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @store_operation("users.find_by_id")
    async def find_by_id(self, user_id: UUID) -> User | None:
        stmt = (
            select(UserModel)
            .where(UserModel.id == user_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        user_model = result.scalar_one_or_none()
        if user_model is None:
            return None
        return self._to_domain(user_model)

    @store_operation("users.find_by_email")
    async def find_by_email(self, email: str) -> User | None:
        """Find user by normalized email (exact match on the unique index)."""
        stmt = (
            select(UserModel)
            .where(UserModel.email == email)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        user_model = result.scalar_one_or_none()
        if user_model is None:
            return None
        return self._to_domain(user_model)

    @store_operation("users.exists_by_email")
    async def exists_by_email(self, email: str) -> bool:
        stmt = select(UserModel.id).where(UserModel.email == email)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None

    @store_operation("users.save")
    async def save(self, user: User) -> bool:
        """Insert a new user.

        Returns:
            False on a duplicate email. The session is then unusable until
            the caller rolls back.
        """
        self.session.add(self._to_model(user))
        try:
            await self.session.flush()
        except IntegrityError:
            return False
        return True

    @store_operation("users.delete")
    async def delete(self, user_id: UUID) -> bool:
        stmt = (
            delete(UserModel)
            .where(UserModel.id == user_id)
            .returning(UserModel.id)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None

    @store_operation("users.record_failed_login")
    async def record_failed_login(
        self,
        user_id: UUID,
        max_attempts: int,
        lock_until: datetime,
        now: datetime,
    ) -> LockoutState | None:
        """Increment the counter and set the lock in one statement.

        The SET clause reads the pre-update counter, so concurrent callers
        serialize on the row and each sees the previous caller's increment.
        """
        next_count = UserModel.failed_login_attempts + 1
        stmt = (
            update(UserModel)
            .where(UserModel.id == user_id)
            .values(
                failed_login_attempts=next_count,
                locked_until=case(
                    (
                        next_count >= max_attempts,
                        literal(lock_until, DateTime(timezone=True)),
                    ),
                    else_=UserModel.locked_until,
                ),
                updated_at=now,
            )
            .returning(UserModel.failed_login_attempts, UserModel.locked_until)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        row = result.one_or_none()
        if row is None:
            return None
        return LockoutState(
            failed_login_attempts=row.failed_login_attempts,
            locked_until=as_utc(row.locked_until),
        )

    @store_operation("users.release_expired_lock")
    async def release_expired_lock(self, user_id: UUID, now: datetime) -> bool:
        stmt = (
            update(UserModel)
            .where(
                UserModel.id == user_id,
                UserModel.locked_until.is_not(None),
                UserModel.locked_until <= now,
            )
            .values(failed_login_attempts=0, locked_until=None, updated_at=now)
            .returning(UserModel.id)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None

    @store_operation("users.reset_failed_login")
    async def reset_failed_login(self, user_id: UUID, now: datetime) -> bool:
        stmt = (
            update(UserModel)
            .where(
                UserModel.id == user_id,
                or_(UserModel.locked_until.is_(None), UserModel.locked_until <= now),
            )
            .values(failed_login_attempts=0, locked_until=None, updated_at=now)
            .returning(UserModel.id)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None

    @store_operation("users.mark_verified")
    async def mark_verified(self, user_id: UUID) -> bool:
        stmt = (
            update(UserModel)
            .where(UserModel.id == user_id)
            .values(is_verified=True)
            .returning(UserModel.id)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None

    def _to_domain(self, user_model: UserModel) -> User:
        return User(
            id=user_model.id,
            email=user_model.email,
            password_hash=user_model.password_hash,
            is_verified=user_model.is_verified,
            failed_login_attempts=user_model.failed_login_attempts,
            locked_until=as_utc(user_model.locked_until),
            created_at=as_utc(user_model.created_at),  # type: ignore[arg-type]
            updated_at=as_utc(user_model.updated_at),  # type: ignore[arg-type]
        )

    def _to_model(self, user: User) -> UserModel:
        return UserModel(
            id=user.id,
            email=user.email,
            password_hash=user.password_hash,
            is_verified=user.is_verified,
            failed_login_attempts=user.failed_login_attempts,
            locked_until=user.locked_until,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
