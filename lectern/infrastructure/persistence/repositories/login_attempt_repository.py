"""LoginAttemptRepository - SQLAlchemy implementation (append-only)."""

from datetime import datetime

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from lectern.domain.entities.login_attempt import LoginAttempt
from lectern.infrastructure.persistence.base import as_utc
from lectern.infrastructure.persistence.models.login_attempt import LoginAttemptModel
from lectern.infrastructure.persistence.repositories.errors import store_operation


class LoginAttemptRepository:
    """SQLAlchemy implementation of LoginAttemptRepository protocol."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @store_operation("login_attempts.append")
    async def append(self, attempt: LoginAttempt) -> None:
        self.session.add(
            LoginAttemptModel(
                id=attempt.id,
                email=attempt.email,
                success=attempt.success,
                ip_address=attempt.ip_address,
                user_agent=attempt.user_agent,
                failure_reason=attempt.failure_reason,
                created_at=attempt.created_at,
            )
        )
        await self.session.flush()

    @store_operation("login_attempts.find_by_email")
    async def find_by_email(
        self, email: str, since: datetime | None = None
    ) -> list[LoginAttempt]:
        stmt = select(LoginAttemptModel).where(LoginAttemptModel.email == email)
        if since is not None:
            stmt = stmt.where(LoginAttemptModel.created_at >= since)
        stmt = stmt.order_by(LoginAttemptModel.created_at, LoginAttemptModel.id)
        result = await self.session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    @store_operation("login_attempts.delete_older_than")
    async def delete_older_than(self, cutoff: datetime) -> int:
        stmt = (
            delete(LoginAttemptModel)
            .where(LoginAttemptModel.created_at < cutoff)
            .returning(LoginAttemptModel.id)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return len(result.all())

    def _to_domain(self, model: LoginAttemptModel) -> LoginAttempt:
        return LoginAttempt(
            id=model.id,
            email=model.email,
            success=model.success,
            ip_address=model.ip_address,
            user_agent=model.user_agent,
            failure_reason=model.failure_reason,
            created_at=as_utc(model.created_at),  # type: ignore[arg-type]
        )
