"""EmailVerificationTokenRepository - SQLAlchemy implementation."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from lectern.domain.protocols.email_verification_token_repository import (
    EmailVerificationTokenData,
)
from lectern.infrastructure.persistence.base import as_utc
from lectern.infrastructure.persistence.models.email_verification_token import (
    EmailVerificationTokenModel,
)
from lectern.infrastructure.persistence.models.user import UserModel
from lectern.infrastructure.persistence.repositories.errors import store_operation


class EmailVerificationTokenRepository:
    """SQLAlchemy implementation of EmailVerificationTokenRepository protocol."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @store_operation("email_verification_tokens.save")
    async def save(
        self,
        user_id: UUID,
        token: str,
        expires_at: datetime,
    ) -> EmailVerificationTokenData:
        model = EmailVerificationTokenModel(
            user_id=user_id,
            token=token,
            expires_at=expires_at,
        )
        self.session.add(model)
        await self.session.flush()
        return self._to_data(model)

    @store_operation("email_verification_tokens.find_by_token")
    async def find_by_token(self, token: str) -> EmailVerificationTokenData | None:
        stmt = (
            select(EmailVerificationTokenModel)
            .where(EmailVerificationTokenModel.token == token)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            return None
        return self._to_data(model)

    @store_operation("email_verification_tokens.consume")
    async def consume(
        self, token: str, now: datetime
    ) -> EmailVerificationTokenData | None:
        """Flip consumed_at for an unconsumed, unexpired token in one UPDATE."""
        stmt = (
            update(EmailVerificationTokenModel)
            .where(
                EmailVerificationTokenModel.token == token,
                EmailVerificationTokenModel.consumed_at.is_(None),
                EmailVerificationTokenModel.expires_at > now,
            )
            .values(consumed_at=now)
            .returning(EmailVerificationTokenModel)
            .execution_options(synchronize_session="fetch")
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            return None
        return self._to_data(model)

    @store_operation("email_verification_tokens.delete_unconsumed_for_user")
    async def delete_unconsumed_for_user(self, user_id: UUID) -> int:
        stmt = (
            delete(EmailVerificationTokenModel)
            .where(
                EmailVerificationTokenModel.user_id == user_id,
                EmailVerificationTokenModel.consumed_at.is_(None),
            )
            .returning(EmailVerificationTokenModel.id)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return len(result.all())

    @store_operation("email_verification_tokens.find_consumed_for_unverified_users")
    async def find_consumed_for_unverified_users(
        self,
    ) -> list[EmailVerificationTokenData]:
        stmt = (
            select(EmailVerificationTokenModel)
            .join(UserModel, UserModel.id == EmailVerificationTokenModel.user_id)
            .where(
                EmailVerificationTokenModel.consumed_at.is_not(None),
                UserModel.is_verified.is_(False),
            )
            .order_by(EmailVerificationTokenModel.consumed_at)
        )
        result = await self.session.execute(stmt)
        return [self._to_data(model) for model in result.scalars().all()]

    @store_operation("email_verification_tokens.delete_expired_unconsumed")
    async def delete_expired_unconsumed(self, now: datetime) -> int:
        stmt = (
            delete(EmailVerificationTokenModel)
            .where(
                EmailVerificationTokenModel.consumed_at.is_(None),
                EmailVerificationTokenModel.expires_at <= now,
            )
            .returning(EmailVerificationTokenModel.id)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return len(result.all())

    def _to_data(self, model: EmailVerificationTokenModel) -> EmailVerificationTokenData:
        return EmailVerificationTokenData(
            id=model.id,
            user_id=model.user_id,
            token=model.token,
            expires_at=as_utc(model.expires_at),  # type: ignore[arg-type]
            consumed_at=as_utc(model.consumed_at),
            created_at=as_utc(model.created_at),  # type: ignore[arg-type]
        )
