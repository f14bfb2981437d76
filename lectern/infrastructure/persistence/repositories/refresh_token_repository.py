"""RefreshTokenRepository - SQLAlchemy implementation.

consume() is a single DELETE ... RETURNING: the store's row lock decides
which of two concurrent rotations gets the row; the loser sees no row.
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from lectern.domain.protocols.refresh_token_repository import RefreshTokenData
from lectern.domain.value_objects.device_context import DeviceContext
from lectern.infrastructure.persistence.base import as_utc
from lectern.infrastructure.persistence.models.refresh_token import RefreshTokenModel
from lectern.infrastructure.persistence.repositories.errors import store_operation


class RefreshTokenRepository:
    """SQLAlchemy implementation of RefreshTokenRepository protocol.

    Example:
        >>> async with database.get_session() as session:
        ...     repo = RefreshTokenRepository(session)
        ...     stored = await repo.consume(token_hash)
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @store_operation("refresh_tokens.save")
    async def save(
        self,
        user_id: UUID,
        token_hash: str,
        expires_at: datetime,
        device: DeviceContext,
        rotation_count: int = 0,
    ) -> RefreshTokenData:
        model = RefreshTokenModel(
            user_id=user_id,
            token_hash=token_hash,
            device_id=device.device_id,
            user_agent=device.user_agent,
            ip_address=device.ip_address,
            expires_at=expires_at,
            rotation_count=rotation_count,
        )
        self.session.add(model)
        await self.session.flush()
        return self._to_data(model)

    @store_operation("refresh_tokens.consume")
    async def consume(self, token_hash: str) -> RefreshTokenData | None:
        stmt = (
            delete(RefreshTokenModel)
            .where(RefreshTokenModel.token_hash == token_hash)
            .returning(RefreshTokenModel)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            return None
        return self._to_data(model)

    @store_operation("refresh_tokens.delete_by_token_hash")
    async def delete_by_token_hash(self, token_hash: str) -> int:
        stmt = (
            delete(RefreshTokenModel)
            .where(RefreshTokenModel.token_hash == token_hash)
            .returning(RefreshTokenModel.id)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return len(result.all())

    @store_operation("refresh_tokens.delete_all_for_user")
    async def delete_all_for_user(self, user_id: UUID) -> int:
        stmt = (
            delete(RefreshTokenModel)
            .where(RefreshTokenModel.user_id == user_id)
            .returning(RefreshTokenModel.id)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return len(result.all())

    @store_operation("refresh_tokens.find_by_user_id")
    async def find_by_user_id(self, user_id: UUID) -> list[RefreshTokenData]:
        stmt = (
            select(RefreshTokenModel)
            .where(RefreshTokenModel.user_id == user_id)
            .order_by(RefreshTokenModel.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return [self._to_data(model) for model in result.scalars().all()]

    @store_operation("refresh_tokens.delete_expired")
    async def delete_expired(self, now: datetime) -> int:
        stmt = (
            delete(RefreshTokenModel)
            .where(RefreshTokenModel.expires_at <= now)
            .returning(RefreshTokenModel.id)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return len(result.all())

    def _to_data(self, model: RefreshTokenModel) -> RefreshTokenData:
        return RefreshTokenData(
            id=model.id,
            user_id=model.user_id,
            token_hash=model.token_hash,
            device_id=model.device_id,
            user_agent=model.user_agent,
            ip_address=model.ip_address,
            expires_at=as_utc(model.expires_at),  # type: ignore[arg-type]
            created_at=as_utc(model.created_at),  # type: ignore[arg-type]
            last_used_at=as_utc(model.last_used_at),
            rotation_count=model.rotation_count,
        )
