"""SQLAlchemy unit of work (adapter for the UnitOfWork port)."""

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from lectern.domain.errors import StoreUnavailable


class SqlAlchemyUnitOfWork:
    """Commit/rollback over the request session shared by the repositories.

    Args:
        session: Session the handler's repositories were built with.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def commit(self) -> None:
        """Commit staged changes.

        Raises:
            StoreUnavailable: If the commit fails. The session is rolled back
                first so it stays usable.
        """
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise StoreUnavailable("commit", e) from e

    async def rollback(self) -> None:
        """Roll back staged changes; a failing rollback is not re-raised."""
        try:
            await self.session.rollback()
        except SQLAlchemyError:
            # connection lost; the session is discarded with the request
            pass
