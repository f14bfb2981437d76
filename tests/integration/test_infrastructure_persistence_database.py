"""Integration tests for Database, SqlAlchemyUnitOfWork, and store error mapping."""

from datetime import UTC, datetime

import pytest
from uuid_extensions import uuid7

from lectern.domain.entities.user import User
from lectern.domain.errors import StoreUnavailable
from lectern.infrastructure.persistence.database import Database
from lectern.infrastructure.persistence.models import UserModel
from lectern.infrastructure.persistence.repositories import UserRepository
from lectern.infrastructure.persistence.unit_of_work import SqlAlchemyUnitOfWork


def user_row(email):
    now = datetime.now(UTC)
    return UserModel(
        id=uuid7(),
        email=email,
        password_hash="hash",
        created_at=now,
        updated_at=now,
    )


@pytest.mark.integration
class TestDatabase:
    @pytest.mark.asyncio
    async def test_check_connection(self, test_database):
        assert await test_database.check_connection() is True

    @pytest.mark.asyncio
    async def test_check_connection_unreachable(self, tmp_path):
        database = Database(f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'nope.db'}")
        try:
            assert await database.check_connection() is False
        finally:
            await database.close()

    @pytest.mark.asyncio
    async def test_uncommitted_work_discarded_on_exit(self, test_database):
        async with test_database.get_session() as session:
            session.add(user_row("staged@example.com"))
            await session.flush()

        async with test_database.get_session() as session:
            assert await UserRepository(session).exists_by_email("staged@example.com") is False


@pytest.mark.integration
class TestSqlAlchemyUnitOfWork:
    @pytest.mark.asyncio
    async def test_commit_persists(self, test_database):
        async with test_database.get_session() as session:
            session.add(user_row("kept@example.com"))
            await SqlAlchemyUnitOfWork(session).commit()

        async with test_database.get_session() as session:
            assert await UserRepository(session).exists_by_email("kept@example.com")

    @pytest.mark.asyncio
    async def test_commit_failure_raises_store_unavailable(self, test_database):
        async with test_database.get_session() as session:
            session.add(user_row("dup@example.com"))
            session.add(user_row("dup@example.com"))
            uow = SqlAlchemyUnitOfWork(session)

            with pytest.raises(StoreUnavailable) as exc_info:
                await uow.commit()

        assert exc_info.value.operation == "commit"
        assert exc_info.value.cause is not None

    @pytest.mark.asyncio
    async def test_rollback_discards(self, test_database):
        async with test_database.get_session() as session:
            session.add(user_row("gone@example.com"))
            await session.flush()
            await SqlAlchemyUnitOfWork(session).rollback()
            assert await UserRepository(session).exists_by_email("gone@example.com") is False


@pytest.mark.integration
class TestStoreErrorMapping:
    @pytest.mark.asyncio
    async def test_driver_error_becomes_store_unavailable(self, test_database):
        await test_database.drop_all()

        async with test_database.get_session() as session:
            with pytest.raises(StoreUnavailable) as exc_info:
                await UserRepository(session).find_by_email("reader@example.com")

        assert exc_info.value.operation == "users.find_by_email"

    @pytest.mark.asyncio
    async def test_save_failure_is_store_unavailable(self, test_database):
        await test_database.drop_all()
        now = datetime.now(UTC)
        user = User(
            id=uuid7(),
            email="reader@example.com",
            password_hash="hash",
            is_verified=False,
            failed_login_attempts=0,
            locked_until=None,
            created_at=now,
            updated_at=now,
        )

        async with test_database.get_session() as session:
            with pytest.raises(StoreUnavailable):
                await UserRepository(session).save(user)
