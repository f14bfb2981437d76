"""Integration tests for the token and login-attempt repositories (SQLite)."""

from datetime import UTC, datetime, timedelta

import pytest
from uuid_extensions import uuid7

from lectern.domain.entities.login_attempt import LoginAttempt
from lectern.domain.entities.user import User
from lectern.domain.value_objects import DeviceContext
from lectern.infrastructure.persistence.repositories import (
    EmailVerificationTokenRepository,
    LoginAttemptRepository,
    RefreshTokenRepository,
    UserRepository,
)

DEVICE = DeviceContext(device_id="ios-1", user_agent="Reader/1.0", ip_address="192.0.2.1")


async def seed_user(database, email="reader@example.com", is_verified=False):
    now = datetime.now(UTC)
    user = User(
        id=uuid7(),
        email=email,
        password_hash="hash",
        is_verified=is_verified,
        failed_login_attempts=0,
        locked_until=None,
        created_at=now,
        updated_at=now,
    )
    async with database.transaction() as session:
        await UserRepository(session).save(user)
    return user


@pytest.mark.integration
class TestRefreshTokenRepository:
    @pytest.mark.asyncio
    async def test_save_and_consume_once(self, test_database):
        user = await seed_user(test_database)
        expires = datetime.now(UTC) + timedelta(days=7)
        async with test_database.transaction() as session:
            saved = await RefreshTokenRepository(session).save(
                user.id, "a" * 64, expires, DEVICE, rotation_count=2
            )

        async with test_database.transaction() as session:
            repo = RefreshTokenRepository(session)
            consumed = await repo.consume("a" * 64)
            again = await repo.consume("a" * 64)

        assert consumed.id == saved.id
        assert consumed.device == DEVICE
        assert consumed.rotation_count == 2
        assert consumed.expires_at == expires
        assert again is None

    @pytest.mark.asyncio
    async def test_delete_by_hash_and_all_for_user(self, test_database):
        user = await seed_user(test_database)
        other = await seed_user(test_database, email="other@example.com")
        expires = datetime.now(UTC) + timedelta(days=7)
        async with test_database.transaction() as session:
            repo = RefreshTokenRepository(session)
            for i in range(3):
                await repo.save(user.id, f"{i}" * 64, expires, DEVICE)
            await repo.save(other.id, "f" * 64, expires, DEVICE)

        async with test_database.transaction() as session:
            repo = RefreshTokenRepository(session)
            assert await repo.delete_by_token_hash("0" * 64) == 1
            assert await repo.delete_by_token_hash("0" * 64) == 0
            assert await repo.delete_all_for_user(user.id) == 2
            assert await repo.delete_all_for_user(user.id) == 0
            assert len(await repo.find_by_user_id(other.id)) == 1

    @pytest.mark.asyncio
    async def test_delete_expired(self, test_database):
        user = await seed_user(test_database)
        now = datetime.now(UTC)
        async with test_database.transaction() as session:
            repo = RefreshTokenRepository(session)
            await repo.save(user.id, "1" * 64, now - timedelta(seconds=1), DEVICE)
            await repo.save(user.id, "2" * 64, now + timedelta(days=1), DEVICE)

        async with test_database.transaction() as session:
            repo = RefreshTokenRepository(session)
            assert await repo.delete_expired(now) == 1
            remaining = await repo.find_by_user_id(user.id)

        assert [t.token_hash for t in remaining] == ["2" * 64]

    @pytest.mark.asyncio
    async def test_tokens_removed_with_user(self, test_database):
        user = await seed_user(test_database)
        async with test_database.transaction() as session:
            await RefreshTokenRepository(session).save(
                user.id, "c" * 64, datetime.now(UTC) + timedelta(days=1), DEVICE
            )

        async with test_database.transaction() as session:
            await UserRepository(session).delete(user.id)

        async with test_database.get_session() as session:
            assert await RefreshTokenRepository(session).find_by_user_id(user.id) == []


@pytest.mark.integration
class TestEmailVerificationTokenRepository:
    @pytest.mark.asyncio
    async def test_consume_flips_once(self, test_database):
        user = await seed_user(test_database)
        now = datetime.now(UTC)
        async with test_database.transaction() as session:
            await EmailVerificationTokenRepository(session).save(
                user.id, "t" * 64, now + timedelta(hours=24)
            )

        async with test_database.transaction() as session:
            repo = EmailVerificationTokenRepository(session)
            first = await repo.consume("t" * 64, now)
            second = await repo.consume("t" * 64, now)
            stored = await repo.find_by_token("t" * 64)

        assert first.user_id == user.id
        assert first.is_consumed
        assert second is None
        assert stored.consumed_at is not None

    @pytest.mark.asyncio
    async def test_expired_token_not_consumed(self, test_database):
        user = await seed_user(test_database)
        now = datetime.now(UTC)
        async with test_database.transaction() as session:
            await EmailVerificationTokenRepository(session).save(
                user.id, "e" * 64, now - timedelta(minutes=1)
            )

        async with test_database.transaction() as session:
            repo = EmailVerificationTokenRepository(session)
            assert await repo.consume("e" * 64, now) is None
            assert (await repo.find_by_token("e" * 64)).is_consumed is False

    @pytest.mark.asyncio
    async def test_delete_unconsumed_keeps_consumed(self, test_database):
        user = await seed_user(test_database)
        now = datetime.now(UTC)
        async with test_database.transaction() as session:
            repo = EmailVerificationTokenRepository(session)
            await repo.save(user.id, "1" * 64, now + timedelta(hours=1))
            await repo.save(user.id, "2" * 64, now + timedelta(hours=1))
            await repo.consume("1" * 64, now)

        async with test_database.transaction() as session:
            repo = EmailVerificationTokenRepository(session)
            assert await repo.delete_unconsumed_for_user(user.id) == 1
            assert await repo.find_by_token("1" * 64) is not None
            assert await repo.find_by_token("2" * 64) is None

    @pytest.mark.asyncio
    async def test_find_consumed_for_unverified_users(self, test_database):
        stranded = await seed_user(test_database)
        verified = await seed_user(test_database, email="done@example.com", is_verified=True)
        now = datetime.now(UTC)
        async with test_database.transaction() as session:
            repo = EmailVerificationTokenRepository(session)
            await repo.save(stranded.id, "s" * 64, now + timedelta(hours=1))
            await repo.save(verified.id, "v" * 64, now + timedelta(hours=1))
            await repo.consume("s" * 64, now)
            await repo.consume("v" * 64, now)

        async with test_database.get_session() as session:
            pending = await EmailVerificationTokenRepository(
                session
            ).find_consumed_for_unverified_users()

        assert [t.user_id for t in pending] == [stranded.id]

    @pytest.mark.asyncio
    async def test_delete_expired_unconsumed(self, test_database):
        user = await seed_user(test_database)
        now = datetime.now(UTC)
        async with test_database.transaction() as session:
            repo = EmailVerificationTokenRepository(session)
            await repo.save(user.id, "x" * 64, now - timedelta(hours=1))
            await repo.save(user.id, "y" * 64, now + timedelta(hours=1))

        async with test_database.transaction() as session:
            assert await EmailVerificationTokenRepository(
                session
            ).delete_expired_unconsumed(now) == 1


@pytest.mark.integration
class TestLoginAttemptRepository:
    @pytest.mark.asyncio
    async def test_append_find_and_purge(self, test_database):
        now = datetime.now(UTC)
        async with test_database.transaction() as session:
            repo = LoginAttemptRepository(session)
            for age_days, success in ((100, False), (2, False), (0, True)):
                await repo.append(
                    LoginAttempt(
                        id=uuid7(),
                        email="reader@example.com",
                        success=success,
                        ip_address="198.51.100.4",
                        user_agent=None,
                        failure_reason=None if success else "invalid_password",
                        created_at=now - timedelta(days=age_days),
                    )
                )

        async with test_database.transaction() as session:
            repo = LoginAttemptRepository(session)
            recent = await repo.find_by_email("reader@example.com", since=now - timedelta(days=7))
            removed = await repo.delete_older_than(now - timedelta(days=90))
            remaining = await repo.find_by_email("reader@example.com")

        assert [a.success for a in recent] == [False, True]
        assert removed == 1
        assert len(remaining) == 2
        assert remaining[0].failure_reason == "invalid_password"
