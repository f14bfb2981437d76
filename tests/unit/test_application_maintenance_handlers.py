"""Unit tests for the maintenance handlers.

Tests cover:
- Reconcile repairs identities stranded with a consumed token
- Reconcile is repeatable and reports vanished identities
- Purge removes only expired or out-of-retention records
"""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest
from uuid_extensions import uuid7

from lectern.application.commands import PurgeExpiredCredentials, ReconcileEmailVerifications
from lectern.application.commands.handlers.purge_expired_credentials_handler import (
    PurgeExpiredCredentialsHandler,
)
from lectern.application.commands.handlers.reconcile_email_verifications_handler import (
    ReconcileEmailVerificationsHandler,
)
from lectern.core.enums import ErrorCode
from lectern.core.result import Failure, Success
from lectern.domain.entities.login_attempt import LoginAttempt
from lectern.domain.errors import StoreUnavailable
from lectern.domain.value_objects import DeviceContext
from tests.utils.in_memory_stores import (
    InMemoryEmailVerificationTokenRepository,
    InMemoryLoginAttemptRepository,
    InMemoryRefreshTokenRepository,
    InMemoryUserRepository,
    RecordingLogger,
    RecordingUnitOfWork,
    make_user,
)

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


async def consumed_token(tokens, user_id):
    data = await tokens.save(user_id=user_id, token=uuid7().hex, expires_at=NOW)
    data.consumed_at = NOW - timedelta(hours=1)
    return data


@pytest.mark.unit
class TestReconcileEmailVerificationsHandler:
    @pytest.mark.asyncio
    async def test_stranded_identity_is_marked_verified(self):
        stranded = make_user(email="stranded@example.com")
        fine = make_user(email="fine@example.com", is_verified=True)
        users = InMemoryUserRepository(stranded, fine)
        tokens = InMemoryEmailVerificationTokenRepository(users)
        await consumed_token(tokens, stranded.id)
        await consumed_token(tokens, stranded.id)
        await consumed_token(tokens, fine.id)
        uow = RecordingUnitOfWork()
        handler = ReconcileEmailVerificationsHandler(tokens, users, uow, RecordingLogger())

        result = await handler.handle(ReconcileEmailVerifications())

        assert isinstance(result, Success)
        assert result.value.repaired_user_ids == [stranded.id]
        assert result.value.missing_user_ids == []
        assert users.get(stranded.id).is_verified is True
        assert uow.commits == 1

    @pytest.mark.asyncio
    async def test_second_run_finds_nothing(self):
        stranded = make_user()
        users = InMemoryUserRepository(stranded)
        tokens = InMemoryEmailVerificationTokenRepository(users)
        await consumed_token(tokens, stranded.id)
        handler = ReconcileEmailVerificationsHandler(
            tokens, users, RecordingUnitOfWork(), RecordingLogger()
        )

        await handler.handle(ReconcileEmailVerifications())
        again = await handler.handle(ReconcileEmailVerifications())

        assert again.value.repaired_user_ids == []

    @pytest.mark.asyncio
    async def test_vanished_identity_reported_missing(self):
        user_id = uuid7()
        tokens = AsyncMock()
        tokens.find_consumed_for_unverified_users.return_value = [
            MagicMock(user_id=user_id)
        ]
        users = AsyncMock()
        users.mark_verified.return_value = False
        handler = ReconcileEmailVerificationsHandler(
            tokens, users, RecordingUnitOfWork(), RecordingLogger()
        )

        result = await handler.handle(ReconcileEmailVerifications())

        assert result.value.missing_user_ids == [user_id]
        assert result.value.repaired_user_ids == []

    @pytest.mark.asyncio
    async def test_store_failure_reports_unavailable(self):
        tokens = AsyncMock()
        tokens.find_consumed_for_unverified_users.side_effect = StoreUnavailable(
            "email_verification_tokens.find_consumed"
        )
        logger = RecordingLogger()
        handler = ReconcileEmailVerificationsHandler(
            tokens, AsyncMock(), RecordingUnitOfWork(), logger
        )

        result = await handler.handle(ReconcileEmailVerifications())

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.STORE_UNAVAILABLE
        assert "email_verification_reconcile_failed" in logger.events("error")


@pytest.mark.unit
class TestPurgeExpiredCredentialsHandler:
    @pytest.mark.asyncio
    async def test_purge_removes_only_stale_records(self):
        user = make_user()
        users = InMemoryUserRepository(user)
        refresh_tokens = InMemoryRefreshTokenRepository()
        verification_tokens = InMemoryEmailVerificationTokenRepository(users)
        attempts = InMemoryLoginAttemptRepository()

        await refresh_tokens.save(user.id, "digest:old", NOW - timedelta(days=1), DeviceContext())
        await refresh_tokens.save(user.id, "digest:new", NOW + timedelta(days=1), DeviceContext())
        await verification_tokens.save(user.id, "expired", NOW - timedelta(hours=1))
        await verification_tokens.save(user.id, "pending", NOW + timedelta(hours=1))
        kept_consumed = await consumed_token(verification_tokens, user.id)
        for age in (timedelta(days=120), timedelta(days=10)):
            await attempts.append(
                LoginAttempt(
                    id=uuid7(),
                    email=user.email,
                    success=False,
                    ip_address=None,
                    user_agent=None,
                    failure_reason="invalid_password",
                    created_at=NOW - age,
                )
            )
        uow = RecordingUnitOfWork()
        handler = PurgeExpiredCredentialsHandler(
            refresh_token_repo=refresh_tokens,
            verification_token_repo=verification_tokens,
            attempt_repo=attempts,
            uow=uow,
            logger=RecordingLogger(),
            attempt_retention=timedelta(days=90),
        )

        result = await handler.handle(PurgeExpiredCredentials(now=NOW))

        assert isinstance(result, Success)
        assert result.value.refresh_tokens == 1
        assert result.value.verification_tokens == 1
        assert result.value.login_attempts == 1
        assert list(refresh_tokens.tokens) == ["digest:new"]
        assert set(verification_tokens.tokens) == {"pending", kept_consumed.token}
        assert len(attempts.attempts) == 1
        assert uow.commits == 1

    @pytest.mark.asyncio
    async def test_store_failure_rolls_back(self):
        refresh_tokens = AsyncMock()
        refresh_tokens.delete_expired.side_effect = StoreUnavailable(
            "refresh_tokens.delete_expired"
        )
        uow = RecordingUnitOfWork()
        handler = PurgeExpiredCredentialsHandler(
            refresh_token_repo=refresh_tokens,
            verification_token_repo=AsyncMock(),
            attempt_repo=AsyncMock(),
            uow=uow,
            logger=RecordingLogger(),
            attempt_retention=timedelta(days=90),
        )

        result = await handler.handle(PurgeExpiredCredentials())

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.STORE_UNAVAILABLE
        assert uow.rollbacks == 1
