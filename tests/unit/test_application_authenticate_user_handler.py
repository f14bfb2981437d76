"""Unit tests for AuthenticateUserHandler.

Tests cover:
- Successful authentication (returns AuthenticatedUser)
- Unknown email and wrong password give the same failure
- Lockout: threshold failure locks, locked attempts skip hashing
- Lock window expiry and success reset
- Concurrent failures never lose a counter increment
- Audit trail and commit on every outcome
- Store failure surfaces as STORE_UNAVAILABLE with rollback

Architecture:
- In-memory repositories implementing the domain protocols
- Unverified identities may log in (verification is informational)
"""

import asyncio
from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock

import pytest

from lectern.application.commands import AuthenticateUser
from lectern.application.commands.handlers.authenticate_user_handler import (
    AuthenticateUserHandler,
)
from lectern.application.dtos import AuthenticatedUser
from lectern.application.services import CredentialVerifier, LoginAttemptGuard
from lectern.application.services.login_attempt_guard import FailureReason
from lectern.core.enums import ErrorCode
from lectern.core.result import Failure, Success
from lectern.domain.errors import StoreUnavailable
from lectern.domain.value_objects import DeviceContext, LockoutPolicy
from tests.utils.in_memory_stores import (
    FakePasswordService,
    InMemoryLoginAttemptRepository,
    InMemoryUserRepository,
    RecordingLogger,
    RecordingUnitOfWork,
    make_user,
)

PASSWORD = "SecurePass123!"


class Harness:
    def __init__(self, *users, user_repo=None):
        self.users = user_repo if user_repo is not None else InMemoryUserRepository(*users)
        self.attempts = InMemoryLoginAttemptRepository()
        self.passwords = FakePasswordService()
        self.uow = RecordingUnitOfWork()
        self.logger = RecordingLogger()
        self.handler = AuthenticateUserHandler(
            verifier=CredentialVerifier(self.users, self.passwords),
            guard=LoginAttemptGuard(
                self.users,
                self.attempts,
                LockoutPolicy(max_attempts=5, lockout_duration=timedelta(minutes=15)),
            ),
            uow=self.uow,
            logger=self.logger,
        )

    async def login(self, email="reader@example.com", password=PASSWORD):
        return await self.handler.handle(
            AuthenticateUser(
                email=email,
                password=password,
                device=DeviceContext(ip_address="198.51.100.4"),
            )
        )


@pytest.mark.unit
class TestAuthenticateUserHandlerSuccess:
    @pytest.mark.asyncio
    async def test_authentication_success_returns_authenticated_user(self):
        user = make_user(password=PASSWORD, is_verified=True)
        harness = Harness(user)

        result = await harness.login()

        assert isinstance(result, Success)
        assert isinstance(result.value, AuthenticatedUser)
        assert result.value.user_id == user.id
        assert result.value.email == "reader@example.com"
        assert result.value.email_verified is True

    @pytest.mark.asyncio
    async def test_unverified_user_may_log_in(self):
        harness = Harness(make_user(password=PASSWORD, is_verified=False))

        result = await harness.login()

        assert isinstance(result, Success)
        assert result.value.email_verified is False

    @pytest.mark.asyncio
    async def test_email_is_normalized_before_lookup(self):
        harness = Harness(make_user(password=PASSWORD))

        result = await harness.login(email="  READER@example.com")

        assert isinstance(result, Success)

    @pytest.mark.asyncio
    async def test_success_is_audited_and_committed(self):
        harness = Harness(make_user(password=PASSWORD))

        await harness.login()

        assert [a.success for a in harness.attempts.attempts] == [True]
        assert harness.attempts.attempts[0].ip_address == "198.51.100.4"
        assert harness.uow.commits == 1
        assert "login_succeeded" in harness.logger.events("info")


@pytest.mark.unit
class TestAuthenticateUserHandlerInvalidCredentials:
    @pytest.mark.asyncio
    async def test_unknown_email_and_wrong_password_are_indistinguishable(self):
        harness = Harness(make_user(password=PASSWORD))

        unknown = await harness.login(email="ghost@example.com")
        wrong = await harness.login(password="NotThePassword1!")

        assert isinstance(unknown, Failure)
        assert isinstance(wrong, Failure)
        assert unknown.error == wrong.error
        assert unknown.error.code == ErrorCode.INVALID_CREDENTIALS
        assert unknown.error.message == "Invalid email or password"

    @pytest.mark.asyncio
    async def test_unknown_email_still_pays_hashing_cost(self):
        harness = Harness()

        await harness.login(email="ghost@example.com")

        assert harness.passwords.dummy_calls == 1
        assert harness.attempts.reasons == [FailureReason.UNKNOWN_IDENTITY]
        assert harness.uow.commits == 1

    @pytest.mark.asyncio
    async def test_wrong_password_increments_counter(self):
        user = make_user(password=PASSWORD)
        harness = Harness(user)

        await harness.login(password="wrong")

        assert harness.users.get(user.id).failed_login_attempts == 1
        assert harness.attempts.reasons == [FailureReason.INVALID_PASSWORD]


@pytest.mark.unit
class TestAuthenticateUserHandlerLockout:
    @pytest.mark.asyncio
    async def test_fifth_failure_locks_and_reports_retry_after(self):
        user = make_user(password=PASSWORD)
        harness = Harness(user)

        for _ in range(4):
            result = await harness.login(password="wrong")
            assert result.error.code == ErrorCode.INVALID_CREDENTIALS

        result = await harness.login(password="wrong")

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.ACCOUNT_LOCKED
        assert result.error.retry_after_seconds == 900
        assert harness.users.get(user.id).is_locked()

    @pytest.mark.asyncio
    async def test_locked_identity_rejects_correct_password_without_hashing(self):
        user = make_user(password=PASSWORD)
        harness = Harness(user)
        for _ in range(5):
            await harness.login(password="wrong")
        verifications = harness.passwords.verify_calls

        result = await harness.login()

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.ACCOUNT_LOCKED
        assert 0 < result.error.retry_after_seconds <= 900
        assert harness.passwords.verify_calls == verifications
        assert harness.attempts.reasons[-1] == FailureReason.ACCOUNT_LOCKED
        assert harness.users.get(user.id).failed_login_attempts == 5

    @pytest.mark.asyncio
    async def test_login_succeeds_after_lock_window_passes(self):
        user = make_user(password=PASSWORD)
        harness = Harness(user)
        for _ in range(5):
            await harness.login(password="wrong")
        harness.users.get(user.id).locked_until = datetime.now(UTC) - timedelta(seconds=1)

        result = await harness.login()

        assert isinstance(result, Success)
        assert harness.users.get(user.id).failed_login_attempts == 0
        assert harness.users.get(user.id).locked_until is None

    @pytest.mark.asyncio
    async def test_wrong_password_after_expired_lock_starts_new_count(self):
        user = make_user(password=PASSWORD)
        harness = Harness(user)
        for _ in range(5):
            await harness.login(password="wrong")
        harness.users.get(user.id).locked_until = datetime.now(UTC) - timedelta(seconds=1)

        result = await harness.login(password="wrong")

        assert result.error.code == ErrorCode.INVALID_CREDENTIALS
        assert harness.users.get(user.id).failed_login_attempts == 1

    @pytest.mark.asyncio
    async def test_success_resets_counter(self):
        user = make_user(password=PASSWORD)
        harness = Harness(user)
        for _ in range(4):
            await harness.login(password="wrong")

        assert isinstance(await harness.login(), Success)
        for _ in range(4):
            result = await harness.login(password="wrong")

        assert result.error.code == ErrorCode.INVALID_CREDENTIALS
        assert harness.users.get(user.id).failed_login_attempts == 4

    @pytest.mark.asyncio
    async def test_concurrent_failures_are_all_counted(self):
        user = make_user(password=PASSWORD)
        harness = Harness(user)

        results = await asyncio.gather(
            *(harness.login(password="wrong") for _ in range(10))
        )

        codes = [r.error.code for r in results]
        assert harness.users.get(user.id).failed_login_attempts == 10
        assert codes.count(ErrorCode.INVALID_CREDENTIALS) == 4
        assert codes.count(ErrorCode.ACCOUNT_LOCKED) == 6
        assert len(harness.attempts.attempts) == 10


@pytest.mark.unit
class TestAuthenticateUserHandlerStoreFailure:
    @pytest.mark.asyncio
    async def test_store_failure_returns_store_unavailable(self):
        users = AsyncMock()
        users.find_by_email.side_effect = StoreUnavailable("users.find_by_email")
        harness = Harness(user_repo=users)

        result = await harness.login()

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.STORE_UNAVAILABLE
        assert result.error.message == "Service temporarily unavailable"
        assert harness.uow.rollbacks == 1
        assert harness.uow.commits == 0
        assert harness.logger.context_of("login_store_unavailable")["operation"] == (
            "users.find_by_email"
        )
