"""Unit tests for RefreshAccessTokenHandler (rotation).

Tests cover:
- Rotation consumes the old token and issues a new one
- Device context inherited unless a new one is supplied
- Reuse of a consumed token is rejected (reject-only, siblings untouched)
- Expired and orphaned tokens
- Concurrent rotation of one token: exactly one success
- Store failure leaves the presented token valid
"""

import asyncio
from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock

import pytest

from lectern.application.commands import RefreshAccessToken
from lectern.application.commands.handlers.refresh_access_token_handler import (
    RefreshAccessTokenHandler,
)
from lectern.application.services import TokenIssuer
from lectern.core.enums import ErrorCode
from lectern.core.result import Failure, Success
from lectern.domain.errors import StoreUnavailable
from lectern.domain.value_objects import DeviceContext
from tests.utils.in_memory_stores import (
    FakeRefreshTokenService,
    FakeTokenService,
    InMemoryRefreshTokenRepository,
    InMemoryUserRepository,
    RecordingLogger,
    RecordingUnitOfWork,
    make_user,
)

LOGIN_DEVICE = DeviceContext(device_id="ios-1", user_agent="Reader/1.0", ip_address="192.0.2.1")


class Harness:
    def __init__(self, *users):
        self.users = InMemoryUserRepository(*users)
        self.refresh_tokens = InMemoryRefreshTokenRepository()
        self.refresh_service = FakeRefreshTokenService()
        self.issuer = TokenIssuer(FakeTokenService(), self.refresh_service, self.refresh_tokens)
        self.uow = RecordingUnitOfWork()
        self.logger = RecordingLogger()
        self.handler = RefreshAccessTokenHandler(
            user_repo=self.users,
            refresh_token_repo=self.refresh_tokens,
            refresh_token_service=self.refresh_service,
            token_issuer=self.issuer,
            uow=self.uow,
            logger=self.logger,
        )

    async def login(self, user, device=LOGIN_DEVICE):
        return await self.issuer.issue(user.id, user.email, device)

    async def rotate(self, refresh_token, device=None):
        return await self.handler.handle(
            RefreshAccessToken(refresh_token=refresh_token, device=device)
        )


@pytest.mark.unit
class TestRefreshRotation:
    @pytest.mark.asyncio
    async def test_rotation_replaces_token(self):
        user = make_user()
        harness = Harness(user)
        issued = await harness.login(user)

        result = await harness.rotate(issued.refresh_token)

        assert isinstance(result, Success)
        assert result.value.refresh_token != issued.refresh_token
        assert harness.refresh_service.hash_token(issued.refresh_token) not in (
            harness.refresh_tokens.tokens
        )
        (stored,) = harness.refresh_tokens.tokens.values()
        assert stored.id == result.value.refresh_token_id
        assert stored.rotation_count == 1
        assert harness.uow.commits == 1

    @pytest.mark.asyncio
    async def test_rotation_inherits_device_context(self):
        user = make_user()
        harness = Harness(user)
        issued = await harness.login(user)

        await harness.rotate(issued.refresh_token)

        (stored,) = harness.refresh_tokens.tokens.values()
        assert stored.device == LOGIN_DEVICE

    @pytest.mark.asyncio
    async def test_rotation_with_new_device_context(self):
        user = make_user()
        harness = Harness(user)
        issued = await harness.login(user)
        new_device = DeviceContext(device_id="web-2", ip_address="192.0.2.99")

        await harness.rotate(issued.refresh_token, device=new_device)

        (stored,) = harness.refresh_tokens.tokens.values()
        assert stored.device == new_device

    @pytest.mark.asyncio
    async def test_rotation_count_grows_along_the_chain(self):
        user = make_user()
        harness = Harness(user)
        current = (await harness.login(user)).refresh_token

        for _ in range(3):
            current = (await harness.rotate(current)).value.refresh_token

        (stored,) = harness.refresh_tokens.tokens.values()
        assert stored.rotation_count == 3


@pytest.mark.unit
class TestRefreshRejections:
    @pytest.mark.asyncio
    async def test_reused_token_rejected_and_siblings_kept(self):
        user = make_user()
        harness = Harness(user)
        issued = await harness.login(user)
        other_device = await harness.login(user, DeviceContext(device_id="web-1"))
        rotated = await harness.rotate(issued.refresh_token)

        replay = await harness.rotate(issued.refresh_token)

        assert isinstance(replay, Failure)
        assert replay.error.code == ErrorCode.TOKEN_INVALID
        hashes = harness.refresh_tokens.tokens.keys()
        assert harness.refresh_service.hash_token(rotated.value.refresh_token) in hashes
        assert harness.refresh_service.hash_token(other_device.refresh_token) in hashes
        assert harness.uow.rollbacks == 1

    @pytest.mark.asyncio
    async def test_unknown_token_rejected(self):
        harness = Harness()

        result = await harness.rotate("never-issued-token-value")

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.TOKEN_INVALID
        assert result.error.message == "Invalid refresh token"

    @pytest.mark.asyncio
    async def test_expired_token_rejected_and_removed(self):
        user = make_user()
        harness = Harness(user)
        issued = await harness.login(user)
        token_hash = harness.refresh_service.hash_token(issued.refresh_token)
        harness.refresh_tokens.tokens[token_hash].expires_at = datetime.now(UTC) - timedelta(
            seconds=1
        )

        result = await harness.rotate(issued.refresh_token)

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.TOKEN_EXPIRED
        assert harness.refresh_tokens.tokens == {}
        assert harness.uow.commits == 1

    @pytest.mark.asyncio
    async def test_orphaned_token_rejected(self):
        user = make_user()
        harness = Harness(user)
        issued = await harness.login(user)
        await harness.users.delete(user.id)

        result = await harness.rotate(issued.refresh_token)

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.IDENTITY_NOT_FOUND
        assert harness.refresh_tokens.tokens == {}


@pytest.mark.unit
class TestRefreshConcurrency:
    @pytest.mark.asyncio
    async def test_concurrent_rotations_have_exactly_one_winner(self):
        user = make_user()
        harness = Harness(user)
        issued = await harness.login(user)

        results = await asyncio.gather(
            *(harness.rotate(issued.refresh_token) for _ in range(5))
        )

        winners = [r for r in results if isinstance(r, Success)]
        losers = [r for r in results if isinstance(r, Failure)]
        assert len(winners) == 1
        assert {r.error.code for r in losers} == {ErrorCode.TOKEN_INVALID}
        assert len(harness.refresh_tokens.tokens) == 1


@pytest.mark.unit
class TestRefreshStoreFailure:
    @pytest.mark.asyncio
    async def test_store_failure_reports_unavailable(self):
        refresh_tokens = AsyncMock()
        refresh_tokens.consume.side_effect = StoreUnavailable("refresh_tokens.consume")
        uow = RecordingUnitOfWork()
        handler = RefreshAccessTokenHandler(
            user_repo=InMemoryUserRepository(),
            refresh_token_repo=refresh_tokens,
            refresh_token_service=FakeRefreshTokenService(),
            token_issuer=AsyncMock(),
            uow=uow,
            logger=RecordingLogger(),
        )

        result = await handler.handle(RefreshAccessToken(refresh_token="some-token-value"))

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.STORE_UNAVAILABLE
        assert uow.rollbacks == 1
        assert uow.commits == 0
