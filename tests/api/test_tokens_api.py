"""API tests for POST /api/v1/tokens (refresh rotation).

Every rejection answers the same 401 so callers cannot tell an unknown
token from a reused or expired one.
"""

from datetime import UTC, datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from uuid_extensions import uuid7

from lectern.application.dtos import AuthTokens
from lectern.core.container import get_refresh_access_token_handler
from lectern.core.enums import ErrorCode
from lectern.core.result import Failure, Success
from lectern.domain.errors import StoreUnavailableError, TokenError
from lectern.main import app
from tests.api.stubs import StubHandler

REFRESH_TOKEN = "refresh_value_abcdefghijklmnop"


@pytest.fixture(autouse=True)
def override_dependencies():
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    return TestClient(app, raise_server_exceptions=False)


def use_handler(result):
    handler = StubHandler(result)
    app.dependency_overrides[get_refresh_access_token_handler] = lambda: handler
    return handler


@pytest.mark.api
class TestCreateTokens:
    def test_rotation_success(self, client):
        handler = use_handler(
            Success(
                value=AuthTokens(
                    access_token="eyJ.new.access",
                    refresh_token="new_refresh_value_abcdefghij",
                    refresh_token_id=uuid7(),
                    refresh_expires_at=datetime.now(UTC) + timedelta(days=7),
                )
            )
        )

        response = client.post("/api/v1/tokens", json={"refresh_token": REFRESH_TOKEN})

        assert response.status_code == 201
        assert response.json() == {
            "access_token": "eyJ.new.access",
            "refresh_token": "new_refresh_value_abcdefghij",
            "token_type": "bearer",
            "expires_in": 900,
        }
        assert handler.commands[0].device is None

    def test_device_id_builds_new_device_context(self, client):
        handler = use_handler(
            Failure(error=TokenError(code=ErrorCode.TOKEN_INVALID, message="x"))
        )

        client.post(
            "/api/v1/tokens",
            json={"refresh_token": REFRESH_TOKEN, "device_id": "web-2"},
            headers={"User-Agent": "Browser/9"},
        )

        device = handler.commands[0].device
        assert device.device_id == "web-2"
        assert device.user_agent == "Browser/9"

    @pytest.mark.parametrize(
        "code",
        [ErrorCode.TOKEN_INVALID, ErrorCode.TOKEN_EXPIRED, ErrorCode.IDENTITY_NOT_FOUND],
    )
    def test_every_rejection_looks_the_same(self, client, code):
        use_handler(Failure(error=TokenError(code=code, message="internal reason")))

        response = client.post("/api/v1/tokens", json={"refresh_token": REFRESH_TOKEN})

        assert response.status_code == 401
        data = response.json()
        assert data["type"].endswith("/errors/invalid_refresh_token")
        assert data["title"] == "Authentication Required"
        assert data["detail"] == "Refresh token is invalid or expired"
        assert "internal reason" not in response.text

    def test_store_unavailable_is_503(self, client):
        use_handler(
            Failure(
                error=StoreUnavailableError(
                    code=ErrorCode.STORE_UNAVAILABLE, message=StoreUnavailableError.MESSAGE
                )
            )
        )

        response = client.post("/api/v1/tokens", json={"refresh_token": REFRESH_TOKEN})

        assert response.status_code == 503

    def test_short_token_is_422(self, client):
        use_handler(Success(value=None))

        response = client.post("/api/v1/tokens", json={"refresh_token": "short"})

        assert response.status_code == 422
