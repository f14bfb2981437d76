"""API tests for the email-verifications resource.

Endpoints:
- POST /api/v1/email-verifications          (token in body)
- GET  /api/v1/email-verifications?token=   (link target)
- POST /api/v1/email-verifications/resends  (always 202)
"""

import pytest
from fastapi.testclient import TestClient
from uuid_extensions import uuid7

from lectern.application.dtos import VerifiedEmail
from lectern.core.container import (
    get_resend_verification_handler,
    get_verify_email_handler,
)
from lectern.core.enums import ErrorCode
from lectern.core.result import Failure, Success
from lectern.domain.errors import TokenError
from lectern.main import app
from tests.api.stubs import StubHandler

TOKEN = "ab" * 32


@pytest.fixture(autouse=True)
def override_dependencies():
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    return TestClient(app, raise_server_exceptions=False)


def use_verify(result):
    handler = StubHandler(result)
    app.dependency_overrides[get_verify_email_handler] = lambda: handler
    return handler


@pytest.mark.api
class TestVerifyEmail:
    def test_post_verifies(self, client):
        user_id = uuid7()
        handler = use_verify(Success(value=VerifiedEmail(user_id=user_id)))

        response = client.post("/api/v1/email-verifications", json={"token": TOKEN})

        assert response.status_code == 200
        assert response.json() == {
            "user_id": str(user_id),
            "message": "Email verified successfully.",
        }
        assert handler.commands[0].token == TOKEN

    def test_get_link_verifies(self, client):
        user_id = uuid7()
        handler = use_verify(Success(value=VerifiedEmail(user_id=user_id)))

        response = client.get("/api/v1/email-verifications", params={"token": TOKEN.upper()})

        assert response.status_code == 200
        assert response.json()["user_id"] == str(user_id)
        assert handler.commands[0].token == TOKEN

    @pytest.mark.parametrize(
        ("code", "status_code"),
        [
            (ErrorCode.TOKEN_INVALID, 404),
            (ErrorCode.TOKEN_EXPIRED, 410),
            (ErrorCode.TOKEN_ALREADY_CONSUMED, 409),
            (ErrorCode.IDENTITY_NOT_FOUND, 404),
            (ErrorCode.VERIFICATION_INCOMPLETE, 503),
        ],
    )
    def test_failures_map_to_status(self, client, code, status_code):
        use_verify(Failure(error=TokenError(code=code, message="reason")))

        response = client.post("/api/v1/email-verifications", json={"token": TOKEN})

        assert response.status_code == status_code
        assert response.json()["type"].endswith(f"/errors/{code.value}")

    def test_non_hex_token_is_422(self, client):
        use_verify(Success(value=None))

        response = client.post(
            "/api/v1/email-verifications", json={"token": "not-a-hex-token-zzzz"}
        )

        assert response.status_code == 422

    def test_get_without_token_is_422(self, client):
        use_verify(Success(value=None))

        response = client.get("/api/v1/email-verifications")

        assert response.status_code == 422


@pytest.mark.api
class TestResendVerification:
    def test_resend_is_202(self, client):
        handler = StubHandler(Success(value=None))
        app.dependency_overrides[get_resend_verification_handler] = lambda: handler

        response = client.post(
            "/api/v1/email-verifications/resends", json={"email": "Reader@Example.com"}
        )

        assert response.status_code == 202
        assert response.json()["message"] == (
            "If the address needs verification, a new link has been sent."
        )
        assert handler.commands[0].email == "reader@example.com"
