"""Unit tests for CredentialVerifier.

Unknown email and wrong secret must be indistinguishable to the caller:
same error, same message, and one hashing operation each.
"""

import pytest

from lectern.application.services import CredentialVerifier
from lectern.core.enums import ErrorCode
from lectern.core.result import Failure, Success
from lectern.domain.errors import AuthenticationError
from tests.utils.in_memory_stores import (
    FakePasswordService,
    InMemoryUserRepository,
    make_user,
)


@pytest.mark.unit
class TestCredentialVerifierLookup:
    @pytest.mark.asyncio
    async def test_lookup_normalizes_email(self):
        user = make_user(email="reader@example.com")
        verifier = CredentialVerifier(InMemoryUserRepository(user), FakePasswordService())

        found = await verifier.lookup("  Reader@Example.COM ")

        assert found is not None
        assert found.id == user.id

    @pytest.mark.asyncio
    async def test_lookup_unknown_returns_none(self):
        verifier = CredentialVerifier(InMemoryUserRepository(), FakePasswordService())

        assert await verifier.lookup("nobody@example.com") is None


@pytest.mark.unit
class TestCredentialVerifierAuthenticate:
    def test_correct_secret_succeeds(self):
        user = make_user(password="SecurePass123!")
        verifier = CredentialVerifier(InMemoryUserRepository(user), FakePasswordService())

        result = verifier.authenticate(user, "SecurePass123!")

        assert isinstance(result, Success)
        assert result.value is user

    def test_wrong_secret_fails_generically(self):
        user = make_user(password="SecurePass123!")
        verifier = CredentialVerifier(InMemoryUserRepository(user), FakePasswordService())

        result = verifier.authenticate(user, "wrong")

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.INVALID_CREDENTIALS
        assert result.error.message == AuthenticationError.INVALID_CREDENTIALS_MESSAGE

    def test_unknown_identity_matches_wrong_secret(self):
        user = make_user(password="SecurePass123!")
        passwords = FakePasswordService()
        verifier = CredentialVerifier(InMemoryUserRepository(user), passwords)

        missing = verifier.authenticate(None, "whatever")
        wrong = verifier.authenticate(user, "whatever")

        assert isinstance(missing, Failure)
        assert missing.error == wrong.error
        assert passwords.dummy_calls == 1
        assert passwords.verify_calls == 1
