"""Credential verification service.

Looks up an identity by normalized email and checks a secret against its
hash. A lookup miss and a wrong secret produce the same failure and the
same hashing cost.
"""

from lectern.core.enums import ErrorCode
from lectern.core.result import Failure, Result, Success
from lectern.domain.entities.user import User
from lectern.domain.errors import AuthenticationError
from lectern.domain.protocols import PasswordHashingProtocol, UserRepository
from lectern.domain.validators import normalize_email


def invalid_credentials() -> AuthenticationError:
    """The single failure used for unknown email and wrong secret alike."""
    return AuthenticationError(
        code=ErrorCode.INVALID_CREDENTIALS,
        message=AuthenticationError.INVALID_CREDENTIALS_MESSAGE,
    )


class CredentialVerifier:
    """Identity lookup plus constant-cost secret verification.

    Lookup and verification are separate calls because the lockout
    pre-check runs between them.

    Usage:
        user = await verifier.lookup(email)
        # lockout pre-check here
        match verifier.authenticate(user, secret):
            case Success(value=user): ...
            case Failure(error=error): ...
    """

    def __init__(
        self,
        user_repo: UserRepository,
        password_service: PasswordHashingProtocol,
    ) -> None:
        self._user_repo = user_repo
        self._password_service = password_service

    @staticmethod
    def normalize_email(email: str) -> str:
        return normalize_email(email)

    async def lookup(self, email: str) -> User | None:
        """Find the identity for an email (normalized before lookup)."""
        return await self._user_repo.find_by_email(normalize_email(email))

    def authenticate(
        self, user: User | None, secret: str
    ) -> Result[User, AuthenticationError]:
        """Verify a secret for a looked-up identity.

        When ``user`` is None a dummy verification runs so the miss costs
        the same as a real check.

        Returns:
            Success(user) on a match, Failure(INVALID_CREDENTIALS) otherwise.
        """
        if user is None:
            self._password_service.dummy_verify(secret)
            return Failure(error=invalid_credentials())
        if not self._password_service.verify_password(secret, user.password_hash):
            return Failure(error=invalid_credentials())
        return Success(value=user)
