"""Domain protocols (ports).

Application code depends on these; infrastructure and test doubles
implement them structurally.
"""

from lectern.domain.protocols.email_protocol import EmailProtocol
from lectern.domain.protocols.email_verification_token_repository import (
    EmailVerificationTokenData,
    EmailVerificationTokenRepository,
)
from lectern.domain.protocols.email_verification_token_service_protocol import (
    EmailVerificationTokenServiceProtocol,
)
from lectern.domain.protocols.logger_protocol import LoggerProtocol
from lectern.domain.protocols.login_attempt_repository import LoginAttemptRepository
from lectern.domain.protocols.password_hashing_protocol import PasswordHashingProtocol
from lectern.domain.protocols.refresh_token_repository import (
    RefreshTokenData,
    RefreshTokenRepository,
)
from lectern.domain.protocols.refresh_token_service_protocol import (
    RefreshTokenServiceProtocol,
)
from lectern.domain.protocols.token_generation_protocol import TokenGenerationProtocol
from lectern.domain.protocols.unit_of_work import UnitOfWork
from lectern.domain.protocols.user_repository import LockoutState, UserRepository

__all__ = [
    "EmailProtocol",
    "EmailVerificationTokenData",
    "EmailVerificationTokenRepository",
    "EmailVerificationTokenServiceProtocol",
    "LockoutState",
    "LoggerProtocol",
    "LoginAttemptRepository",
    "PasswordHashingProtocol",
    "RefreshTokenData",
    "RefreshTokenRepository",
    "RefreshTokenServiceProtocol",
    "TokenGenerationProtocol",
    "UnitOfWork",
    "UserRepository",
]
