"""Bcrypt password hashing service (adapter).

Implements PasswordHashingProtocol using bcrypt with a configurable cost
factor (Settings.bcrypt_rounds).

Security:
    - Adaptive algorithm (raise the cost as hardware improves)
    - checkpw compares in constant time
    - dummy_verify gives lookup misses the same cost as a wrong password

Performance (reference hardware):
    - 10 = ~60ms, 11 = ~125ms, 12 = ~250ms
"""

import bcrypt

from lectern.domain.validators import BCRYPT_MAX_BYTES

# Verified against when no user matches; never equal to any real secret's hash
_PLACEHOLDER_SECRET = b"lectern-placeholder-secret-for-timing"


class BcryptPasswordService:
    """Bcrypt password hashing service.

    Usage:
        from lectern.core.container import get_password_service

        password_service = get_password_service()
        password_hash = password_service.hash_password("SecurePass123!")
        password_service.verify_password("SecurePass123!", password_hash)  # True
    """

    def __init__(self, cost_factor: int = 12) -> None:
        """Initialize bcrypt password service.

        Args:
            cost_factor: Bcrypt cost factor, 10..20. Each +1 doubles the work.

        Raises:
            ValueError: If cost_factor is outside 10..20.
        """
        if cost_factor < 10:
            msg = "Cost factor must be at least 10 for security"
            raise ValueError(msg)
        if cost_factor > 20:
            msg = "Cost factor above 20 is impractically slow"
            raise ValueError(msg)
        self._cost_factor = cost_factor
        # Same cost as real hashes so dummy and real checks take equal time
        self._placeholder_hash = bcrypt.hashpw(
            _PLACEHOLDER_SECRET, bcrypt.gensalt(rounds=cost_factor)
        )

    @property
    def cost_factor(self) -> int:
        return self._cost_factor

    def hash_password(self, password: str) -> str:
        """Hash a plaintext password using bcrypt.

        Args:
            password: Plaintext password (at most 72 bytes UTF-8).

        Returns:
            Hashed password string (60 characters, $2b$<cost>$...).

        Raises:
            ValueError: If the password exceeds 72 bytes.
        """
        salt = bcrypt.gensalt(rounds=self._cost_factor)
        password_hash = bcrypt.hashpw(password.encode("utf-8"), salt)
        return password_hash.decode("utf-8")

    def verify_password(self, password: str, password_hash: str) -> bool:
        """Verify a plaintext password against a bcrypt hash.

        Returns False (never raises) for a malformed hash or an over-long
        secret. An over-long secret still pays the hashing cost.

        Example:
            >>> service.verify_password("SecurePass123!", "invalid_hash")
            False
        """
        secret = password.encode("utf-8")
        if len(secret) > BCRYPT_MAX_BYTES:
            self.dummy_verify(password)
            return False
        try:
            return bcrypt.checkpw(secret, password_hash.encode("utf-8"))
        except (ValueError, AttributeError):
            return False

    def dummy_verify(self, password: str) -> bool:
        """Run one bcrypt check against the placeholder hash.

        Always returns False.
        """
        secret = password.encode("utf-8")[:BCRYPT_MAX_BYTES]
        try:
            bcrypt.checkpw(secret, self._placeholder_hash)
        except ValueError:
            pass
        return False
