"""Password hashing protocol for domain layer.

Infrastructure provides the bcrypt adapter (BcryptPasswordService).
"""

from typing import Protocol


class PasswordHashingProtocol(Protocol):
    """Password hashing and verification interface.

    Usage:
        password_hash = hasher.hash_password("SecurePass123!")
        hasher.verify_password("SecurePass123!", password_hash)  # True
        hasher.dummy_verify("anything")  # False, same cost as a real check
    """

    def hash_password(self, password: str) -> str:
        """Hash a plaintext password.

        Args:
            password: Plaintext password to hash.

        Returns:
            Hashed password string (bcrypt format: $2b$10$...).

        Raises:
            ValueError: If the password cannot be hashed. Callers let this
                propagate; a missing hash is never silently stored.
        """
        ...

    def verify_password(self, password: str, password_hash: str) -> bool:
        """Verify a plaintext password against a hash.

        Constant-time comparison. Returns False for an invalid hash format.
        """
        ...

    def dummy_verify(self, password: str) -> bool:
        """Verify against a fixed placeholder hash.

        Spends the same work factor as verify_password so a lookup miss takes
        as long as a wrong password. Always returns False.
        """
        ...
