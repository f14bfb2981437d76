"""Token issuer: mints an access/refresh pair bound to a device.

The access token is stateless. The refresh token's digest is staged in the
caller's transaction together with the device context.
"""

from uuid import UUID

from lectern.application.dtos import AuthTokens
from lectern.domain.protocols import (
    RefreshTokenRepository,
    RefreshTokenServiceProtocol,
    TokenGenerationProtocol,
)
from lectern.domain.value_objects import DeviceContext


class TokenIssuer:
    """Issue access and refresh credentials.

    Args:
        token_service: Access token signer.
        refresh_token_service: Opaque token generator and digester.
        refresh_token_repo: Refresh token store.
    """

    def __init__(
        self,
        token_service: TokenGenerationProtocol,
        refresh_token_service: RefreshTokenServiceProtocol,
        refresh_token_repo: RefreshTokenRepository,
    ) -> None:
        self._token_service = token_service
        self._refresh_token_service = refresh_token_service
        self._refresh_token_repo = refresh_token_repo

    async def issue(
        self,
        user_id: UUID,
        email: str,
        device: DeviceContext,
        rotation_count: int = 0,
    ) -> AuthTokens:
        """Mint a pair and stage the refresh row.

        Args:
            user_id: Owner of the new credentials.
            email: Owner email (access token claim).
            device: Device context stored with the refresh token.
            rotation_count: Rotations since login (0 for a fresh login).

        Returns:
            AuthTokens with the raw refresh value (the only time it is seen).
        """
        access_token = self._token_service.generate_access_token(
            user_id=user_id, email=email
        )
        refresh_token, token_hash = self._refresh_token_service.generate_token()
        stored = await self._refresh_token_repo.save(
            user_id=user_id,
            token_hash=token_hash,
            expires_at=self._refresh_token_service.calculate_expiration(),
            device=device,
            rotation_count=rotation_count,
        )
        return AuthTokens(
            access_token=access_token,
            refresh_token=refresh_token,
            refresh_token_id=stored.id,
            refresh_expires_at=stored.expires_at,
            expires_in=self._token_service.access_token_expire_seconds,
        )
