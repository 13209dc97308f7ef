"""JWT token domain service."""

import logfire

from arena.config import AuthSettings
from arena.domain.value import ArtistUid
from arena.util.jwt import TokenPayload, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Domain service for JWT token operations."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def create_token(self, artist_uid: str) -> str:
        """Create JWT token for an artist.

        Args:
            artist_uid: Artist uid

        Returns:
            JWT token string
        """
        with logfire.span("jwt_service.create_token", artist_uid=artist_uid):
            return create_token(artist_uid, self.auth_settings)

    def verify_token(self, token: str) -> TokenPayload:
        """Verify JWT token and extract payload.

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                payload = verify_token(token, self.auth_settings)
                logfire.debug("JWT token verified", artist_uid=payload.sub)
                return payload
            except Exception as e:
                logfire.warn("JWT token verification failed", error=str(e))
                raise

    def get_artist_uid_from_token(self, token: str | None) -> ArtistUid | None:
        """Extract the artist uid from a token without raising.

        Args:
            token: JWT token string (optional)

        Returns:
            Artist uid if token is valid, None if token is missing or invalid
        """
        if not token:
            return None

        try:
            payload = self.verify_token(token)
        except Exception:
            return None
        uid = payload.sub.strip()
        return ArtistUid(uid) if uid else None
