"""Unit tests for JWT helpers."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from arena.config import AuthSettings
from arena.domain.service import JWTService
from arena.util.jwt import JWTError, create_token, verify_token

SETTINGS = AuthSettings(jwt_secret="unit-test-secret-long-enough-for-hs256")


class TestTokens:
    """Tests for token creation and verification."""

    def test_create_and_verify(self):
        """Should carry the artist uid as subject."""
        token = create_token("artist-1", SETTINGS)

        payload = verify_token(token, SETTINGS)

        assert payload.sub == "artist-1"
        assert payload.exp > datetime.now(timezone.utc)

    def test_wrong_secret(self):
        """Should reject tokens signed with another secret."""
        token = create_token("artist-1", AuthSettings(jwt_secret="another-secret-long-enough-for-hs256"))

        with pytest.raises(JWTError, match="Invalid token"):
            verify_token(token, SETTINGS)

    def test_expired(self):
        """Should reject expired tokens."""
        token = jwt.encode(
            {"sub": "artist-1", "exp": datetime.now(timezone.utc) - timedelta(1)},
            SETTINGS.jwt_secret,
            algorithm=SETTINGS.jwt_algorithm,
        )

        with pytest.raises(JWTError, match="expired"):
            verify_token(token, SETTINGS)


class TestJWTService:
    """Tests for JWTService.get_artist_uid_from_token."""

    def test_valid_token(self):
        service = JWTService(SETTINGS)

        assert service.get_artist_uid_from_token(service.create_token("a-1")) == "a-1"

    @pytest.mark.parametrize("token", [None, "", "garbage"])
    def test_missing_or_invalid(self, token):
        """Should return None instead of raising."""
        assert JWTService(SETTINGS).get_artist_uid_from_token(token) is None
