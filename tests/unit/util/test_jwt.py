"""Unit tests for session token verification."""

from datetime import timedelta

import pytest

from yard.config import AuthSettings
from yard.util.jwt import JWTError, create_token, verify_token


@pytest.fixture
def settings():
    return AuthSettings(jwt_secret="test-secret")


class TestVerifyToken:
    """Signature, audience and expiry checks."""

    def test_round_trips_subject_and_email(self, settings):
        # Arrange
        token = create_token("5f0c6a5e-8d7e-4b8a-9f4a-0d2c1f3b7e11", "carol@example.com", settings)

        # Act
        payload = verify_token(token, settings)

        # Assert
        assert payload.user_id == "5f0c6a5e-8d7e-4b8a-9f4a-0d2c1f3b7e11"
        assert payload.email == "carol@example.com"

    def test_expired_token_rejected(self, settings):
        # Arrange
        token = create_token("user", None, settings, expires_in=timedelta(seconds=-10))

        # Act & Assert
        with pytest.raises(JWTError, match="expired"):
            verify_token(token, settings)

    def test_wrong_secret_rejected(self, settings):
        # Arrange
        token = create_token("user", None, AuthSettings(jwt_secret="other-secret"))

        # Act & Assert
        with pytest.raises(JWTError):
            verify_token(token, settings)

    def test_wrong_audience_rejected(self, settings):
        # Arrange
        token = create_token(
            "user", None, AuthSettings(jwt_secret="test-secret", jwt_audience="anon")
        )

        # Act & Assert
        with pytest.raises(JWTError):
            verify_token(token, settings)

    def test_garbage_rejected(self, settings):
        with pytest.raises(JWTError):
            verify_token("not.a.token", settings)
