"""Unit tests for JWTService."""

from uuid import uuid4

import pytest

from port42.config import AuthSettings
from port42.domain.service import JWTService
from port42.util.jwt import JWTError, create_token

SETTINGS = AuthSettings(jwt_secret="unit-test-secret")


class TestVerifyToken:
    """Tests for token verification."""

    def test_valid_token_yields_user_id(self):
        """A token signed with the configured secret identifies its user."""
        # Arrange
        service = JWTService(SETTINGS)
        user_id = uuid4()
        token = create_token(str(user_id), "alice", SETTINGS)

        # Act
        payload = service.verify_token(token)

        # Assert
        assert payload.username == "alice"
        assert service.get_user_id_from_token(token) == user_id

    def test_expired_token_is_rejected(self):
        """Expired tokens raise, and read as anonymous."""
        # Arrange
        service = JWTService(SETTINGS)
        expired = create_token(
            str(uuid4()), "alice", SETTINGS.model_copy(update={"jwt_expiry_days": -1})
        )

        # Act & Assert
        with pytest.raises(JWTError, match="expired"):
            service.verify_token(expired)
        assert service.get_user_id_from_token(expired) is None

    @pytest.mark.parametrize(
        "token",
        [
            None,
            "",
            "not-a-jwt",
            create_token(str(uuid4()), "mallory", AuthSettings(jwt_secret="other")),
        ],
    )
    def test_unusable_token_is_anonymous(self, token):
        """Missing, malformed and foreign-signed tokens give no user."""
        # Act & Assert
        assert JWTService(SETTINGS).get_user_id_from_token(token) is None
