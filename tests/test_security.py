import pytest
from datetime import datetime, timedelta
import jwt

from dental_clinic.core.config import settings
from dental_clinic.core.permissions import Permissions
from dental_clinic.core.security import (
    get_password_hash,
    verify_password,
    create_access_token,
    create_password_reset_token,
    verify_token,
    ACCESS_TOKEN,
    PASSWORD_RESET_TOKEN,
)


@pytest.mark.unit
@pytest.mark.auth
class TestPasswordHashing:
    """Test password hashing helpers."""

    def test_hash_and_verify(self) -> None:
        hashed = get_password_hash("s3cret-pass")

        assert hashed != "s3cret-pass"
        assert verify_password("s3cret-pass", hashed)
        assert not verify_password("wrong-pass", hashed)

    def test_verify_without_hash(self) -> None:
        """Accounts without a password never verify."""
        assert not verify_password("anything", None)
        assert not verify_password("anything", "")

    def test_verify_malformed_hash(self) -> None:
        assert not verify_password("anything", "not-a-bcrypt-hash")


@pytest.mark.unit
@pytest.mark.auth
class TestTokens:
    """Test JWT creation and verification."""

    def test_access_token_round_trip(self) -> None:
        token = create_access_token("user-1", {"email": "a@clinic.pt"})
        payload = verify_token(token, ACCESS_TOKEN)

        assert payload["sub"] == "user-1"
        assert payload["email"] == "a@clinic.pt"
        assert payload["token_type"] == ACCESS_TOKEN

    def test_token_type_must_match(self) -> None:
        """A reset token cannot be used as an access token and vice versa."""
        reset_token = create_password_reset_token("user-1", "a@clinic.pt")
        access_token = create_access_token("user-1")

        assert verify_token(reset_token, ACCESS_TOKEN) is None
        assert verify_token(access_token, PASSWORD_RESET_TOKEN) is None
        assert verify_token(reset_token, PASSWORD_RESET_TOKEN) is not None

    def test_reset_token_expires_after_configured_minutes(self) -> None:
        token = create_password_reset_token("user-1", "a@clinic.pt")
        payload = verify_token(token, PASSWORD_RESET_TOKEN)

        lifetime = payload["exp"] - payload["iat"]
        assert lifetime == settings.PASSWORD_RESET_TOKEN_EXPIRE_MINUTES * 60

    def test_expired_token_rejected(self) -> None:
        token = jwt.encode(
            {
                "sub": "user-1",
                "token_type": ACCESS_TOKEN,
                "exp": datetime.utcnow() - timedelta(minutes=1),
            },
            settings.SECRET_KEY,
            algorithm=settings.ALGORITHM,
        )

        assert verify_token(token, ACCESS_TOKEN) is None

    def test_tampered_token_rejected(self) -> None:
        token = create_access_token("user-1")
        forged = jwt.encode(
            jwt.decode(token, options={"verify_signature": False}),
            "another-secret",
            algorithm=settings.ALGORITHM,
        )

        assert verify_token(forged, ACCESS_TOKEN) is None


@pytest.mark.unit
class TestPermissionCatalogue:

    def test_all_lists_every_permission(self) -> None:
        permissions = Permissions.all()

        assert Permissions.ADMIN_ACCESS in permissions
        assert Permissions.REPORTS_READ in permissions
        assert len(permissions) == len(set(permissions))
        assert all("." in perm for perm in permissions)
