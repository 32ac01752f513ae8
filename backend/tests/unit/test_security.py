"""
Unit tests for password hashing and JWT helpers.
"""

from datetime import timedelta

import pytest

from clinic.core import security
from clinic.core.security import (
    PasswordHasher,
    create_access_token,
    create_doctor_token,
    decode_access_token,
    get_doctor_from_token,
    get_jwt_secret_key,
)


@pytest.fixture(scope="module")
def hasher():
    return PasswordHasher(rounds=4)


class TestPasswordHasher:
    def test_hash_and_verify(self, hasher):
        hashed = hasher.hash("s3cret!")

        assert hashed != "s3cret!"
        assert hashed.startswith("$2")
        assert hasher.verify("s3cret!", hashed)
        assert not hasher.verify("wrong", hashed)

    def test_same_password_hashes_differently(self, hasher):
        assert hasher.hash("same") != hasher.hash("same")

    @pytest.mark.parametrize("stored", ["", None, "plaintext"])
    def test_unusable_stored_values_never_match(self, hasher, stored):
        assert hasher.verify("plaintext", stored) is False

    def test_is_hashed(self, hasher):
        assert hasher.is_hashed(hasher.hash("pw"))
        assert not hasher.is_hashed("pw")
        assert not hasher.is_hashed("")

    def test_dummy_verify_does_not_raise(self, hasher):
        hasher.dummy_verify()

    def test_default_hasher_is_shared(self):
        assert security.get_password_hasher() is security.get_password_hasher()


class TestJWT:
    def test_doctor_token_round_trip(self):
        token = create_doctor_token(7, "abenov", is_admin=True)

        assert get_doctor_from_token(token) == {
            "doctor_id": 7,
            "login": "abenov",
            "is_admin": True,
        }

    def test_expired_token_is_rejected(self):
        token = create_access_token(
            {"sub": "7", "login": "abenov"}, expires_delta=timedelta(seconds=-1)
        )

        assert decode_access_token(token) is None
        assert get_doctor_from_token(token) is None

    def test_garbage_token_is_rejected(self):
        assert get_doctor_from_token("not.a.jwt") is None

    def test_token_without_identity_is_rejected(self):
        token = create_access_token({"type": "access"})

        assert get_doctor_from_token(token) is None

    def test_production_refuses_weak_secret(self, monkeypatch):
        monkeypatch.setenv("FLASK_ENV", "production")
        monkeypatch.setenv("JWT_SECRET_KEY", "secret123")

        with pytest.raises(ValueError, match="strong JWT_SECRET_KEY"):
            get_jwt_secret_key()

    def test_production_accepts_long_secret(self, monkeypatch):
        monkeypatch.setenv("FLASK_ENV", "production")
        monkeypatch.setenv("JWT_SECRET_KEY", "k" * 48)

        assert get_jwt_secret_key() == "k" * 48
