import os
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from passlib.context import CryptContext

from clinic.core.config import get_bcrypt_rounds, get_jwt_expiration_hours


class PasswordHasher:
    """bcrypt credential hashing collaborator used by DoctorService.

    Verification is delegated to passlib, which compares digests in constant
    time. ``dummy_verify`` burns the same amount of work as a real check so an
    unknown login cannot be told apart from a wrong password by timing.
    """

    def __init__(self, rounds: Optional[int] = None) -> None:
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds or get_bcrypt_rounds(),
        )

    def hash(self, password: str) -> str:
        """Hash a plain text password."""
        return self._context.hash(password)

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        """Verify a password against its stored hash.

        A stored value that is not a recognizable hash never matches.
        """
        if not hashed_password:
            return False
        try:
            return self._context.verify(plain_password, hashed_password)
        except ValueError:
            return False

    def dummy_verify(self) -> None:
        self._context.dummy_verify()

    def is_hashed(self, value: str) -> bool:
        return bool(value) and self._context.identify(value) is not None


_default_hasher: Optional[PasswordHasher] = None


def get_password_hasher() -> PasswordHasher:
    """Return the process-wide hasher, built lazily from configuration."""
    global _default_hasher
    if _default_hasher is None:
        _default_hasher = PasswordHasher()
    return _default_hasher


# JWT configuration
def get_jwt_secret_key():
    """Get JWT secret key with production validation.

    In production (FLASK_ENV=production), JWT_SECRET_KEY must be set, must not
    be a known development default and must be at least 32 characters long.

    Raises:
        ValueError: If production deployment uses weak or missing JWT secret
    """
    secret = os.getenv("JWT_SECRET_KEY", "dev-jwt-secret-change-me")
    is_production = os.getenv("FLASK_ENV") == "production"

    if is_production:
        weak_secrets = ["dev-jwt-secret-change-me", "dev-secret-change-me", "secret123"]
        if secret in weak_secrets or len(secret) < 32:
            raise ValueError(
                "Production deployment requires strong JWT_SECRET_KEY (min 32 chars). "
                "Set JWT_SECRET_KEY environment variable."
            )

    return secret


JWT_ALGORITHM = "HS256"


def create_access_token(
    data: Dict[str, Any], expires_delta: Optional[timedelta] = None
) -> str:
    """Create a signed JWT access token carrying ``data`` plus an expiry."""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(hours=get_jwt_expiration_hours())
    )
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, get_jwt_secret_key(), algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """Decode and validate a JWT access token.

    Returns:
        Decoded payload if valid, None if invalid or expired
    """
    try:
        return jwt.decode(token, get_jwt_secret_key(), algorithms=[JWT_ALGORITHM])
    except jwt.PyJWTError:
        return None


def create_doctor_token(doctor_id: int, login: str, is_admin: bool = False) -> str:
    """Create a JWT token for an authenticated doctor."""
    token_data = {
        "sub": str(doctor_id),
        "login": login,
        "admin": bool(is_admin),
        "type": "access",
    }
    return create_access_token(token_data)


def get_doctor_from_token(token: str) -> Optional[Dict[str, Any]]:
    """Extract doctor identity from a JWT token, or None if it is unusable."""
    payload = decode_access_token(token)
    if payload is None:
        return None

    doctor_id = payload.get("sub")
    login = payload.get("login")
    if doctor_id is None or login is None:
        return None

    return {
        "doctor_id": int(doctor_id),
        "login": login,
        "is_admin": bool(payload.get("admin", False)),
    }
