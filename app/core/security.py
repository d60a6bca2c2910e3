"""Password hashing and JWT creation/verification for authentication."""

from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from app.core.config import settings

# bcrypt only looks at the first 72 bytes of its input; longer passwords are rejected, not cut.
BCRYPT_MAX_BYTES = 72

# Max lengths for request validation.
USERNAME_MAX_LEN = 255
EMAIL_MAX_LEN = 320
PASSWORD_MAX_LEN = BCRYPT_MAX_BYTES


class HashingError(Exception):
    """Raised when bcrypt fails internally while hashing. Not a credential mismatch."""


def password_fits_bcrypt(plain_password: str) -> bool:
    """True if the UTF-8 encoding is within bcrypt's 72-byte input limit."""
    return len(plain_password.encode("utf-8")) <= BCRYPT_MAX_BYTES


def hash_password(plain_password: str, rounds: int | None = None) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    if not password_fits_bcrypt(plain_password):
        raise HashingError(f"Password exceeds {BCRYPT_MAX_BYTES} bytes")
    pw_bytes = plain_password.encode("utf-8")
    cost = rounds if rounds is not None else settings.BCRYPT_ROUNDS
    try:
        return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=cost)).decode("utf-8")
    except (ValueError, TypeError) as e:
        raise HashingError(f"Password hashing failed: {e}") from e


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash. Nothing over 72 bytes was ever stored."""
    if not password_fits_bcrypt(plain_password):
        return False
    pw_bytes = plain_password.encode("utf-8")
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def create_access_token(
    claims: dict[str, Any],
    secret: str | None = None,
    ttl: timedelta | None = None,
    algorithm: str | None = None,
    issued_at: datetime | None = None,
) -> str:
    """
    Create a JWT carrying claims (id, email, role) plus iat and exp = iat + ttl.

    secret, ttl and algorithm default to JWT_SECRET, JWT_EXPIRE_MINUTES and JWT_ALGORITHM.
    """
    now = issued_at or datetime.now(UTC)
    if ttl is None:
        ttl = timedelta(minutes=settings.JWT_EXPIRE_MINUTES)
    payload: dict[str, Any] = {
        **claims,
        "iat": now,
        "exp": now + ttl,
    }
    if secret is None:
        secret = settings.JWT_SECRET.get_secret_value()
    return jwt.encode(
        payload,
        secret,
        algorithm=algorithm or settings.JWT_ALGORITHM,
    )


def decode_access_token(
    token: str,
    secret: str | None = None,
    algorithm: str | None = None,
) -> dict[str, Any]:
    """
    Decode and validate JWT; return payload (id, email, role, exp, iat).
    Raises jwt.PyJWTError on invalid or expired token.
    """
    if secret is None:
        secret = settings.JWT_SECRET.get_secret_value()
    return jwt.decode(
        token,
        secret,
        algorithms=[algorithm or settings.JWT_ALGORITHM],
    )
