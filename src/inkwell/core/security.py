"""Password hashing and access-token helpers."""
from __future__ import annotations

from datetime import UTC, datetime, timedelta

from jose import jwt
from nacl import pwhash
from nacl.exceptions import InvalidkeyError

from inkwell.core.settings import settings


def hash_password(password: str) -> str:
    """Return an Argon2id hash of the provided password."""
    return pwhash.str(password.encode("utf-8")).decode("ascii")


def verify_password(password_hash: str, password: str) -> bool:
    """Check a password against a stored hash.

    Returns:
        True if ``password`` produced ``password_hash``; False otherwise.
    """
    try:
        return pwhash.verify(password_hash.encode("ascii"), password.encode("utf-8"))
    except InvalidkeyError:
        return False


def create_access_token(subject: int | str, extra_claims: dict[str, str] | None = None) -> str:
    """Create JWT access token for user authentication."""
    to_encode: dict[str, object] = {"sub": str(subject)}
    if extra_claims:
        to_encode.update(extra_claims)
    expire = datetime.now(UTC) + timedelta(minutes=settings.access_token_expire_minutes)
    to_encode["exp"] = expire
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt


def decode_access_token(token: str) -> str | None:
    """Return the subject claim of a valid token.

    Raises:
        jose.JWTError: If the token signature or expiry is invalid.
    """
    payload = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    subject = payload.get("sub")
    return str(subject) if subject is not None else None
