# core/security.py
"""
Security utilities for password hashing and session token management.
"""
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any

import bcrypt
from jose import JWTError, jwt

from config import settings

# JWT configuration
ALGORITHM = "HS256"
SESSION_TOKEN_EXPIRE_MINUTES = 60 * 12  # 12 hours

# Token IDs (jti) revoked by logout. Process-local, like the sessions they end.
_revoked_token_ids: set[str] = set()


def get_secret_key() -> str:
    """Get JWT secret key from settings or generate one for development."""
    secret = getattr(settings, 'SECRET_KEY', None)
    if secret:
        return secret
    # Development fallback - NOT for production!
    return "dev-secret-key-change-in-production-assetguard"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return bcrypt.checkpw(
        plain_password.encode('utf-8'),
        hashed_password.encode('utf-8')
    )


def get_password_hash(password: str) -> str:
    """Hash a password for storage."""
    salt = bcrypt.gensalt()
    return bcrypt.hashpw(password.encode('utf-8'), salt).decode('utf-8')


def create_session_token(
    data: dict[str, Any],
    expires_delta: timedelta | None = None
) -> str:
    """
    Create a signed session token.

    Args:
        data: Payload data to encode in the token (at least ``sub``)
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT string. Clients treat it as opaque.
    """
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=SESSION_TOKEN_EXPIRE_MINUTES)

    to_encode.update({
        "exp": expire,
        "type": "session",
        "jti": secrets.token_hex(16),
    })
    return jwt.encode(to_encode, get_secret_key(), algorithm=ALGORITHM)


def decode_token(token: str) -> dict[str, Any] | None:
    """
    Decode and validate a session token.

    Returns:
        Decoded payload dict if valid and not revoked, None otherwise
    """
    try:
        payload = jwt.decode(token, get_secret_key(), algorithms=[ALGORITHM])
    except JWTError:
        return None
    if payload.get("type") != "session":
        return None
    if payload.get("jti") in _revoked_token_ids:
        return None
    return payload


def revoke_token(token: str) -> bool:
    """Revoke a session token. Returns False if the token was not valid."""
    payload = decode_token(token)
    if payload is None:
        return False
    _revoked_token_ids.add(payload["jti"])
    return True
