"""Security Helpers — password hashing and bearer-token encode/decode.

Invariants:
    - Passwords never stored in clear: "pbkdf2_sha256$<iterations>$<salt>$<hash>"
    - verify_password uses constant-time comparison
    - decode_access_token returns None for any invalid/expired token (never raises)

Design Decisions:
    - HS256 JWT via PyJWT with "sub" = user id and "exp" claim
    - Pure functions: secret and expiry passed in by the caller, no settings import
"""

import base64
import hashlib
import hmac
import secrets
from datetime import datetime, timedelta, timezone
from uuid import UUID

import jwt

from tracker.core.domain_types import UserId

_ALGORITHM_TAG = "pbkdf2_sha256"
_ITERATIONS = 260_000


def hash_password(password: str, iterations: int = _ITERATIONS) -> str:
    salt = secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac(
        "sha256", password.encode("utf-8"), salt.encode("utf-8"), iterations,
    )
    encoded = base64.b64encode(digest).decode("ascii")
    return f"{_ALGORITHM_TAG}${iterations}${salt}${encoded}"


def verify_password(password: str, stored: str) -> bool:
    """Check a clear password against a stored hash string."""
    try:
        tag, iterations, salt, encoded = stored.split("$", 3)
        rounds = int(iterations)
    except ValueError:
        return False
    if tag != _ALGORITHM_TAG:
        return False
    digest = hashlib.pbkdf2_hmac(
        "sha256", password.encode("utf-8"), salt.encode("utf-8"), rounds,
    )
    return hmac.compare_digest(
        base64.b64encode(digest).decode("ascii"), encoded,
    )


def create_access_token(
    user_id: UserId,
    secret_key: str,
    algorithm: str = "HS256",
    expires_minutes: int = 1440,
) -> str:
    expire = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes)
    payload = {"sub": str(user_id), "exp": expire}
    return jwt.encode(payload, secret_key, algorithm=algorithm)


def decode_access_token(
    token: str, secret_key: str, algorithm: str = "HS256",
) -> UserId | None:
    """Decode a bearer token into the user id it was issued for."""
    try:
        payload = jwt.decode(token, secret_key, algorithms=[algorithm])
    except jwt.InvalidTokenError:
        return None
    subject = payload.get("sub")
    if not subject:
        return None
    try:
        return UserId(UUID(subject))
    except ValueError:
        return None
