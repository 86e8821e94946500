# storefront/core/security.py
import hashlib
import hmac
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt

from storefront.core.config import Settings
from storefront.core.errors import Unauthorized

PBKDF2_ITERATIONS = 200_000


def hash_password(password: str, salt: str | None = None) -> str:
    """
    Salted PBKDF2-SHA256 hash, stored as "<salt>$<hexdigest>".
    """
    salt = salt or secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac(
        "sha256", password.encode(), salt.encode(), PBKDF2_ITERATIONS
    )
    return f"{salt}${digest.hex()}"


def verify_password(password: str, stored: str) -> bool:
    salt, sep, _ = stored.partition("$")
    if not sep:
        return False
    return hmac.compare_digest(hash_password(password, salt), stored)


def create_access_token(settings: Settings, subject: str) -> str:
    """
    Issue a signed bearer token whose `sub` is the user id.
    """
    expire = datetime.now(timezone.utc) + timedelta(
        days=settings.ACCESS_TOKEN_EXPIRE_DAYS
    )
    claims = {"sub": subject, "exp": expire}
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALG)


def decode_access_token(settings: Settings, token: str) -> dict[str, Any]:
    """
    Decode and verify a bearer token (signature + exp).

    Raises:
        Unauthorized: if token is invalid/expired.
    """
    try:
        return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALG])
    except JWTError:
        raise Unauthorized("Invalid token")
