# storefront/core/auth.py
import uuid

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from storefront.core.config import Settings
from storefront.core.errors import Forbidden, Unauthorized
from storefront.core.security import decode_access_token
from storefront.dependencies import get_app_settings, get_storage
from storefront.models.user import User
from storefront.storage import Storage

# HTTP Bearer scheme:
# - auto_error=False => missing Authorization header will NOT raise immediately
#   so we can support "guest" mode (unauthenticated).
bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    settings: Settings = Depends(get_app_settings),
    storage: Storage = Depends(get_storage),
) -> User | None:
    """
    Resolve the current user from a bearer token.

    Flow:
      1. If no Authorization header => guest => return None.
      2. Decode JWT => extract 'sub' (user id).
      3. Load the user row.

    Returns:
        User instance if authenticated, else None for guests.

    Raises:
        Unauthorized: token invalid/expired, malformed sub, or unknown user.
    """
    if credentials is None:
        return None  # guest mode

    payload = decode_access_token(settings, credentials.credentials)
    sub = payload.get("sub")
    if not sub:
        raise Unauthorized("Invalid token")

    try:
        user_id = uuid.UUID(sub)
    except ValueError:
        raise Unauthorized("Invalid token")

    user = storage.users.get_by_id(user_id)
    if user is None:
        raise Unauthorized("Invalid token")
    return user


def require_auth(user: User | None = Depends(get_current_user)) -> User:
    """
    Enforce authentication.

    Raises:
        Unauthorized: if user is None.
    """
    if user is None:
        raise Unauthorized("Access denied. No token provided.")
    return user


def require_admin(user: User = Depends(require_auth)) -> User:
    """
    Enforce admin role.

    Raises:
        Forbidden: if role is not admin.
    """
    if user.role != "admin":
        raise Forbidden("Admin access required")
    return user
