# storefront/core/session.py
"""
Session Resolver: request -> cart session id.

The session id is an opaque string that partitions carts; it is not an
authenticated identity. Lookup order:

  1. X-Session-Id header
  2. ?sessionId= query parameter
  3. "sessionId" field of the JSON body (POST/PUT)

When none is supplied, DEFAULT_SESSION_ID is used if configured (shared
demo cart); otherwise a fresh id is issued. The resolved id is echoed in
the X-Session-Id response header so clients can keep using it.
"""

import uuid

from fastapi import Depends, Header, Query, Response

from storefront.core.config import Settings
from storefront.dependencies import get_app_settings

SESSION_HEADER = "X-Session-Id"


def resolve_session_id(*candidates: str | None, default: str | None = None) -> str:
    for value in candidates:
        if value is not None and value.strip():
            return value.strip()
    if default:
        return default
    return uuid.uuid4().hex


class CartSession:
    def __init__(
        self,
        response: Response,
        settings: Settings,
        header_value: str | None,
        query_value: str | None,
    ):
        self.response = response
        self.settings = settings
        self.header_value = header_value
        self.query_value = query_value

    def resolve(self, body_value: str | None = None) -> str:
        session_id = resolve_session_id(
            self.header_value,
            self.query_value,
            body_value,
            default=self.settings.DEFAULT_SESSION_ID,
        )
        self.response.headers[SESSION_HEADER] = session_id
        return session_id


def get_cart_session(
    response: Response,
    settings: Settings = Depends(get_app_settings),
    x_session_id: str | None = Header(default=None, alias=SESSION_HEADER),
    session_id: str | None = Query(default=None, alias="sessionId"),
) -> CartSession:
    return CartSession(response, settings, x_session_id, session_id)
