"""
WebSocket authentication middleware.

Authenticates WebSocket connections with identity-provider access tokens,
using the same userinfo flow as the HTTP API (authentication.oidc).

Related files:
    - routing.py: WebSocket URL patterns
    - consumers.py: WebSocket handlers
    - config/asgi.py: ASGI configuration

Token Passing Methods (in order of precedence):
    1. Query string: ws://host/ws/chat/?token=<token>
    2. Header: Authorization: Bearer <token>
    3. Subprotocol: Sec-WebSocket-Protocol: bearer.<token>

Usage in config/asgi.py:
    from chat.middleware import OIDCAuthMiddleware

    application = ProtocolTypeRouter({
        "websocket": OIDCAuthMiddleware(
            URLRouter(websocket_urlpatterns)
        ),
    })
"""

from __future__ import annotations

import logging
from urllib.parse import parse_qs

from channels.db import database_sync_to_async
from channels.middleware import BaseMiddleware
from django.contrib.auth.models import AnonymousUser

from authentication.models import User
from authentication.oidc import TokenVerificationError, verify_token
from chat.constants import REALTIME_CONFIG

logger = logging.getLogger(__name__)


def get_token_from_scope(scope) -> str | None:
    """Extract the access token from query string, header or subprotocol."""
    query_string = scope.get("query_string", b"").decode()
    token_list = parse_qs(query_string).get("token", [])
    if token_list and token_list[0]:
        return token_list[0]

    for name, value in scope.get("headers", []):
        if name.lower() == b"authorization":
            parts = value.decode().split()
            if len(parts) == 2 and parts[0].lower() == "bearer":
                return parts[1]

    prefix = REALTIME_CONFIG.SUBPROTOCOL_TOKEN_PREFIX
    for subprotocol in scope.get("subprotocols", []):
        if subprotocol.startswith(prefix) and len(subprotocol) > len(prefix):
            return subprotocol[len(prefix) :]

    return None


class OIDCAuthMiddleware(BaseMiddleware):
    """
    Attach the local user for the connection's access token to scope["user"].

    Unknown tokens, tokens of users who have not bootstrapped and inactive
    users all get AnonymousUser; the consumer closes those connections.
    """

    async def __call__(self, scope, receive, send):
        scope = dict(scope)
        token = get_token_from_scope(scope)
        if token:
            scope["user"] = await self._get_user_from_token(token)
        else:
            scope["user"] = AnonymousUser()

        return await super().__call__(scope, receive, send)

    @database_sync_to_async
    def _get_user_from_token(self, token: str):
        try:
            userinfo = verify_token(token)
        except TokenVerificationError as e:
            logger.info(f"WebSocket token rejected: {e.message}")
            return AnonymousUser()

        user = User.objects.filter(auth_user_id=userinfo.sub).first()
        if user is None:
            logger.info(f"WebSocket user not bootstrapped: {userinfo.sub}")
            return AnonymousUser()
        if not user.is_active:
            logger.warning(f"Inactive user attempted WebSocket connection: {user.pk}")
            return AnonymousUser()

        return user
