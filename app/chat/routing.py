"""
WebSocket URL routing for the chat application.

URL Patterns:
    ws/chat/ - Single socket per client; chats are joined with join_chat

Authentication:
    The access token is passed as ?token=<token>, an Authorization header,
    or a "bearer.<token>" subprotocol. OIDCAuthMiddleware validates it and
    attaches the user to the consumer's scope.
"""

from django.urls import path

from chat import consumers

websocket_urlpatterns = [
    path("ws/chat/", consumers.ChatConsumer.as_asgi()),
]
