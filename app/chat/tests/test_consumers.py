"""
Tests for the chat WebSocket consumer and its authentication middleware.

Sockets are driven with channels.testing.WebsocketCommunicator against
OIDCAuthMiddleware(URLRouter(...)), the same stack config/asgi.py serves
(minus the origin check). The channel layer is the in-memory layer.

These tests use transactional databases: the consumer reads the database
from worker threads, and broadcasts fire from on_commit.
"""

import pytest
from channels.db import database_sync_to_async
from channels.routing import URLRouter
from channels.testing import WebsocketCommunicator

from chat.middleware import OIDCAuthMiddleware, get_token_from_scope
from chat.routing import websocket_urlpatterns
from chat.services import ChatService, MessageService

pytestmark = pytest.mark.django_db(transaction=True)

application = OIDCAuthMiddleware(URLRouter(websocket_urlpatterns))


def communicator_for(token=None, headers=None, subprotocols=None):
    path = "/ws/chat/"
    if token:
        path = f"{path}?token={token}"
    return WebsocketCommunicator(
        application, path, headers=headers, subprotocols=subprotocols
    )


async def connected(token):
    communicator = communicator_for(token)
    is_connected, _ = await communicator.connect()
    assert is_connected
    return communicator


async def join(communicator, chat_id):
    await communicator.send_json_to({"type": "join_chat", "chatId": str(chat_id)})
    return await communicator.receive_json_from()


# =============================================================================
# Token extraction
# =============================================================================


class TestGetTokenFromScope:
    def test_query_string_wins(self):
        scope = {
            "query_string": b"token=from-query",
            "headers": [(b"authorization", b"Bearer from-header")],
            "subprotocols": ["bearer.from-protocol"],
        }

        assert get_token_from_scope(scope) == "from-query"

    def test_authorization_header(self):
        scope = {
            "query_string": b"",
            "headers": [(b"authorization", b"Bearer from-header")],
            "subprotocols": ["bearer.from-protocol"],
        }

        assert get_token_from_scope(scope) == "from-header"

    def test_subprotocol(self):
        scope = {"query_string": b"", "headers": [], "subprotocols": ["bearer.abc"]}

        assert get_token_from_scope(scope) == "abc"

    def test_no_token(self):
        scope = {"query_string": b"", "headers": [], "subprotocols": ["bearer."]}

        assert get_token_from_scope(scope) is None


# =============================================================================
# Connection
# =============================================================================


@pytest.mark.asyncio
class TestConnect:
    async def test_rejects_missing_token(self):
        communicator = communicator_for()

        is_connected, code = await communicator.connect()

        assert not is_connected
        assert code == 4001

    async def test_rejects_invalid_token(self):
        communicator = communicator_for("token-unknown")

        is_connected, code = await communicator.connect()

        assert not is_connected
        assert code == 4001

    async def test_rejects_user_without_local_account(self, identity_provider):
        token = identity_provider.register("sub-not-bootstrapped")
        communicator = communicator_for(token)

        is_connected, code = await communicator.connect()

        assert not is_connected
        assert code == 4001

    async def test_rejects_inactive_user(self, identity_provider, inactive_user):
        communicator = communicator_for(identity_provider.token_for(inactive_user))

        is_connected, _ = await communicator.connect()

        assert not is_connected

    async def test_accepts_query_token(self, identity_provider, user):
        communicator = communicator_for(identity_provider.token_for(user))

        is_connected, _ = await communicator.connect()

        assert is_connected
        await communicator.disconnect()

    async def test_accepts_header_token(self, identity_provider, user):
        token = identity_provider.token_for(user)
        communicator = communicator_for(
            headers=[(b"authorization", f"Bearer {token}".encode())]
        )

        is_connected, _ = await communicator.connect()

        assert is_connected
        await communicator.disconnect()

    async def test_accepts_subprotocol_token(self, identity_provider, user):
        protocol = f"bearer.{identity_provider.token_for(user)}"
        communicator = communicator_for(subprotocols=[protocol])

        is_connected, subprotocol = await communicator.connect()

        assert is_connected
        assert subprotocol == protocol
        await communicator.disconnect()


# =============================================================================
# Client events
# =============================================================================


@pytest.mark.asyncio
class TestClientEvents:
    async def test_ping(self, identity_provider, user):
        communicator = await connected(identity_provider.token_for(user))

        await communicator.send_json_to({"type": "ping"})

        assert await communicator.receive_json_from() == {"type": "pong"}
        await communicator.disconnect()

    async def test_unknown_type(self, identity_provider, user):
        communicator = await connected(identity_provider.token_for(user))

        await communicator.send_json_to({"type": "shout"})

        response = await communicator.receive_json_from()
        assert response["type"] == "error"
        await communicator.disconnect()

    async def test_join_chat(self, identity_provider, user, group_chat):
        communicator = await connected(identity_provider.token_for(user))

        response = await join(communicator, group_chat.pk)

        assert response == {"type": "join_chat", "success": True, "chatId": str(group_chat.pk)}
        await communicator.disconnect()

    async def test_join_refused_for_non_participant(
        self, identity_provider, third_user, group_chat
    ):
        communicator = await connected(identity_provider.token_for(third_user))

        response = await join(communicator, group_chat.pk)

        assert response == {"type": "error", "error": "Chat not found or access denied"}
        await communicator.disconnect()

    async def test_join_requires_chat_id(self, identity_provider, user):
        communicator = await connected(identity_provider.token_for(user))

        await communicator.send_json_to({"type": "join_chat", "chatId": "nope"})

        response = await communicator.receive_json_from()
        assert response == {"type": "error", "error": "chatId is required"}
        await communicator.disconnect()

    async def test_leave_chat(self, identity_provider, user, group_chat):
        communicator = await connected(identity_provider.token_for(user))
        await join(communicator, group_chat.pk)

        await communicator.send_json_to({"type": "leave_chat", "chatId": str(group_chat.pk)})

        response = await communicator.receive_json_from()
        assert response == {"type": "leave_chat", "success": True, "chatId": str(group_chat.pk)}
        await communicator.disconnect()

    async def test_typing_relayed_to_others_only(
        self, identity_provider, user, other_user, group_chat
    ):
        typist = await connected(identity_provider.token_for(user))
        reader = await connected(identity_provider.token_for(other_user))
        await join(typist, group_chat.pk)
        await join(reader, group_chat.pk)

        await typist.send_json_to(
            {"type": "typing", "chatId": str(group_chat.pk), "isTyping": True}
        )

        assert await reader.receive_json_from() == {
            "type": "typing",
            "chatId": str(group_chat.pk),
            "userId": str(user.pk),
            "isTyping": True,
        }
        assert await typist.receive_nothing()
        await typist.disconnect()
        await reader.disconnect()

    async def test_typing_requires_join(self, identity_provider, user, group_chat):
        communicator = await connected(identity_provider.token_for(user))

        await communicator.send_json_to({"type": "typing", "chatId": str(group_chat.pk)})

        response = await communicator.receive_json_from()
        assert response["type"] == "error"
        await communicator.disconnect()


# =============================================================================
# Server events
# =============================================================================


@pytest.mark.asyncio
class TestServerEvents:
    async def test_new_message_reaches_recipient_without_join(
        self, identity_provider, user, other_user, group_chat, queued_pushes
    ):
        communicator = await connected(identity_provider.token_for(other_user))

        await database_sync_to_async(MessageService.create_message)(
            group_chat.pk, user, "Hello!"
        )

        event = await communicator.receive_json_from()
        assert event["type"] == "new_message"
        assert event["chatId"] == str(group_chat.pk)
        assert event["senderId"] == str(user.pk)
        assert event["message"]["content"] == "Hello!"
        await communicator.disconnect()

    async def test_joined_socket_gets_new_message_once(
        self, identity_provider, user, other_user, group_chat, queued_pushes
    ):
        communicator = await connected(identity_provider.token_for(other_user))
        await join(communicator, group_chat.pk)

        await database_sync_to_async(MessageService.create_message)(
            group_chat.pk, user, "Hello!"
        )

        event = await communicator.receive_json_from()
        assert event["type"] == "new_message"
        assert await communicator.receive_nothing()
        await communicator.disconnect()

    async def test_chat_update_reaches_joined_sockets(
        self, identity_provider, user, other_user, group_chat
    ):
        communicator = await connected(identity_provider.token_for(other_user))
        await join(communicator, group_chat.pk)

        await database_sync_to_async(ChatService.update_chat)(
            group_chat.pk, user, {"name": "Renamed"}
        )

        event = await communicator.receive_json_from()
        assert event["type"] == "chat_update"
        assert event["update"]["chat"]["name"] == "Renamed"
        await communicator.disconnect()

    async def test_chat_deleted_reaches_user_group(
        self, identity_provider, user, other_user, group_chat
    ):
        communicator = await connected(identity_provider.token_for(other_user))

        await database_sync_to_async(ChatService.delete_chat)(group_chat.pk, user)

        event = await communicator.receive_json_from()
        assert event == {"type": "chat_deleted", "chatId": str(group_chat.pk)}
        await communicator.disconnect()
