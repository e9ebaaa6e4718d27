"""
WebSocket consumer for the chat application.

One socket per client session carries events for all of the user's chats.

Authentication:
    OIDCAuthMiddleware attaches the user to self.scope["user"]. Anonymous
    connections are closed with REALTIME_CONFIG.CLOSE_UNAUTHENTICATED (4001).

Channel Groups:
    user_<id>: joined on connect; receives new_chat, chat_deleted and
        new_message for every chat of the user
    chat_<id>: joined with join_chat; receives new_message, chat_update
        and typing for that chat

Message Types (from client):
    - join_chat {chatId}: Subscribe to a chat (participants only)
    - leave_chat {chatId}: Unsubscribe from a chat
    - typing {chatId, isTyping}: Relay typing indicator to the chat
    - ping: Answered with pong

Message Types (to client):
    - new_message, chat_update, new_chat, chat_deleted: Server events
    - typing: Another participant is typing
    - join_chat / leave_chat: {success: true, chatId} acknowledgements
    - error: {error} for bad payloads or refused joins
"""

from __future__ import annotations

import logging
from uuid import UUID

from channels.db import database_sync_to_async
from channels.generic.websocket import AsyncJsonWebsocketConsumer

from chat.constants import REALTIME_CONFIG
from chat.realtime import chat_group, user_group
from chat.services import ChatService

logger = logging.getLogger(__name__)


def _parse_chat_id(value) -> str | None:
    try:
        return str(UUID(str(value)))
    except (TypeError, ValueError):
        return None


class ChatConsumer(AsyncJsonWebsocketConsumer):
    """
    WebSocket consumer for real-time chat functionality.

    Attributes:
        user: Authenticated user (after connect)
        joined_chats: Chat ids whose group this socket joined
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.user = None
        self.joined_chats: set[str] = set()

    async def connect(self):
        """
        Accept authenticated connections and join the user's group.

        When the token came in a "bearer.<token>" subprotocol, that
        subprotocol is echoed back so browsers accept the handshake.
        """
        user = self.scope.get("user")
        if user is None or not user.is_authenticated:
            logger.warning("Rejected unauthenticated WebSocket connection")
            await self.close(code=REALTIME_CONFIG.CLOSE_UNAUTHENTICATED)
            return

        self.user = user
        await self.channel_layer.group_add(user_group(user.pk), self.channel_name)

        subprotocol = next(
            (
                protocol
                for protocol in self.scope.get("subprotocols", [])
                if protocol.startswith(REALTIME_CONFIG.SUBPROTOCOL_TOKEN_PREFIX)
            ),
            None,
        )
        await self.accept(subprotocol=subprotocol)
        logger.info(f"User {user.pk} connected to chat socket")

    async def disconnect(self, close_code):
        """Leave every group this socket joined."""
        if self.user is None:
            return

        await self.channel_layer.group_discard(user_group(self.user.pk), self.channel_name)
        for chat_id in self.joined_chats:
            await self.channel_layer.group_discard(chat_group(chat_id), self.channel_name)
        self.joined_chats.clear()
        logger.info(f"User {self.user.pk} disconnected from chat socket ({close_code})")

    async def receive_json(self, content, **kwargs):
        """
        Dispatch client events.

        Expected message format:
            {"type": "join_chat", "chatId": "<uuid>"}
            {"type": "typing", "chatId": "<uuid>", "isTyping": true}
            {"type": "ping"}
        """
        if not isinstance(content, dict):
            await self._send_error("Invalid payload")
            return

        message_type = content.get("type")
        if message_type == "join_chat":
            await self._handle_join(content)
        elif message_type == "leave_chat":
            await self._handle_leave(content)
        elif message_type == "typing":
            await self._handle_typing(content)
        elif message_type == "ping":
            await self.send_json({"type": "pong"})
        else:
            await self._send_error(f"Unknown message type: {message_type}")

    async def _send_error(self, error: str):
        await self.send_json({"type": "error", "error": error})

    async def _handle_join(self, content):
        chat_id = _parse_chat_id(content.get("chatId"))
        if chat_id is None:
            await self._send_error("chatId is required")
            return

        if not await self._is_participant(chat_id):
            logger.warning(f"User {self.user.pk} refused join of chat {chat_id}")
            await self._send_error("Chat not found or access denied")
            return

        await self.channel_layer.group_add(chat_group(chat_id), self.channel_name)
        self.joined_chats.add(chat_id)
        await self.send_json({"type": "join_chat", "success": True, "chatId": chat_id})

    async def _handle_leave(self, content):
        chat_id = _parse_chat_id(content.get("chatId"))
        if chat_id is None:
            await self._send_error("chatId is required")
            return

        await self.channel_layer.group_discard(chat_group(chat_id), self.channel_name)
        self.joined_chats.discard(chat_id)
        await self.send_json({"type": "leave_chat", "success": True, "chatId": chat_id})

    async def _handle_typing(self, content):
        chat_id = _parse_chat_id(content.get("chatId"))
        if chat_id is None or chat_id not in self.joined_chats:
            await self._send_error("Join the chat before sending typing events")
            return

        await self.channel_layer.group_send(
            chat_group(chat_id),
            {
                "type": "chat.typing",
                "chat_id": chat_id,
                "user_id": str(self.user.pk),
                "is_typing": bool(content.get("isTyping", False)),
            },
        )

    async def chat_event(self, event):
        """
        Handle chat.event messages sent by chat.realtime.

        User-group copies of chat events are skipped when this socket
        already receives them through the chat group.
        """
        if event.get("skip_if_joined") and event.get("chat_id") in self.joined_chats:
            return
        await self.send_json(event["payload"])

    async def chat_typing(self, event):
        """Relay typing indicators to everyone but the typist."""
        if event["user_id"] == str(self.user.pk):
            return

        await self.send_json(
            {
                "type": "typing",
                "chatId": event["chat_id"],
                "userId": event["user_id"],
                "isTyping": event["is_typing"],
            }
        )

    @database_sync_to_async
    def _is_participant(self, chat_id: str) -> bool:
        return ChatService.is_participant(chat_id, self.user)
