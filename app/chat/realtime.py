"""
Channel-layer fan-out for chat events.

Services call these helpers while their transaction is still open. The
payload is serialized immediately and sent from transaction.on_commit, so
clients never see rows that were rolled back.

Groups:
    user_<id>: every socket of one user (joined on connect)
    chat_<id>: sockets that sent join_chat for that chat

Every event reaches consumers as {"type": "chat.event", "payload": {...}}.
A user-group event with skip_if_joined is dropped by sockets that already
joined the chat group, so those sockets receive it once.

Delivery is best effort: failures are logged and never raised.
"""

from __future__ import annotations

import json
import logging

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.core.serializers.json import DjangoJSONEncoder
from django.db import transaction

from chat.constants import REALTIME_CONFIG

logger = logging.getLogger(__name__)


def user_group(user_id) -> str:
    return f"{REALTIME_CONFIG.USER_GROUP_PREFIX}{user_id}"


def chat_group(chat_id) -> str:
    return f"{REALTIME_CONFIG.CHAT_GROUP_PREFIX}{chat_id}"


def _plain(payload: dict) -> dict:
    # UUIDs and datetimes become strings; channels-redis only packs plain types
    return json.loads(json.dumps(payload, cls=DjangoJSONEncoder))


def _send(groups: list[str], payload: dict, chat_id=None, skip_if_joined=False) -> None:
    channel_layer = get_channel_layer()
    if channel_layer is None:
        return

    message = {
        "type": "chat.event",
        "payload": payload,
        "chat_id": str(chat_id) if chat_id else None,
        "skip_if_joined": skip_if_joined,
    }
    for group in groups:
        try:
            async_to_sync(channel_layer.group_send)(group, message)
        except Exception as exc:
            logger.error(f"Failed to send {payload.get('type')} to {group}: {exc}")


def broadcast(groups: list[str], payload: dict, chat_id=None, skip_if_joined=False) -> None:
    """Send `payload` to `groups` once the current transaction commits."""
    payload = _plain(payload)
    transaction.on_commit(
        lambda: _send(groups, payload, chat_id=chat_id, skip_if_joined=skip_if_joined)
    )


def notify_new_message(chat_id, message_data: dict, sender_id, recipient_ids) -> None:
    """new_message to the chat group and to each recipient's user group."""
    payload = {
        "type": "new_message",
        "chatId": chat_id,
        "message": message_data,
        "senderId": sender_id,
    }
    broadcast([chat_group(chat_id)], payload)
    broadcast(
        [user_group(user_id) for user_id in recipient_ids],
        payload,
        chat_id=chat_id,
        skip_if_joined=True,
    )


def notify_chat_update(chat_id, update: dict) -> None:
    """chat_update to the chat group."""
    broadcast([chat_group(chat_id)], {"type": "chat_update", "chatId": chat_id, "update": update})


def notify_new_chat(user_ids, chat_data: dict) -> None:
    """new_chat to the user groups of `user_ids`."""
    broadcast(
        [user_group(user_id) for user_id in user_ids],
        {"type": "new_chat", "chat": chat_data},
    )


def notify_chat_deleted(user_ids, chat_id) -> None:
    """chat_deleted to the user groups of `user_ids`."""
    broadcast(
        [user_group(user_id) for user_id in user_ids],
        {"type": "chat_deleted", "chatId": chat_id},
    )
