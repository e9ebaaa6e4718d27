"""
Celery tasks for push notification delivery.

Tasks:
    send_chat_push_notification: Push a new chat message to its recipients

Design:
    - Tasks receive ids (strings), never model instances
    - The message is re-read in the worker; a message deleted before the
      worker picks the task up is not pushed
    - Per-token gateway failures are absorbed by the service; Celery only
      retries failures before any push went out (e.g. database errors)

Usage:
    from notifications.tasks import send_chat_push_notification

    # Queued by MessageService.create_message() after commit
    send_chat_push_notification.delay(str(message.pk), [str(bob.pk)])
"""

from __future__ import annotations

import logging

from celery import shared_task

from chat.constants import MESSAGE_CONFIG
from chat.models import ChatMessage
from notifications.services import NotificationService

logger = logging.getLogger(__name__)


def _preview(content: str) -> str:
    limit = MESSAGE_CONFIG.PUSH_PREVIEW_LENGTH
    if len(content) <= limit:
        return content
    return content[:limit] + "..."


@shared_task(
    bind=True,
    autoretry_for=(Exception,),
    retry_backoff=True,
    retry_kwargs={"max_retries": 3},
)
def send_chat_push_notification(self, message_id: str, recipient_ids: list[str]) -> int:
    """
    Send push notifications for a new chat message.

    Flow:
        1. Fetch the message with its author
        2. Skip if missing or already deleted
        3. Build title (sender display name) and body (content preview)
        4. Hand off to NotificationService.send_chat_notification

    Args:
        message_id: UUID string of the ChatMessage
        recipient_ids: User id strings to notify (sender excluded)

    Returns:
        Number of device tokens targeted
    """
    message = (
        ChatMessage.objects.select_related("user__profile")
        .filter(pk=message_id)
        .first()
    )
    if message is None or message.is_deleted:
        logger.info(f"Skipping push for message {message_id}: message gone")
        return 0

    return NotificationService.send_chat_notification(
        chat_id=message.chat_id,
        message_content=_preview(message.content),
        sender_name=message.user.display_name,
        recipient_ids=recipient_ids,
    )
