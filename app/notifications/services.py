"""
Push notification service layer.

Services:
    NotificationService: Device token registry and chat push fan-out

Design Principles:
    - Services are stateless (use class methods)
    - Expected failures return ServiceResult.failure()
    - A failed delivery is logged per token and does not stop the others

Usage:
    from notifications.services import NotificationService

    # Register the device of the current user
    result = NotificationService.register_device_token(user, token, "android")

    # Push a chat message to its recipients
    sent = NotificationService.send_chat_notification(
        chat_id=chat.pk,
        message_content="See you at 5",
        sender_name="Ann",
        recipient_ids=[str(bob.pk)],
    )
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from core.services import BaseService, ServiceResult

from notifications.models import DevicePlatform, DeviceToken
from notifications.providers import get_push_provider

if TYPE_CHECKING:
    from uuid import UUID

    from authentication.models import User

logger = logging.getLogger(__name__)


class NotificationService(BaseService):
    """
    Service for push notifications.

    Methods:
        register_device_token: Add or reactivate a device token
        unregister_device_token: Stop pushing to a device token
        get_device_tokens_for_user: Active token strings of a user
        send_chat_notification: Push a chat message to its recipients
    """

    @classmethod
    def register_device_token(
        cls,
        user: User,
        token: str,
        platform: str = DevicePlatform.IOS,
    ) -> ServiceResult[DeviceToken]:
        """
        Register a device token for a user.

        A token the user already registered is reactivated and its
        platform updated instead of creating a second row.

        Args:
            user: Owner of the device
            token: Push provider token
            platform: ios / android / web

        Returns:
            ServiceResult with the DeviceToken
        """
        token = (token or "").strip()
        if not token:
            return ServiceResult.failure(
                "Device token is required",
                error_code="TOKEN_REQUIRED",
            )

        device_token, created = DeviceToken.objects.update_or_create(
            user=user,
            token=token,
            defaults={"platform": platform, "is_active": True},
        )

        cls.get_logger().info(
            f"{'Registered' if created else 'Reactivated'} {platform} device token "
            f"{token[:20]}... for user {user.pk}"
        )
        return ServiceResult.success(device_token)

    @classmethod
    def unregister_device_token(cls, user: User, token: str) -> ServiceResult[int]:
        """
        Deactivate a device token of a user.

        Unknown tokens are not an error; the device is simply not
        receiving pushes afterwards.

        Returns:
            ServiceResult with the number of tokens deactivated
        """
        updated = DeviceToken.objects.filter(
            user=user, token=token, is_active=True
        ).update(is_active=False)

        if updated:
            cls.get_logger().info(
                f"Deactivated device token {token[:20]}... for user {user.pk}"
            )
        return ServiceResult.success(updated)

    @classmethod
    def get_device_tokens_for_user(cls, user_id: UUID | str) -> list[str]:
        """Active token strings of a user, newest first."""
        return list(
            DeviceToken.objects.filter(user_id=user_id, is_active=True).values_list(
                "token", flat=True
            )
        )

    @classmethod
    def send_chat_notification(
        cls,
        chat_id: UUID | str,
        message_content: str,
        sender_name: str,
        recipient_ids: list[str],
    ) -> int:
        """
        Push a chat message to every active device of the recipients.

        Args:
            chat_id: Chat the message was posted in
            message_content: Preview text for the notification body
            sender_name: Display name for the notification title
            recipient_ids: User ids to notify

        Returns:
            Number of device tokens targeted
        """
        device_tokens = list(
            DeviceToken.objects.filter(user_id__in=recipient_ids, is_active=True)
        )

        logger.info(
            f"Chat notification for chat {chat_id} from {sender_name}: "
            f"{len(recipient_ids)} recipients, {len(device_tokens)} tokens"
        )

        if not device_tokens:
            return 0

        payload = {
            "title": sender_name,
            "body": message_content,
            "data": {"type": "new_message", "chatId": str(chat_id)},
        }
        provider = get_push_provider()
        failed = 0
        for device_token in device_tokens:
            logger.info(f"Sending to token: {device_token.token[:20]}...")
            try:
                provider.send(device_token, payload)
            except Exception:
                failed += 1
                logger.exception(f"Push to token {device_token.token[:20]}... failed")

        if failed:
            logger.warning(
                f"{failed} of {len(device_tokens)} pushes failed for chat {chat_id}"
            )
        return len(device_tokens)
