"""
Push notification models.

This module defines the storage for mobile/web push targets:
- DevicePlatform: Platform a device token belongs to
- DeviceToken: A push token registered by a user's device

Design Decisions:
    - A token is unique per user, not globally; the same physical token
      registered by two accounts yields two rows
    - Unregistering deactivates the row instead of deleting it, so a device
      that re-registers keeps its original created_at
    - Tokens cascade with their user

Usage:
    from notifications.models import DeviceToken

    tokens = DeviceToken.objects.filter(user=user, is_active=True)
"""

from __future__ import annotations

from django.conf import settings
from django.db import models

from core.model_mixins import UUIDPrimaryKeyMixin
from core.models import BaseModel


class DevicePlatform(models.TextChoices):
    """Platform of the device that registered a token."""

    IOS = "ios", "iOS"
    ANDROID = "android", "Android"
    WEB = "web", "Web"


class DeviceToken(UUIDPrimaryKeyMixin, BaseModel):
    """
    Push token registered by one of a user's devices.

    Fields:
        user: Owner of the device
        token: Provider token (APNs device token, FCM registration id, ...)
        platform: ios / android / web
        is_active: False once the device unregistered
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="device_tokens",
        help_text="User who registered this device",
    )
    token = models.TextField(
        help_text="Push provider token for the device",
    )
    platform = models.CharField(
        max_length=10,
        choices=DevicePlatform.choices,
        default=DevicePlatform.IOS,
        help_text="Platform of the device",
    )
    is_active = models.BooleanField(
        default=True,
        help_text="Whether pushes are sent to this token",
    )

    class Meta:
        db_table = "notifications_device_token"
        verbose_name = "device token"
        verbose_name_plural = "device tokens"
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["user", "token"],
                name="unique_user_device_token",
            ),
        ]
        indexes = [
            models.Index(
                fields=["user", "is_active"],
                name="notif_token_user_active_idx",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.platform}:{self.token[:20]}"
