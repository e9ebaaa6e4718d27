"""
Serializers for push notification API.

Serializers:
    DeviceTokenSerializer: Read-only device token record
    RegisterDeviceTokenSerializer: Request body for registering a token
    UnregisterDeviceTokenSerializer: Request body for unregistering a token
"""

from __future__ import annotations

from rest_framework import serializers

from notifications.models import DevicePlatform, DeviceToken


class DeviceTokenSerializer(serializers.ModelSerializer):
    """Device token as returned after registration."""

    class Meta:
        model = DeviceToken
        fields = [
            "id",
            "user_id",
            "token",
            "platform",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class RegisterDeviceTokenSerializer(serializers.Serializer):
    token = serializers.CharField(max_length=4096)
    platform = serializers.ChoiceField(
        choices=DevicePlatform.choices,
        default=DevicePlatform.IOS,
    )


class UnregisterDeviceTokenSerializer(serializers.Serializer):
    token = serializers.CharField(max_length=4096)
