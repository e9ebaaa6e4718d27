"""
Push delivery providers.

A provider takes one device token plus a payload and hands it to a push
gateway. Only the logging provider ships; APNs/FCM gateways plug in by
implementing PushProvider and pointing PUSH_PROVIDER at them.

Usage:
    from notifications.providers import get_push_provider

    provider = get_push_provider()
    provider.send(device_token, {"title": "Ann", "body": "hi"})
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from django.conf import settings
from django.utils.module_loading import import_string

if TYPE_CHECKING:
    from notifications.models import DeviceToken

logger = logging.getLogger(__name__)


@runtime_checkable
class PushProvider(Protocol):
    """Protocol for push gateways."""

    def send(self, device_token: DeviceToken, payload: dict) -> None:
        """
        Deliver payload to one device.

        Raises on delivery failure; the caller logs it and moves on to the
        next token.
        """
        ...


class LoggingPushProvider:
    """Writes each push to the log instead of a gateway."""

    def send(self, device_token: DeviceToken, payload: dict) -> None:
        logger.info(
            f"Sending push to {device_token.platform} token "
            f"{device_token.token[:20]}...: {payload.get('title')}"
        )


def get_push_provider() -> PushProvider:
    """
    Instantiate the provider configured in settings.PUSH_PROVIDER.

    Raises:
        ImportError: If the dotted path does not resolve
    """
    provider_class = import_string(settings.PUSH_PROVIDER)
    return provider_class()
