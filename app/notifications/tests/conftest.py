"""
Test configuration and fixtures for push notification tests.

This module provides:
- push_provider: records pushes instead of logging them
- device token fixtures for the shared user fixtures
"""

import pytest

from notifications.tests.factories import DeviceTokenFactory


class RecordingPushProvider:
    def __init__(self):
        self.sent = []
        self.failing_tokens = set()

    def send(self, device_token, payload):
        if device_token.token in self.failing_tokens:
            raise ConnectionError("gateway unavailable")
        self.sent.append((device_token.token, payload))


@pytest.fixture
def push_provider(monkeypatch):
    """Replace the configured push provider with a recorder."""
    provider = RecordingPushProvider()
    monkeypatch.setattr(
        "notifications.services.get_push_provider", lambda: provider
    )
    return provider


@pytest.fixture
def device_token(user):
    return DeviceTokenFactory(user=user, token="user-device-token-0000000001")


@pytest.fixture
def other_device_token(other_user):
    return DeviceTokenFactory(
        user=other_user, token="other-device-token-000000001", platform="android"
    )
