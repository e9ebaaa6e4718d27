"""
Test configuration and fixtures for chat tests.

This module provides:
- Chat fixtures (direct and group) built from the shared user fixtures
- A recorder for channel-layer broadcasts
- A recorder for queued push notifications

The shared fixtures (user, other_user, third_user, authenticated_client,
other_client, ...) live in app/conftest.py.

Usage:
    def test_example(group_chat, authenticated_client):
        response = authenticated_client.get(f"/api/v1/chats/{group_chat.id}/")
        assert response.status_code == 200
"""

import pytest

from chat.tests.factories import DirectChatFactory, GroupChatFactory


@pytest.fixture
def direct_chat(user, other_user):
    """Direct chat created by `user` with `other_user`."""
    return DirectChatFactory(created_by=user, other=other_user)


@pytest.fixture
def group_chat(user, other_user):
    """Group chat: `user` is admin, `other_user` is member."""
    return GroupChatFactory(created_by=user, name="Study Group", members=[other_user])


@pytest.fixture
def third_client(authenticated_client_factory, third_user):
    return authenticated_client_factory(third_user)


@pytest.fixture
def sent_events(monkeypatch):
    """
    Record realtime broadcasts instead of sending them.

    Each entry is (group, payload). Events are only recorded once the
    surrounding transaction commits.
    """
    from chat import realtime

    events = []

    def record(groups, payload, chat_id=None, skip_if_joined=False):
        for group in groups:
            events.append((group, payload))

    monkeypatch.setattr(realtime, "_send", record)
    return events


@pytest.fixture
def queued_pushes(monkeypatch):
    """Record push notification tasks queued by MessageService."""
    from notifications.tasks import send_chat_push_notification

    calls = []

    def fake_delay(message_id, recipient_ids):
        calls.append((message_id, sorted(recipient_ids)))

    monkeypatch.setattr(send_chat_push_notification, "delay", fake_delay)
    return calls
