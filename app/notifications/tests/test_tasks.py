"""
Tests for push notification Celery tasks.

Tasks are called directly (synchronously); the broker is never involved.
"""

import pytest

from chat.constants import MESSAGE_CONFIG
from chat.tests.factories import ChatMessageFactory, GroupChatFactory
from notifications.tasks import send_chat_push_notification


@pytest.fixture
def chat(user, other_user):
    return GroupChatFactory(created_by=user, members=[other_user])


@pytest.mark.django_db
class TestSendChatPushNotification:
    def test_pushes_message_preview(
        self, push_provider, chat, user, other_user, other_device_token
    ):
        message = ChatMessageFactory(chat=chat, user=user, content="See you at 5")

        sent = send_chat_push_notification(str(message.pk), [str(other_user.pk)])

        assert sent == 1
        token, payload = push_provider.sent[0]
        assert token == other_device_token.token
        assert payload["title"] == "Test User"
        assert payload["body"] == "See you at 5"
        assert payload["data"]["chatId"] == str(chat.pk)

    def test_long_content_truncated(
        self, push_provider, chat, user, other_user, other_device_token
    ):
        limit = MESSAGE_CONFIG.PUSH_PREVIEW_LENGTH
        message = ChatMessageFactory(chat=chat, user=user, content="a" * (limit + 50))

        send_chat_push_notification(str(message.pk), [str(other_user.pk)])

        body = push_provider.sent[0][1]["body"]
        assert body == "a" * limit + "..."

    def test_deleted_message_skipped(
        self, push_provider, chat, user, other_user, other_device_token
    ):
        message = ChatMessageFactory(chat=chat, user=user)
        message.soft_delete()

        sent = send_chat_push_notification(str(message.pk), [str(other_user.pk)])

        assert sent == 0
        assert push_provider.sent == []

    def test_missing_message_skipped(self, push_provider, other_user):
        sent = send_chat_push_notification(
            "00000000-0000-0000-0000-000000000000", [str(other_user.pk)]
        )

        assert sent == 0
