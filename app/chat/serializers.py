"""
Serializers for chat API.

This module provides serializers for the chat system:
- Chat serializers (read, create, update)
- Participant serializers (read, add)
- Message serializers (read, create, update)

Serializer Hierarchy:
    ChatSerializer: Chat with participants, last message and caller's unread count
    ChatCreateSerializer: Direct/group chat creation
    ChatUpdateSerializer: Rename / change picture

    ParticipantSerializer: Participant with user summary
    AddParticipantSerializer: Add participant to group

    MessageSerializer: Message with soft-delete handling
    MessageCreateSerializer: Send new message
    MessageUpdateSerializer: Edit message content
    MarkReadSerializer: Optional read timestamp

Design Decisions:
    - Read and write serializers are separate
    - Soft-deleted message content is replaced with the placeholder
    - Business rules (roles, membership, direct/group rules) live in services;
      write serializers only check shapes
"""

from __future__ import annotations

from rest_framework import serializers

from authentication.serializers import UserSummarySerializer
from chat.constants import MESSAGE_CONFIG
from chat.models import (
    Chat,
    ChatMessage,
    ChatParticipant,
    ChatType,
    MessageType,
    ParticipantRole,
)


# =============================================================================
# Message Serializers
# =============================================================================


class ReplyPreviewSerializer(serializers.ModelSerializer):
    """Minimal view of the message being replied to."""

    content = serializers.SerializerMethodField()

    class Meta:
        model = ChatMessage
        fields = ["id", "user_id", "content", "type", "is_deleted"]
        read_only_fields = fields

    def get_content(self, obj: ChatMessage) -> str:
        return obj.get_display_content()


class MessageSerializer(serializers.ModelSerializer):
    """
    Full message representation.

    Deleted messages keep their place in history; their content is
    always the placeholder.
    """

    user = UserSummarySerializer(read_only=True)
    content = serializers.SerializerMethodField(
        help_text="Message content (placeholder if deleted)"
    )
    reply_to = ReplyPreviewSerializer(read_only=True, allow_null=True)

    class Meta:
        model = ChatMessage
        fields = [
            "id",
            "chat_id",
            "user_id",
            "user",
            "content",
            "type",
            "metadata",
            "reply_to_id",
            "reply_to",
            "is_edited",
            "is_deleted",
            "deleted_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_content(self, obj: ChatMessage) -> str:
        return obj.get_display_content()


class MessageCreateSerializer(serializers.Serializer):
    """Body of POST /chats/{id}/messages/."""

    content = serializers.CharField(
        max_length=MESSAGE_CONFIG.MAX_CONTENT_LENGTH,
        allow_blank=True,
        trim_whitespace=False,
    )
    type = serializers.ChoiceField(
        choices=MessageType.choices,
        default=MessageType.TEXT,
    )
    metadata = serializers.JSONField(required=False, allow_null=True)
    reply_to_id = serializers.UUIDField(required=False, allow_null=True)


class MessageUpdateSerializer(serializers.Serializer):
    """Body of PUT /chats/messages/{id}/."""

    content = serializers.CharField(
        max_length=MESSAGE_CONFIG.MAX_CONTENT_LENGTH,
        allow_blank=True,
        trim_whitespace=False,
    )


# =============================================================================
# Participant Serializers
# =============================================================================


class ParticipantSerializer(serializers.ModelSerializer):
    """Chat membership with the member's public summary."""

    user = UserSummarySerializer(read_only=True)

    class Meta:
        model = ChatParticipant
        fields = [
            "id",
            "chat_id",
            "user_id",
            "user",
            "role",
            "joined_at",
            "last_read_at",
            "unread_count",
        ]
        read_only_fields = fields


class AddParticipantSerializer(serializers.Serializer):
    """Body of POST /chats/{id}/participants/."""

    user_id = serializers.UUIDField()
    role = serializers.ChoiceField(
        choices=ParticipantRole.choices,
        default=ParticipantRole.MEMBER,
    )


# =============================================================================
# Chat Serializers
# =============================================================================


class ChatSerializer(serializers.ModelSerializer):
    """
    Chat as seen by one user.

    `unread_count` is the counter of the viewing user: context["user"] when
    given (realtime payloads), otherwise the request user.
    `last_message` uses the `last_message` attribute attached by
    ChatService.get_user_chats when present.
    """

    participants = ParticipantSerializer(many=True, read_only=True)
    last_message = serializers.SerializerMethodField()
    unread_count = serializers.SerializerMethodField()

    class Meta:
        model = Chat
        fields = [
            "id",
            "name",
            "avatar_url",
            "type",
            "created_by_id",
            "last_message_at",
            "last_message_text",
            "last_message_user_id",
            "participants",
            "last_message",
            "unread_count",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def _viewer(self):
        user = self.context.get("user")
        if user is not None:
            return user
        request = self.context.get("request")
        return getattr(request, "user", None)

    def get_last_message(self, obj: Chat) -> dict | None:
        if hasattr(obj, "last_message"):
            message = obj.last_message
        else:
            message = (
                obj.messages.select_related("user__profile", "reply_to")
                .order_by("-created_at")
                .first()
            )
        if message is None:
            return None
        return MessageSerializer(message, context=self.context).data

    def get_unread_count(self, obj: Chat) -> int:
        viewer = self._viewer()
        if viewer is None or not viewer.is_authenticated:
            return 0
        for participant in obj.participants.all():
            if participant.user_id == viewer.pk:
                return participant.unread_count
        return 0


class ChatCreateSerializer(serializers.Serializer):
    """
    Body of POST /chats/.

    direct: participant_user_id is the other user
    group: name plus optional participant_ids
    """

    type = serializers.ChoiceField(choices=ChatType.choices, default=ChatType.DIRECT)
    name = serializers.CharField(
        max_length=255, required=False, allow_null=True, allow_blank=True
    )
    avatar_url = serializers.URLField(max_length=500, required=False, allow_null=True)
    participant_user_id = serializers.UUIDField(required=False, allow_null=True)
    participant_ids = serializers.ListField(
        child=serializers.UUIDField(),
        required=False,
        default=list,
    )


class ChatUpdateSerializer(serializers.Serializer):
    """Body of PUT/PATCH /chats/{id}/."""

    name = serializers.CharField(
        max_length=255, required=False, allow_null=True, allow_blank=True
    )
    avatar_url = serializers.URLField(max_length=500, required=False, allow_null=True)


class MarkReadSerializer(serializers.Serializer):
    """Body of POST /chats/{id}/read/."""

    last_read_at = serializers.DateTimeField(required=False, allow_null=True)


class UnreadCountSerializer(serializers.Serializer):
    """Response of GET /chats/unread/ (schema only)."""

    unread_count = serializers.IntegerField()
