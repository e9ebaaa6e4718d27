"""
Chat system models.

This module defines the data models for the chat system supporting:
- Direct (1:1) chats between exactly two users
- Group chats with admin/member roles

Models:
    Chat: Container for messages between participants
    ChatParticipant: Membership of a user in a chat, with role and unread counter
    ChatMessage: Individual message within a chat

Design Decisions:
    - Direct chats are immutable once created (no adding participants)
    - Unread counters live on ChatParticipant; each participant has their own
    - Chat caches a preview of its last message (time, text, author) so chat
      lists sort and render without touching the message table
    - Soft delete: deleted chats disappear from lists; deleted messages stay in
      history with placeholder content
"""

from __future__ import annotations

from django.conf import settings
from django.db import models
from django.db.models import Q

from chat.constants import MESSAGE_CONFIG
from core.managers import SoftDeleteManager
from core.model_mixins import SoftDeleteMixin, UUIDPrimaryKeyMixin
from core.models import BaseModel


class ChatType(models.TextChoices):
    """
    Type of chat.

    DIRECT: Exactly two participants, immutable membership
    GROUP: Named chat with admin-managed membership
    """

    DIRECT = "direct", "Direct"
    GROUP = "group", "Group"


class ParticipantRole(models.TextChoices):
    """
    Role within a chat.

    ADMIN: Can rename the chat, add/remove participants, delete the chat
    MEMBER: Can send messages, edit/delete own messages, leave
    """

    ADMIN = "admin", "Admin"
    MEMBER = "member", "Member"


class MessageType(models.TextChoices):
    """Type of message content."""

    TEXT = "text", "Text"
    IMAGE = "image", "Image"
    FILE = "file", "File"
    SYSTEM = "system", "System"


class Chat(UUIDPrimaryKeyMixin, SoftDeleteMixin, BaseModel):
    """
    A chat between two or more users.

    Chat Types:
        DIRECT: Exactly 2 participants; creating a direct chat with someone
                you already have one with returns the existing chat.
        GROUP: Named, any number of participants; creator becomes admin.

    Fields:
        name: Display name (required for groups)
        avatar_url: Optional chat picture
        type: direct or group
        created_by: User who created the chat
        last_message_at / last_message_text / last_message_user: Preview of the
            most recent message, used for sorting and chat lists

    Managers:
        objects: Live chats only
        all_objects: Includes soft-deleted chats
    """

    name = models.CharField(
        max_length=255,
        blank=True,
        null=True,
        help_text="Chat name (required for group chats)",
    )
    avatar_url = models.URLField(
        max_length=500,
        blank=True,
        null=True,
        help_text="Chat picture URL",
    )
    type = models.CharField(
        max_length=10,
        choices=ChatType.choices,
        default=ChatType.DIRECT,
        db_index=True,
        help_text="Type of chat (direct or group)",
    )
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="created_chats",
        help_text="User who created this chat",
    )
    last_message_at = models.DateTimeField(
        null=True,
        blank=True,
        db_index=True,
        help_text="Timestamp of most recent message (for sorting chat lists)",
    )
    last_message_text = models.TextField(
        null=True,
        blank=True,
        help_text="Content of the most recent message",
    )
    last_message_user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
        help_text="Author of the most recent message",
    )

    objects = SoftDeleteManager()
    all_objects = models.Manager()

    class Meta:
        db_table = "chat_chat"
        ordering = ["-last_message_at", "-created_at"]
        indexes = [
            models.Index(
                fields=["-last_message_at"],
                name="chat_chat_last_msg_idx",
                condition=Q(is_deleted=False),
            ),
        ]

    def __str__(self) -> str:
        if self.type == ChatType.DIRECT:
            return f"Direct({self.pk})"
        return f"Group: {self.name or self.pk}"

    @property
    def is_direct(self) -> bool:
        return self.type == ChatType.DIRECT

    @property
    def is_group(self) -> bool:
        return self.type == ChatType.GROUP


class ChatParticipant(UUIDPrimaryKeyMixin, BaseModel):
    """
    Membership of a user in a chat.

    Fields:
        chat: Chat this membership belongs to
        user: Member
        role: admin or member
        joined_at: When the user joined
        last_read_at: Last time the user marked the chat as read
        unread_count: Messages from others since last_read_at

    Constraints:
        - One row per (chat, user); leaving deletes the row
    """

    chat = models.ForeignKey(
        Chat,
        on_delete=models.CASCADE,
        related_name="participants",
        help_text="Chat this membership belongs to",
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="chat_participations",
        help_text="Participating user",
    )
    role = models.CharField(
        max_length=10,
        choices=ParticipantRole.choices,
        default=ParticipantRole.MEMBER,
        help_text="Role in the chat",
    )
    joined_at = models.DateTimeField(
        auto_now_add=True,
        help_text="When the user joined this chat",
    )
    last_read_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="Last time the user marked this chat as read",
    )
    unread_count = models.PositiveIntegerField(
        default=0,
        help_text="Unread messages for this user in this chat",
    )

    class Meta:
        db_table = "chat_participant"
        ordering = ["joined_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["chat", "user"],
                name="unique_chat_participant",
            ),
        ]
        indexes = [
            models.Index(
                fields=["chat", "role", "joined_at"],
                name="chat_part_chat_role_idx",
            ),
        ]

    def __str__(self) -> str:
        return f"Participant: {self.user_id} in {self.chat_id} ({self.role})"

    @property
    def is_admin(self) -> bool:
        return self.role == ParticipantRole.ADMIN


class ChatMessage(UUIDPrimaryKeyMixin, SoftDeleteMixin, BaseModel):
    """
    A message within a chat.

    Soft Delete Behavior:
        Deleted messages stay in history (so replies keep their target);
        the service replaces content with MESSAGE_CONFIG.DELETED_PLACEHOLDER.
        The default manager therefore includes deleted messages.

    Fields:
        chat: Chat this message belongs to
        user: Author
        content: Message text (or caption / file name for media types)
        type: text, image, file or system
        metadata: Free-form JSON (e.g. {"url": ..., "width": ...} for images)
        reply_to: Message this one replies to (same chat)
        is_edited: Whether the content was changed after sending
    """

    chat = models.ForeignKey(
        Chat,
        on_delete=models.CASCADE,
        related_name="messages",
        help_text="Chat this message belongs to",
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="chat_messages",
        help_text="Author of the message",
    )
    content = models.TextField(
        help_text="Message content",
    )
    type = models.CharField(
        max_length=10,
        choices=MessageType.choices,
        default=MessageType.TEXT,
        help_text="Type of message",
    )
    metadata = models.JSONField(
        null=True,
        blank=True,
        help_text="Type-specific data (attachment URL, dimensions, ...)",
    )
    reply_to = models.ForeignKey(
        "self",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="replies",
        help_text="Message this one replies to",
    )
    is_edited = models.BooleanField(
        default=False,
        help_text="Whether the content was edited after sending",
    )

    objects = models.Manager()

    class Meta:
        db_table = "chat_message"
        ordering = ["-created_at"]
        indexes = [
            models.Index(
                fields=["chat", "-created_at"],
                name="chat_msg_chat_created_idx",
            ),
        ]

    def __str__(self) -> str:
        preview = self.content[:50] + "..." if len(self.content) > 50 else self.content
        deleted = " [deleted]" if self.is_deleted else ""
        return f"User {self.user_id}: {preview}{deleted}"

    def on_soft_delete(self) -> None:
        """Drop the content when the message is deleted."""
        self.content = MESSAGE_CONFIG.DELETED_PLACEHOLDER
        type(self).objects.filter(pk=self.pk).update(content=self.content)

    def get_display_content(self) -> str:
        if self.is_deleted:
            return MESSAGE_CONFIG.DELETED_PLACEHOLDER
        return self.content
