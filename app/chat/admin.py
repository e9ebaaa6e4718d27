"""
Django admin configuration for chat models.

Provides admin interfaces for:
- Chat management
- Participant viewing
- Message moderation
"""

from django.contrib import admin

from chat.models import Chat, ChatMessage, ChatParticipant


class ChatParticipantInline(admin.TabularInline):
    """Inline display of participants in chat admin."""

    model = ChatParticipant
    extra = 0
    readonly_fields = ["joined_at", "last_read_at", "unread_count"]
    raw_id_fields = ["user"]


@admin.register(Chat)
class ChatAdmin(admin.ModelAdmin):
    """Admin interface for Chat model."""

    list_display = [
        "id",
        "type",
        "name",
        "created_by",
        "is_deleted",
        "created_at",
        "last_message_at",
    ]
    list_filter = ["type", "is_deleted", "created_at"]
    search_fields = ["name", "id"]
    readonly_fields = [
        "created_at",
        "updated_at",
        "deleted_at",
        "last_message_at",
        "last_message_text",
        "last_message_user",
    ]
    raw_id_fields = ["created_by"]
    inlines = [ChatParticipantInline]
    ordering = ["-created_at"]

    def get_queryset(self, request):
        return Chat.all_objects.all()


@admin.register(ChatParticipant)
class ChatParticipantAdmin(admin.ModelAdmin):
    """Admin interface for ChatParticipant model."""

    list_display = ["id", "chat", "user", "role", "unread_count", "joined_at"]
    list_filter = ["role", "joined_at"]
    search_fields = ["user__email", "chat__name"]
    readonly_fields = ["created_at", "updated_at", "joined_at"]
    raw_id_fields = ["chat", "user"]
    ordering = ["-joined_at"]


@admin.register(ChatMessage)
class ChatMessageAdmin(admin.ModelAdmin):
    """Admin interface for ChatMessage model."""

    list_display = [
        "id",
        "chat",
        "user",
        "type",
        "content_preview",
        "is_edited",
        "is_deleted",
        "created_at",
    ]
    list_filter = ["type", "is_deleted", "created_at"]
    search_fields = ["content", "user__email"]
    readonly_fields = ["created_at", "updated_at", "deleted_at"]
    raw_id_fields = ["chat", "user", "reply_to"]
    ordering = ["-created_at"]

    @admin.display(description="Content Preview")
    def content_preview(self, obj: ChatMessage) -> str:
        """Return truncated content for list display."""
        max_length = 50
        if len(obj.content) > max_length:
            return obj.content[:max_length] + "..."
        return obj.content
