"""
Chat application configuration.

This app provides the chat system with:
- Direct (1:1) and group chats
- Admin/member roles
- Per-participant unread counters
- Soft deletion of chats and messages
"""

from django.apps import AppConfig


class ChatConfig(AppConfig):
    """Configuration for the chat application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "chat"
    verbose_name = "Chat"
