"""
Constants and configuration for the chat module.

This module centralizes configuration values for:
- Message operations (content limits, deleted placeholder)
- WebSocket fan-out (group names, close codes, token sources)

Paging limits for message history live in settings
(CHAT_MESSAGES_DEFAULT_LIMIT / CHAT_MESSAGES_MAX_LIMIT) so they can be
tuned per environment.

Import example:
    from chat.constants import MESSAGE_CONFIG, REALTIME_CONFIG
"""

from typing import Final


# =============================================================================
# Message Configuration
# =============================================================================


class MESSAGE_CONFIG:
    """Configuration for message operations."""

    MAX_CONTENT_LENGTH: Final[int] = 10000  # Characters

    # Shown instead of the content of a soft-deleted message
    DELETED_PLACEHOLDER: Final[str] = "Message deleted"

    # Length of the message preview in push notifications
    PUSH_PREVIEW_LENGTH: Final[int] = 100


# =============================================================================
# Realtime Configuration
# =============================================================================


class REALTIME_CONFIG:
    """Configuration for WebSocket fan-out."""

    # Channel layer groups
    USER_GROUP_PREFIX: Final[str] = "user_"
    CHAT_GROUP_PREFIX: Final[str] = "chat_"

    # Close code sent when the socket cannot be authenticated
    CLOSE_UNAUTHENTICATED: Final[int] = 4001

    # Sec-WebSocket-Protocol entry carrying the token: "bearer.<token>"
    SUBPROTOCOL_TOKEN_PREFIX: Final[str] = "bearer."
