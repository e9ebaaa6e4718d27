"""
Chat app for real-time messaging.

This app handles:
- Chats (direct and group) and their participants
- Message sending, editing and history
- Unread counters per participant
- WebSocket fan-out through the channel layer

Related apps:
    - authentication: User model for participants
    - notifications: Push notifications for new messages

WebSocket Support:
    Uses Django Channels for real-time communication.
    See consumers.py for WebSocket handlers.
    See routing.py for WebSocket URL patterns.
    See realtime.py for the server-side broadcast helpers.

Usage:
    from chat.services import ChatService, MessageService

    result = ChatService.create_chat(
        creator=user,
        chat_type="group",
        name="Study group",
        participant_ids=[other_user.id],
    )

    result = MessageService.create_message(result.data.id, user, content="Hello!")
"""
