"""
Chat system service layer.

This module provides the business logic for the chat system, encapsulating
all operations on chats, participants, and messages.

Services:
    ChatService: Chat lifecycle and membership (create, list, update, add/remove
        participants, delete, mark as read, unread totals)
    MessageService: Message operations (send, list, edit, delete)

Design Principles:
    - Services are stateless (use class methods)
    - Expected failures return ServiceResult.failure()
    - Unexpected failures raise exceptions
    - Realtime events and push notifications are scheduled with
      transaction.on_commit, so they only fire for committed changes

Access Rules:
    - A chat is visible only to its participants; everyone else gets
      CHAT_NOT_FOUND, so the chat's existence is not revealed
    - Chat admins rename the chat, manage participants and delete it
    - Only the author edits or deletes a message

Usage:
    from chat.services import ChatService, MessageService

    result = ChatService.create_chat(
        creator=user,
        chat_type=ChatType.DIRECT,
        participant_user_id=other_user.id,
    )
    if result.success:
        chat = result.data

    result = MessageService.create_message(chat.id, user, content="Hello!")
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from django.conf import settings
from django.db import IntegrityError, transaction
from django.db.models import F, OuterRef, Prefetch, Subquery, Sum
from django.utils import timezone
from kombu.exceptions import OperationalError

from authentication.models import User
from chat import realtime
from chat.constants import MESSAGE_CONFIG
from chat.models import (
    Chat,
    ChatMessage,
    ChatParticipant,
    ChatType,
    MessageType,
    ParticipantRole,
)
from chat.serializers import ChatSerializer, MessageSerializer, ParticipantSerializer
from core.services import BaseService, ServiceResult

if TYPE_CHECKING:
    from datetime import datetime
    from uuid import UUID

logger = logging.getLogger(__name__)


def _chat_not_found() -> ServiceResult:
    return ServiceResult.failure(
        "Chat not found or access denied",
        error_code="CHAT_NOT_FOUND",
    )


def _not_participant() -> ServiceResult:
    return ServiceResult.failure(
        "You are not a participant of this chat",
        error_code="NOT_PARTICIPANT",
    )


def _participants_prefetch() -> Prefetch:
    return Prefetch(
        "participants",
        queryset=ChatParticipant.objects.select_related("user__profile").order_by(
            "joined_at"
        ),
    )


def _serialize_chat(chat_id, viewer=None) -> dict:
    chat = Chat.objects.prefetch_related(_participants_prefetch()).get(pk=chat_id)
    return ChatSerializer(chat, context={"user": viewer}).data


def _queue_push_notification(message_id, recipient_ids: list[str]) -> None:
    from notifications.tasks import send_chat_push_notification

    try:
        send_chat_push_notification.delay(str(message_id), recipient_ids)
    except OperationalError as exc:
        logger.error(f"Could not queue push notification for message {message_id}: {exc}")


class ChatService(BaseService):
    """
    Service for chat lifecycle and membership.

    Methods:
        create_chat: Create a direct or group chat
        get_user_chats: List the user's chats, most recent activity first
        get_chat: Get one chat the user participates in
        update_chat: Rename / change picture (admin only)
        add_participant: Add a user to a group (admin only)
        remove_participant: Remove a user, or leave
        delete_chat: Soft delete a chat (admin only)
        mark_as_read: Reset the caller's unread counter
        get_total_unread: Sum of the caller's unread counters
    """

    @classmethod
    def get_participant(cls, chat_id: UUID, user: User) -> ChatParticipant | None:
        """Membership of `user` in a live chat, or None."""
        return (
            ChatParticipant.objects.select_related("chat")
            .filter(chat_id=chat_id, chat__is_deleted=False, user=user)
            .first()
        )

    @classmethod
    def is_participant(cls, chat_id: UUID, user: User) -> bool:
        return ChatParticipant.objects.filter(
            chat_id=chat_id, chat__is_deleted=False, user=user
        ).exists()

    @classmethod
    def create_chat(
        cls,
        creator: User,
        chat_type: str = ChatType.DIRECT,
        name: str | None = None,
        avatar_url: str | None = None,
        participant_user_id: UUID | None = None,
        participant_ids: list[UUID] | None = None,
    ) -> ServiceResult[Chat]:
        """
        Create a chat with `creator` as admin.

        Direct chats are unique per user pair: if a live direct chat between
        the two users exists, it is returned instead of creating a duplicate.

        Error codes:
            PARTICIPANT_REQUIRED: Direct chat without participant_user_id
            CANNOT_CHAT_WITH_SELF: Direct chat with yourself
            USER_NOT_FOUND: Participant (or one of participant_ids) not found
            NAME_REQUIRED: Group chat without a name
        """
        if chat_type == ChatType.DIRECT:
            return cls._create_direct(creator, participant_user_id, avatar_url)
        return cls._create_group(creator, name, avatar_url, participant_ids or [])

    @classmethod
    def _create_direct(
        cls,
        creator: User,
        participant_user_id: UUID | None,
        avatar_url: str | None,
    ) -> ServiceResult[Chat]:
        if not participant_user_id:
            return ServiceResult.failure(
                "participant_user_id is required for direct chats",
                error_code="PARTICIPANT_REQUIRED",
            )

        if str(participant_user_id) == str(creator.pk):
            return ServiceResult.failure(
                "Cannot create a direct chat with yourself",
                error_code="CANNOT_CHAT_WITH_SELF",
            )

        other = User.objects.filter(pk=participant_user_id, is_active=True).first()
        if other is None:
            return ServiceResult.failure(
                "Participant user not found",
                error_code="USER_NOT_FOUND",
            )

        existing = cls._find_direct_chat(creator, other)
        if existing is not None:
            return ServiceResult.success(existing)

        with cls.atomic():
            # Lock both users in pk order so concurrent requests for the
            # same pair serialize, then look again under the lock.
            list(
                User.objects.select_for_update()
                .filter(pk__in=[creator.pk, other.pk])
                .order_by("pk")
            )
            existing = cls._find_direct_chat(creator, other)
            if existing is not None:
                return ServiceResult.success(existing)

            chat = Chat.objects.create(
                type=ChatType.DIRECT,
                avatar_url=avatar_url,
                created_by=creator,
            )
            ChatParticipant.objects.bulk_create(
                [
                    ChatParticipant(chat=chat, user=creator, role=ParticipantRole.ADMIN),
                    ChatParticipant(chat=chat, user=other, role=ParticipantRole.MEMBER),
                ]
            )
            realtime.notify_new_chat([other.pk], _serialize_chat(chat.pk, viewer=other))

        cls.get_logger().info(
            f"Created direct chat {chat.pk} between users {creator.pk} and {other.pk}"
        )
        return ServiceResult.success(chat)

    @classmethod
    def _find_direct_chat(cls, user: User, other: User) -> Chat | None:
        existing = (
            Chat.objects.filter(type=ChatType.DIRECT, participants__user=user)
            .filter(participants__user=other)
            .first()
        )
        if existing is not None:
            cls.get_logger().debug(
                f"Found existing direct chat {existing.pk} "
                f"between users {user.pk} and {other.pk}"
            )
        return existing

    @classmethod
    def _create_group(
        cls,
        creator: User,
        name: str | None,
        avatar_url: str | None,
        participant_ids: list[UUID],
    ) -> ServiceResult[Chat]:
        name = (name or "").strip()
        if not name:
            return ServiceResult.failure(
                "Group chats require a name",
                error_code="NAME_REQUIRED",
            )

        member_ids = {str(pk) for pk in participant_ids} - {str(creator.pk)}
        members = list(User.objects.filter(pk__in=member_ids, is_active=True))
        if len(members) != len(member_ids):
            return ServiceResult.failure(
                "Participant user not found",
                error_code="USER_NOT_FOUND",
            )

        with cls.atomic():
            chat = Chat.objects.create(
                type=ChatType.GROUP,
                name=name,
                avatar_url=avatar_url,
                created_by=creator,
            )
            ChatParticipant.objects.bulk_create(
                [ChatParticipant(chat=chat, user=creator, role=ParticipantRole.ADMIN)]
                + [
                    ChatParticipant(chat=chat, user=member, role=ParticipantRole.MEMBER)
                    for member in members
                ]
            )
            if members:
                realtime.notify_new_chat(
                    [member.pk for member in members], _serialize_chat(chat.pk)
                )

        cls.get_logger().info(
            f"Created group chat {chat.pk} by user {creator.pk} "
            f"with {len(members) + 1} participants"
        )
        return ServiceResult.success(chat)

    @classmethod
    def get_user_chats(cls, user: User) -> list[Chat]:
        """
        Chats `user` participates in, excluding deleted ones.

        Ordered by last activity (chats without messages last, newest first).
        Each chat gets a `last_message` attribute and prefetched participants.
        """
        latest = (
            ChatMessage.objects.filter(chat=OuterRef("pk"))
            .order_by("-created_at")
            .values("pk")[:1]
        )
        chats = list(
            Chat.objects.filter(participants__user=user)
            .annotate(latest_message_id=Subquery(latest))
            .prefetch_related(_participants_prefetch())
            .order_by(F("last_message_at").desc(nulls_last=True), "-created_at")
        )

        message_ids = [chat.latest_message_id for chat in chats if chat.latest_message_id]
        messages = ChatMessage.objects.select_related("user__profile", "reply_to").in_bulk(
            message_ids
        )
        for chat in chats:
            chat.last_message = messages.get(chat.latest_message_id)
        return chats

    @classmethod
    def get_chat(cls, chat_id: UUID, user: User) -> ServiceResult[Chat]:
        """
        Get a chat `user` participates in.

        Error codes:
            CHAT_NOT_FOUND: Missing, deleted, or caller is not a participant
        """
        chat = (
            Chat.objects.filter(pk=chat_id, participants__user=user)
            .prefetch_related(_participants_prefetch())
            .first()
        )
        if chat is None:
            return _chat_not_found()
        return ServiceResult.success(chat)

    @classmethod
    def update_chat(cls, chat_id: UUID, user: User, changes: dict) -> ServiceResult[Chat]:
        """
        Apply name / avatar_url changes. Only keys present in `changes` are set.

        Error codes:
            CHAT_NOT_FOUND: Missing chat or not a participant
            ADMIN_REQUIRED: Caller is not a chat admin
            NAME_REQUIRED: Group renamed to an empty name
        """
        participant = cls.get_participant(chat_id, user)
        if participant is None:
            return _chat_not_found()
        if not participant.is_admin:
            return ServiceResult.failure(
                "Only admins can update chat",
                error_code="ADMIN_REQUIRED",
            )

        chat = participant.chat
        update_fields = []
        if "name" in changes:
            name = (changes["name"] or "").strip() or None
            if chat.is_group and not name:
                return ServiceResult.failure(
                    "Group chats require a name",
                    error_code="NAME_REQUIRED",
                )
            chat.name = name
            update_fields.append("name")
        if "avatar_url" in changes:
            chat.avatar_url = changes["avatar_url"] or None
            update_fields.append("avatar_url")

        with cls.atomic():
            if update_fields:
                chat.save(update_fields=[*update_fields, "updated_at"])
            realtime.notify_chat_update(
                chat.pk,
                {"type": "chat_updated", "chat": _serialize_chat(chat.pk)},
            )

        cls.get_logger().info(f"User {user.pk} updated chat {chat.pk}: {update_fields}")
        return cls.get_chat(chat.pk, user)

    @classmethod
    def add_participant(
        cls,
        chat_id: UUID,
        actor: User,
        user_id: UUID,
        role: str = ParticipantRole.MEMBER,
    ) -> ServiceResult[ChatParticipant]:
        """
        Add a user to a group chat.

        Error codes:
            CHAT_NOT_FOUND: Missing chat or actor not a participant
            ADMIN_REQUIRED: Actor is not a chat admin
            DIRECT_CHAT_IMMUTABLE: Direct chats cannot gain participants
            USER_NOT_FOUND: User to add does not exist
            ALREADY_PARTICIPANT: User is already in the chat
        """
        participant = cls.get_participant(chat_id, actor)
        if participant is None:
            return _chat_not_found()
        if not participant.is_admin:
            return ServiceResult.failure(
                "Only admins can add participants",
                error_code="ADMIN_REQUIRED",
            )

        chat = participant.chat
        if chat.is_direct:
            return ServiceResult.failure(
                "Cannot add participants to a direct chat",
                error_code="DIRECT_CHAT_IMMUTABLE",
            )

        new_user = User.objects.filter(pk=user_id, is_active=True).first()
        if new_user is None:
            return ServiceResult.failure(
                "Participant user not found",
                error_code="USER_NOT_FOUND",
            )

        if ChatParticipant.objects.filter(chat=chat, user=new_user).exists():
            return ServiceResult.failure(
                "User is already a participant",
                error_code="ALREADY_PARTICIPANT",
            )

        try:
            with cls.atomic():
                added = ChatParticipant.objects.create(chat=chat, user=new_user, role=role)
                realtime.notify_new_chat(
                    [new_user.pk], _serialize_chat(chat.pk, viewer=new_user)
                )
                realtime.notify_chat_update(
                    chat.pk,
                    {
                        "type": "participant_added",
                        "participant": ParticipantSerializer(added).data,
                    },
                )
        except IntegrityError:
            return ServiceResult.failure(
                "User is already a participant",
                error_code="ALREADY_PARTICIPANT",
            )

        cls.get_logger().info(
            f"User {actor.pk} added user {new_user.pk} to chat {chat.pk} as {role}"
        )
        return ServiceResult.success(added)

    @classmethod
    def remove_participant(
        cls,
        chat_id: UUID,
        actor: User,
        user_id: UUID,
    ) -> ServiceResult[None]:
        """
        Remove a participant from a group chat, or leave it.

        Admins may remove anyone; any participant may remove themself.
        If the last admin leaves, the longest-standing remaining participant
        becomes admin. If nobody is left, the chat is soft deleted.

        Error codes:
            CHAT_NOT_FOUND: Missing chat or actor not a participant
            ADMIN_REQUIRED: Removing someone else without being admin
            DIRECT_CHAT_IMMUTABLE: Direct chat membership is fixed
            PARTICIPANT_NOT_FOUND: Target is not in the chat
        """
        actor_participant = cls.get_participant(chat_id, actor)
        if actor_participant is None:
            return _chat_not_found()

        is_self = str(user_id) == str(actor.pk)
        if not is_self and not actor_participant.is_admin:
            return ServiceResult.failure(
                "Only admins can remove participants",
                error_code="ADMIN_REQUIRED",
            )

        chat = actor_participant.chat
        if chat.is_direct:
            return ServiceResult.failure(
                "Cannot remove participants from a direct chat",
                error_code="DIRECT_CHAT_IMMUTABLE",
            )

        with cls.atomic():
            chat = Chat.objects.select_for_update().get(pk=chat.pk)
            if not ChatParticipant.objects.filter(chat=chat, user_id=user_id).exists():
                return ServiceResult.failure(
                    "Participant not found",
                    error_code="PARTICIPANT_NOT_FOUND",
                )
            cls._detach_participant(chat, user_id)

        cls.get_logger().info(f"User {actor.pk} removed user {user_id} from chat {chat.pk}")
        return ServiceResult.success(None)

    @classmethod
    def _detach_participant(cls, chat: Chat, user_id) -> ChatParticipant | None:
        """
        Drop a participant from a locked group chat and repair the chat.

        If no admin is left, the longest-standing remaining participant is
        promoted. If nobody is left, the chat is soft deleted. Must run
        inside atomic() with the chat row locked.

        Returns:
            The promoted participant, if any
        """
        ChatParticipant.objects.filter(chat=chat, user_id=user_id).delete()

        remaining = ChatParticipant.objects.filter(chat=chat).order_by("joined_at")
        promoted = None
        if not remaining.exists():
            chat.soft_delete()
        elif not remaining.filter(role=ParticipantRole.ADMIN).exists():
            promoted = remaining.first()
            promoted.role = ParticipantRole.ADMIN
            promoted.save(update_fields=["role", "updated_at"])
            cls.get_logger().info(
                f"Promoted user {promoted.user_id} to admin of chat {chat.pk}"
            )

        realtime.notify_chat_deleted([user_id], chat.pk)
        if not chat.is_deleted:
            realtime.notify_chat_update(
                chat.pk,
                {
                    "type": "participant_removed",
                    "userId": user_id,
                    "promotedUserId": promoted.user_id if promoted else None,
                },
            )
        return promoted

    @classmethod
    def detach_user_from_chats(cls, user: User) -> None:
        """
        Take a user out of every live chat ahead of account deletion.

        Group chats keep an admin (or are soft deleted when emptied).
        Direct chats cannot outlive one of their two members, so they are
        soft deleted for both. Must run inside atomic().
        """
        chat_ids = list(
            ChatParticipant.objects.filter(user=user, chat__is_deleted=False).values_list(
                "chat_id", flat=True
            )
        )
        chats = Chat.objects.select_for_update().filter(pk__in=chat_ids).order_by("pk")
        for chat in chats:
            if chat.is_direct:
                member_ids = list(
                    ChatParticipant.objects.filter(chat=chat).values_list(
                        "user_id", flat=True
                    )
                )
                chat.soft_delete()
                realtime.notify_chat_deleted(member_ids, chat.pk)
            else:
                cls._detach_participant(chat, user.pk)

        if chat_ids:
            cls.get_logger().info(f"Detached user {user.pk} from {len(chat_ids)} chats")

    @classmethod
    def delete_chat(cls, chat_id: UUID, actor: User) -> ServiceResult[None]:
        """
        Soft delete a chat.

        Error codes:
            CHAT_NOT_FOUND: Missing chat or actor not a participant
            ADMIN_REQUIRED: Actor is not a chat admin
        """
        participant = cls.get_participant(chat_id, actor)
        if participant is None:
            return _chat_not_found()
        if not participant.is_admin:
            return ServiceResult.failure(
                "Only admins can delete chat",
                error_code="ADMIN_REQUIRED",
            )

        chat = participant.chat
        member_ids = list(
            ChatParticipant.objects.filter(chat=chat).values_list("user_id", flat=True)
        )
        with cls.atomic():
            chat.soft_delete()
            realtime.notify_chat_deleted(member_ids, chat.pk)

        cls.get_logger().info(f"User {actor.pk} deleted chat {chat.pk}")
        return ServiceResult.success(None)

    @classmethod
    def mark_as_read(
        cls,
        chat_id: UUID,
        user: User,
        last_read_at: datetime | None = None,
    ) -> ServiceResult[ChatParticipant]:
        """
        Reset the caller's unread counter and record the read time.

        Error codes:
            NOT_PARTICIPANT: Caller is not in the chat
        """
        participant = cls.get_participant(chat_id, user)
        if participant is None:
            return _not_participant()

        participant.last_read_at = last_read_at or timezone.now()
        participant.unread_count = 0
        with cls.atomic():
            participant.save(update_fields=["last_read_at", "unread_count", "updated_at"])
            realtime.notify_chat_update(
                chat_id,
                {
                    "type": "read",
                    "userId": user.pk,
                    "lastReadAt": participant.last_read_at,
                },
            )

        return ServiceResult.success(participant)

    @classmethod
    def get_total_unread(cls, user: User) -> int:
        """Sum of the user's unread counters over live chats."""
        total = ChatParticipant.objects.filter(
            user=user, chat__is_deleted=False
        ).aggregate(total=Sum("unread_count"))["total"]
        return total or 0


class MessageService(BaseService):
    """
    Service for message operations.

    Methods:
        create_message: Send a message and bump unread counters
        get_messages: Page through history, newest first
        update_message: Edit own message
        delete_message: Soft delete own message
    """

    @classmethod
    def create_message(
        cls,
        chat_id: UUID,
        sender: User,
        content: str,
        message_type: str = MessageType.TEXT,
        metadata: dict | None = None,
        reply_to_id: UUID | None = None,
    ) -> ServiceResult[ChatMessage]:
        """
        Send a message to a chat.

        In one transaction the message is created, the chat's last-message
        preview is updated and every other participant's unread counter is
        incremented. After commit the message is broadcast and push
        notifications are queued for the other participants.

        Error codes:
            NOT_PARTICIPANT: Sender is not in the chat
            EMPTY_CONTENT: Blank content
            CONTENT_TOO_LONG: Content over MESSAGE_CONFIG.MAX_CONTENT_LENGTH
            INVALID_REPLY_TO: reply_to is not a message of this chat
        """
        if not cls.is_participant_of(chat_id, sender):
            return _not_participant()

        if not content or not content.strip():
            return ServiceResult.failure(
                "Message content cannot be empty",
                error_code="EMPTY_CONTENT",
            )
        if len(content) > MESSAGE_CONFIG.MAX_CONTENT_LENGTH:
            return ServiceResult.failure(
                f"Message content cannot exceed {MESSAGE_CONFIG.MAX_CONTENT_LENGTH} characters",
                error_code="CONTENT_TOO_LONG",
            )

        reply_to = None
        if reply_to_id:
            reply_to = ChatMessage.objects.filter(pk=reply_to_id, chat_id=chat_id).first()
            if reply_to is None:
                return ServiceResult.failure(
                    "Reply target must be a message in this chat",
                    error_code="INVALID_REPLY_TO",
                )

        with cls.atomic():
            chat = Chat.objects.select_for_update().get(pk=chat_id)
            message = ChatMessage.objects.create(
                chat=chat,
                user=sender,
                content=content,
                type=message_type,
                metadata=metadata,
                reply_to=reply_to,
            )

            chat.last_message_at = message.created_at
            chat.last_message_text = content
            chat.last_message_user = sender
            chat.save(
                update_fields=[
                    "last_message_at",
                    "last_message_text",
                    "last_message_user",
                    "updated_at",
                ]
            )

            others = ChatParticipant.objects.filter(chat=chat).exclude(user=sender)
            recipient_ids = [str(pk) for pk in others.values_list("user_id", flat=True)]
            others.update(unread_count=F("unread_count") + 1)

            message = ChatMessage.objects.select_related("user__profile", "reply_to").get(
                pk=message.pk
            )
            realtime.notify_new_message(
                chat.pk, MessageSerializer(message).data, sender.pk, recipient_ids
            )
            if recipient_ids:
                transaction.on_commit(
                    lambda: _queue_push_notification(message.pk, recipient_ids)
                )

        cls.get_logger().info(
            f"User {sender.pk} sent message {message.pk} to chat {chat_id} "
            f"({len(recipient_ids)} recipients)"
        )
        return ServiceResult.success(message)

    @classmethod
    def is_participant_of(cls, chat_id: UUID, user: User) -> bool:
        return ChatService.is_participant(chat_id, user)

    @classmethod
    def get_messages(
        cls,
        chat_id: UUID,
        user: User,
        limit: int | None = None,
        offset: int = 0,
    ) -> ServiceResult[list[ChatMessage]]:
        """
        Page through a chat's messages, newest first.

        `limit` is clamped to [1, CHAT_MESSAGES_MAX_LIMIT] and `offset` to >= 0.
        Deleted messages are included with placeholder content.

        Error codes:
            NOT_PARTICIPANT: Caller is not in the chat
        """
        if not cls.is_participant_of(chat_id, user):
            return _not_participant()

        if limit is None:
            limit = settings.CHAT_MESSAGES_DEFAULT_LIMIT
        limit = max(1, min(limit, settings.CHAT_MESSAGES_MAX_LIMIT))
        offset = max(0, offset)

        messages = list(
            ChatMessage.objects.filter(chat_id=chat_id)
            .select_related("user__profile", "reply_to")
            .order_by("-created_at", "-id")[offset : offset + limit]
        )
        return ServiceResult.success(messages)

    @classmethod
    def _own_message(cls, message_id: UUID, user: User) -> ChatMessage | None:
        return (
            ChatMessage.objects.select_related("chat", "user__profile", "reply_to")
            .filter(pk=message_id, user=user, chat__is_deleted=False)
            .first()
        )

    @classmethod
    def update_message(
        cls,
        message_id: UUID,
        user: User,
        content: str,
    ) -> ServiceResult[ChatMessage]:
        """
        Edit the content of the caller's own message.

        Error codes:
            MESSAGE_NOT_FOUND: Missing or not authored by the caller
            MESSAGE_DELETED: Deleted messages cannot be edited
            EMPTY_CONTENT / CONTENT_TOO_LONG: Invalid content
        """
        message = cls._own_message(message_id, user)
        if message is None:
            return ServiceResult.failure(
                "Message not found or you are not the author",
                error_code="MESSAGE_NOT_FOUND",
            )
        if message.is_deleted:
            return ServiceResult.failure(
                "Cannot edit a deleted message",
                error_code="MESSAGE_DELETED",
            )
        if not content or not content.strip():
            return ServiceResult.failure(
                "Message content cannot be empty",
                error_code="EMPTY_CONTENT",
            )
        if len(content) > MESSAGE_CONFIG.MAX_CONTENT_LENGTH:
            return ServiceResult.failure(
                f"Message content cannot exceed {MESSAGE_CONFIG.MAX_CONTENT_LENGTH} characters",
                error_code="CONTENT_TOO_LONG",
            )

        message.content = content
        message.is_edited = True
        with cls.atomic():
            message.save(update_fields=["content", "is_edited", "updated_at"])
            Chat.all_objects.filter(
                pk=message.chat_id, last_message_at=message.created_at
            ).update(last_message_text=content)
            realtime.notify_chat_update(
                message.chat_id,
                {"type": "message_updated", "message": MessageSerializer(message).data},
            )

        cls.get_logger().info(f"User {user.pk} edited message {message.pk}")
        return ServiceResult.success(message)

    @classmethod
    def delete_message(cls, message_id: UUID, user: User) -> ServiceResult[None]:
        """
        Soft delete the caller's own message.

        The content is replaced by MESSAGE_CONFIG.DELETED_PLACEHOLDER; if it
        was the chat's last message, the chat preview is updated too.

        Error codes:
            MESSAGE_NOT_FOUND: Missing or not authored by the caller
            MESSAGE_DELETED: Already deleted
        """
        message = cls._own_message(message_id, user)
        if message is None:
            return ServiceResult.failure(
                "Message not found or you are not the author",
                error_code="MESSAGE_NOT_FOUND",
            )
        if message.is_deleted:
            return ServiceResult.failure(
                "Message already deleted",
                error_code="MESSAGE_DELETED",
            )

        with cls.atomic():
            message.soft_delete()
            latest_id = (
                ChatMessage.objects.filter(chat_id=message.chat_id)
                .order_by("-created_at", "-id")
                .values_list("pk", flat=True)
                .first()
            )
            if latest_id == message.pk:
                Chat.all_objects.filter(pk=message.chat_id).update(
                    last_message_text=MESSAGE_CONFIG.DELETED_PLACEHOLDER
                )
            realtime.notify_chat_update(
                message.chat_id,
                {"type": "message_deleted", "messageId": message.pk},
            )

        cls.get_logger().info(f"User {user.pk} deleted message {message.pk}")
        return ServiceResult.success(None)
