"""
Factory Boy factories for chat models.

Provides test data generation for:
- Chat: Direct and group chats
- ChatParticipant: User membership in chats
- ChatMessage: Messages

Usage:
    from chat.tests.factories import (
        ChatFactory,
        DirectChatFactory,
        GroupChatFactory,
        ChatParticipantFactory,
        ChatMessageFactory,
    )

    # Group chat whose creator is admin
    chat = GroupChatFactory()

    # Direct chat between two users
    chat = DirectChatFactory(created_by=user, other=other_user)

    # Message in a chat
    message = ChatMessageFactory(chat=chat, user=user)
"""

import factory

from authentication.tests.factories import UserFactory
from chat.models import (
    Chat,
    ChatMessage,
    ChatParticipant,
    ChatType,
    MessageType,
    ParticipantRole,
)


class ChatFactory(factory.django.DjangoModelFactory):
    """
    Base factory for Chat model.

    Creates a group chat without participants.
    Use DirectChatFactory or GroupChatFactory for chats with members.
    """

    class Meta:
        model = Chat

    type = ChatType.GROUP
    name = factory.Sequence(lambda n: f"Group Chat {n}")
    created_by = factory.SubFactory(UserFactory)


class GroupChatFactory(ChatFactory):
    """
    Group chat with the creator as admin.

    Examples:
        chat = GroupChatFactory(members=[user2, user3])
    """

    class Meta:
        model = Chat
        skip_postgeneration_save = True

    @factory.post_generation
    def members(obj, create, extracted, **kwargs):
        if not create:
            return
        ChatParticipant.objects.create(
            chat=obj, user=obj.created_by, role=ParticipantRole.ADMIN
        )
        for member in extracted or []:
            ChatParticipant.objects.create(
                chat=obj, user=member, role=ParticipantRole.MEMBER
            )


class DirectChatFactory(ChatFactory):
    """
    Direct chat between created_by (admin) and `other` (member).

    Examples:
        chat = DirectChatFactory(created_by=user, other=other_user)
    """

    class Meta:
        model = Chat
        skip_postgeneration_save = True

    type = ChatType.DIRECT
    name = None

    @factory.post_generation
    def other(obj, create, extracted, **kwargs):
        if not create:
            return
        ChatParticipant.objects.create(
            chat=obj, user=obj.created_by, role=ParticipantRole.ADMIN
        )
        ChatParticipant.objects.create(
            chat=obj, user=extracted or UserFactory(), role=ParticipantRole.MEMBER
        )


class ChatParticipantFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = ChatParticipant

    chat = factory.SubFactory(ChatFactory)
    user = factory.SubFactory(UserFactory)
    role = ParticipantRole.MEMBER


class ChatMessageFactory(factory.django.DjangoModelFactory):
    """
    Message in a chat.

    Does not touch the chat's last-message preview or unread counters;
    use MessageService.create_message when a test depends on those.
    """

    class Meta:
        model = ChatMessage

    chat = factory.SubFactory(ChatFactory)
    user = factory.SubFactory(UserFactory)
    content = factory.Sequence(lambda n: f"Message {n}")
    type = MessageType.TEXT
