"""
ViewSets for chat API.

This module provides REST API endpoints for the chat system:
- ChatViewSet: Chat CRUD, participants, read state, unread totals
- MessageViewSet: Message history, sending, editing, deletion

URL Structure (mounted at /api/v1/chats/):
    /                               GET, POST
    /unread/                        GET
    /{id}/                          GET, PUT, PATCH, DELETE
    /{id}/participants/             POST
    /{id}/participants/{user_id}/   DELETE
    /{id}/messages/                 GET, POST
    /{id}/read/                     POST
    /messages/{message_id}/         PUT, PATCH, DELETE

Design Decisions:
    - Views handle HTTP concerns only; rules live in chat.services
    - Failed ServiceResults go through core.views.error_response
    - Chat lists and message pages are plain arrays (limit/offset paging)
"""

from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import (
    OpenApiParameter,
    OpenApiResponse,
    extend_schema,
    extend_schema_view,
)
from rest_framework import status, viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from chat.serializers import (
    AddParticipantSerializer,
    ChatCreateSerializer,
    ChatSerializer,
    ChatUpdateSerializer,
    MarkReadSerializer,
    MessageCreateSerializer,
    MessageSerializer,
    MessageUpdateSerializer,
    ParticipantSerializer,
    UnreadCountSerializer,
)
from chat.services import ChatService, MessageService
from core.views import error_response


def _int_param(request, name: str, default: int | None) -> int | None:
    value = request.query_params.get(name)
    if value in (None, ""):
        return default
    try:
        return int(value)
    except ValueError:
        return default


@extend_schema_view(
    list=extend_schema(
        operation_id="list_chats",
        summary="List chats",
        responses={200: ChatSerializer(many=True)},
        tags=["Chat"],
    ),
    create=extend_schema(
        operation_id="create_chat",
        summary="Create chat",
        description=(
            "Create a direct or group chat. For direct chats an existing chat "
            "with the same participant is returned instead of a duplicate."
        ),
        request=ChatCreateSerializer,
        responses={
            201: ChatSerializer,
            400: OpenApiResponse(description="Invalid chat data"),
            404: OpenApiResponse(description="Participant user not found"),
        },
        tags=["Chat"],
    ),
    retrieve=extend_schema(
        operation_id="get_chat",
        summary="Get chat",
        responses={
            200: ChatSerializer,
            404: OpenApiResponse(description="Chat not found or access denied"),
        },
        tags=["Chat"],
    ),
    update=extend_schema(
        operation_id="update_chat",
        summary="Update chat",
        request=ChatUpdateSerializer,
        responses={
            200: ChatSerializer,
            403: OpenApiResponse(description="Only admins can update chat"),
        },
        tags=["Chat"],
    ),
    partial_update=extend_schema(
        operation_id="partial_update_chat",
        summary="Partially update chat",
        request=ChatUpdateSerializer,
        responses={200: ChatSerializer},
        tags=["Chat"],
    ),
    destroy=extend_schema(
        operation_id="delete_chat",
        summary="Delete chat",
        responses={
            204: OpenApiResponse(description="Chat deleted"),
            403: OpenApiResponse(description="Only admins can delete chat"),
        },
        tags=["Chat"],
    ),
)
class ChatViewSet(viewsets.ViewSet):
    """
    ViewSet for chat operations.

    list:
        Chats of the current user, most recent activity first, each with
        participants, last message and the caller's unread count.

    create:
        Create a direct or group chat. The creator becomes admin.

    retrieve:
        Chat details (participants only).

    update / partial_update:
        Rename or change the picture. Chat admins only.

    destroy:
        Soft delete the chat. Chat admins only.
    """

    permission_classes = [IsAuthenticated]

    def _chat_response(self, request, chat_id, status_code=status.HTTP_200_OK):
        result = ChatService.get_chat(chat_id, request.user)
        if not result.success:
            return error_response(result)
        serializer = ChatSerializer(result.data, context={"request": request})
        return Response(serializer.data, status=status_code)

    def list(self, request):
        chats = ChatService.get_user_chats(request.user)
        serializer = ChatSerializer(chats, many=True, context={"request": request})
        return Response(serializer.data)

    def create(self, request):
        serializer = ChatCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = ChatService.create_chat(
            creator=request.user,
            chat_type=data["type"],
            name=data.get("name"),
            avatar_url=data.get("avatar_url"),
            participant_user_id=data.get("participant_user_id"),
            participant_ids=data.get("participant_ids"),
        )
        if not result.success:
            return error_response(result)

        return self._chat_response(request, result.data.pk, status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):
        return self._chat_response(request, pk)

    def update(self, request, pk=None):
        serializer = ChatUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        result = ChatService.update_chat(pk, request.user, serializer.validated_data)
        if not result.success:
            return error_response(result)

        output = ChatSerializer(result.data, context={"request": request})
        return Response(output.data)

    partial_update = update

    def destroy(self, request, pk=None):
        result = ChatService.delete_chat(pk, request.user)
        if not result.success:
            return error_response(result)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        operation_id="add_chat_participant",
        summary="Add participant",
        request=AddParticipantSerializer,
        responses={
            201: ParticipantSerializer,
            400: OpenApiResponse(description="Already a participant or direct chat"),
            403: OpenApiResponse(description="Only admins can add participants"),
            404: OpenApiResponse(description="Chat or user not found"),
        },
        tags=["Chat - Participants"],
    )
    def add_participant(self, request, pk=None):
        serializer = AddParticipantSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = ChatService.add_participant(
            pk,
            request.user,
            serializer.validated_data["user_id"],
            role=serializer.validated_data["role"],
        )
        if not result.success:
            return error_response(result)

        return Response(
            ParticipantSerializer(result.data).data,
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(
        operation_id="remove_chat_participant",
        summary="Remove participant or leave",
        responses={
            204: OpenApiResponse(description="Participant removed"),
            403: OpenApiResponse(description="Only admins can remove participants"),
            404: OpenApiResponse(description="Chat or participant not found"),
        },
        tags=["Chat - Participants"],
    )
    def remove_participant(self, request, pk=None, user_id=None):
        result = ChatService.remove_participant(pk, request.user, user_id)
        if not result.success:
            return error_response(result)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        operation_id="mark_chat_read",
        summary="Mark chat as read",
        request=MarkReadSerializer,
        responses={
            200: ParticipantSerializer,
            403: OpenApiResponse(description="Not a participant"),
        },
        tags=["Chat"],
    )
    def read(self, request, pk=None):
        serializer = MarkReadSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = ChatService.mark_as_read(
            pk,
            request.user,
            last_read_at=serializer.validated_data.get("last_read_at"),
        )
        if not result.success:
            return error_response(result)

        return Response(ParticipantSerializer(result.data).data)

    @extend_schema(
        operation_id="get_unread_total",
        summary="Total unread messages",
        responses={200: UnreadCountSerializer},
        tags=["Chat"],
    )
    def unread(self, request):
        return Response({"unread_count": ChatService.get_total_unread(request.user)})


@extend_schema_view(
    list=extend_schema(
        operation_id="list_chat_messages",
        summary="List messages",
        parameters=[
            OpenApiParameter(
                "limit",
                OpenApiTypes.INT,
                description="Page size (clamped to the configured maximum)",
            ),
            OpenApiParameter("offset", OpenApiTypes.INT, description="Messages to skip"),
        ],
        responses={
            200: MessageSerializer(many=True),
            403: OpenApiResponse(description="Not a participant"),
        },
        tags=["Chat - Messages"],
    ),
    create=extend_schema(
        operation_id="send_chat_message",
        summary="Send message",
        request=MessageCreateSerializer,
        responses={
            201: MessageSerializer,
            400: OpenApiResponse(description="Invalid message"),
            403: OpenApiResponse(description="Not a participant"),
        },
        tags=["Chat - Messages"],
    ),
    update=extend_schema(
        operation_id="edit_chat_message",
        summary="Edit message",
        request=MessageUpdateSerializer,
        responses={
            200: MessageSerializer,
            404: OpenApiResponse(description="Message not found or you are not the author"),
        },
        tags=["Chat - Messages"],
    ),
    partial_update=extend_schema(
        operation_id="partial_edit_chat_message",
        summary="Edit message",
        request=MessageUpdateSerializer,
        responses={200: MessageSerializer},
        tags=["Chat - Messages"],
    ),
    destroy=extend_schema(
        operation_id="delete_chat_message",
        summary="Delete message",
        responses={
            204: OpenApiResponse(description="Message deleted"),
            404: OpenApiResponse(description="Message not found or you are not the author"),
        },
        tags=["Chat - Messages"],
    ),
)
class MessageViewSet(viewsets.ViewSet):
    """
    ViewSet for message operations.

    list:
        Messages of a chat, newest first. Deleted messages are included
        with placeholder content.

    create:
        Send a message. Other participants' unread counters are incremented.

    update / partial_update:
        Edit own message.

    destroy:
        Soft delete own message.
    """

    permission_classes = [IsAuthenticated]

    def list(self, request, chat_pk=None):
        result = MessageService.get_messages(
            chat_pk,
            request.user,
            limit=_int_param(request, "limit", None),
            offset=_int_param(request, "offset", 0),
        )
        if not result.success:
            return error_response(result)
        return Response(MessageSerializer(result.data, many=True).data)

    def create(self, request, chat_pk=None):
        serializer = MessageCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = MessageService.create_message(
            chat_pk,
            request.user,
            content=data["content"],
            message_type=data["type"],
            metadata=data.get("metadata"),
            reply_to_id=data.get("reply_to_id"),
        )
        if not result.success:
            return error_response(result)

        return Response(
            MessageSerializer(result.data).data,
            status=status.HTTP_201_CREATED,
        )

    def update(self, request, pk=None):
        serializer = MessageUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = MessageService.update_message(
            pk, request.user, serializer.validated_data["content"]
        )
        if not result.success:
            return error_response(result)

        return Response(MessageSerializer(result.data).data)

    partial_update = update

    def destroy(self, request, pk=None):
        result = MessageService.delete_message(pk, request.user)
        if not result.success:
            return error_response(result)
        return Response(status=status.HTTP_204_NO_CONTENT)
