"""
URL configuration for chat API.

URL Structure:
    /                               GET, POST
    /unread/                        GET
    /messages/{message_id}/         PUT, PATCH, DELETE
    /{id}/                          GET, PUT, PATCH, DELETE
    /{id}/participants/             POST
    /{id}/participants/{user_id}/   DELETE
    /{id}/messages/                 GET, POST
    /{id}/read/                     POST

All URLs are prefixed with /api/v1/chats/ in the main URL configuration.
"""

from django.urls import path

from chat.views import ChatViewSet, MessageViewSet

app_name = "chat"

urlpatterns = [
    path(
        "",
        ChatViewSet.as_view({"get": "list", "post": "create"}),
        name="chat-list",
    ),
    path(
        "unread/",
        ChatViewSet.as_view({"get": "unread"}),
        name="chat-unread",
    ),
    path(
        "messages/<uuid:pk>/",
        MessageViewSet.as_view(
            {"put": "update", "patch": "partial_update", "delete": "destroy"}
        ),
        name="message-detail",
    ),
    path(
        "<uuid:pk>/",
        ChatViewSet.as_view(
            {
                "get": "retrieve",
                "put": "update",
                "patch": "partial_update",
                "delete": "destroy",
            }
        ),
        name="chat-detail",
    ),
    path(
        "<uuid:pk>/participants/",
        ChatViewSet.as_view({"post": "add_participant"}),
        name="chat-participants",
    ),
    path(
        "<uuid:pk>/participants/<uuid:user_id>/",
        ChatViewSet.as_view({"delete": "remove_participant"}),
        name="chat-participant-detail",
    ),
    path(
        "<uuid:chat_pk>/messages/",
        MessageViewSet.as_view({"get": "list", "post": "create"}),
        name="chat-messages",
    ),
    path(
        "<uuid:pk>/read/",
        ChatViewSet.as_view({"post": "read"}),
        name="chat-read",
    ),
]
