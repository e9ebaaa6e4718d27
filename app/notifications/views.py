"""
Views for push notification API.

ViewSets:
    DeviceTokenViewSet: Register / unregister the caller's device tokens

Endpoints:
    POST /api/v1/notifications/register-token/ - Register or reactivate a token
    POST /api/v1/notifications/unregister-token/ - Deactivate a token
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from core.views import error_response
from notifications.serializers import (
    DeviceTokenSerializer,
    RegisterDeviceTokenSerializer,
    UnregisterDeviceTokenSerializer,
)
from notifications.services import NotificationService


class DeviceTokenViewSet(viewsets.ViewSet):
    """
    ViewSet for the caller's push device tokens.

    register_token:
        Upsert a token. Registering a known token reactivates it and
        updates its platform.

    unregister_token:
        Stop pushes to a token. Unknown tokens are ignored.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="register_device_token",
        summary="Register device token",
        request=RegisterDeviceTokenSerializer,
        responses={
            200: DeviceTokenSerializer,
            400: OpenApiResponse(description="Invalid token data"),
        },
        tags=["Notifications"],
    )
    @action(detail=False, methods=["post"], url_path="register-token")
    def register_token(self, request):
        serializer = RegisterDeviceTokenSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = NotificationService.register_device_token(
            request.user,
            serializer.validated_data["token"],
            serializer.validated_data["platform"],
        )
        if not result.success:
            return error_response(result)

        return Response(DeviceTokenSerializer(result.data).data)

    @extend_schema(
        operation_id="unregister_device_token",
        summary="Unregister device token",
        request=UnregisterDeviceTokenSerializer,
        responses={204: OpenApiResponse(description="Token deactivated")},
        tags=["Notifications"],
    )
    @action(detail=False, methods=["post"], url_path="unregister-token")
    def unregister_token(self, request):
        serializer = UnregisterDeviceTokenSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        NotificationService.unregister_device_token(
            request.user, serializer.validated_data["token"]
        )
        return Response(status=status.HTTP_204_NO_CONTENT)
