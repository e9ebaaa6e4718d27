"""
Authentication and profile views.

This module provides API views for:
- The caller's own record: read, peek, bootstrap, update, avatar upload
- Another user's public profile

Related files:
    - backends.py: OIDCAuthentication / HasVerifiedToken
    - serializers.py: Request/response serialization
    - services.py: ProfileService
    - urls.py: URL routing

Note:
    Login itself happens at the identity provider. Clients send the
    provider's access token as "Authorization: Bearer <token>" and call
    POST /me/bootstrap/ once after login to create or refresh the local
    record. GET /me/ and GET /me/peek/ work before bootstrap.
"""

from django.shortcuts import get_object_or_404
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from authentication.backends import HasVerifiedToken
from authentication.models import User
from authentication.serializers import (
    AvatarUploadSerializer,
    MeEnvelopeSerializer,
    MeSerializer,
    MeUpdateSerializer,
    PeekSerializer,
    PublicProfileSerializer,
)
from authentication.services import ProfileService
from core.services import ServiceResult
from core.views import error_response


def _me_payload(user, request):
    return {
        "ok": True,
        "me": MeSerializer(user, context={"request": request}).data if user else None,
    }


class MeView(APIView):
    """
    The authenticated caller's record.

    GET: {"ok": true, "me": {...}} or {"ok": true, "me": null} before bootstrap
    PUT/PATCH: Partial profile update (name, avatar_url, username, bio, birth_date)
    """

    permission_classes = [HasVerifiedToken]

    @extend_schema(
        operation_id="get_me",
        summary="Get my profile",
        responses={200: MeEnvelopeSerializer},
        tags=["Me"],
    )
    def get(self, request):
        user = ProfileService.get_by_sub(request.auth.sub)
        return Response(_me_payload(user, request))

    @extend_schema(
        operation_id="update_me",
        summary="Update my profile",
        request=MeUpdateSerializer,
        responses={
            200: MeEnvelopeSerializer,
            400: OpenApiResponse(description="Invalid or taken username"),
            404: OpenApiResponse(description="Not bootstrapped yet"),
        },
        tags=["Me"],
    )
    def put(self, request):
        user = ProfileService.get_by_sub(request.auth.sub)
        if user is None:
            return error_response(
                ServiceResult.failure("User not found", error_code="USER_NOT_FOUND")
            )

        serializer = MeUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        result = ProfileService.update_me(user, serializer.validated_data)
        if not result.success:
            return error_response(result)

        user.refresh_from_db()
        return Response(_me_payload(user, request))

    patch = put


class MePeekView(APIView):
    """
    Check whether the caller has a local record, without creating one.

    Profile hints come from the identity provider's userinfo.
    """

    permission_classes = [HasVerifiedToken]

    @extend_schema(
        operation_id="peek_me",
        summary="Peek at my registration state",
        responses={200: PeekSerializer},
        tags=["Me"],
    )
    def get(self, request):
        userinfo = request.auth
        exists = User.objects.filter(auth_user_id=userinfo.sub).exists()
        return Response(
            {
                "exists": exists,
                "profile": {
                    "email": userinfo.email,
                    "name": userinfo.name,
                    "avatarUrl": None,
                },
            }
        )


class MeBootstrapView(APIView):
    """Create or refresh the caller's local record from the token's userinfo."""

    permission_classes = [HasVerifiedToken]

    @extend_schema(
        operation_id="bootstrap_me",
        summary="Bootstrap my account",
        request=None,
        responses={200: MeEnvelopeSerializer},
        tags=["Me"],
    )
    def post(self, request):
        result = ProfileService.ensure_by_sub(request.auth)
        if not result.success:
            return error_response(result)
        return Response(_me_payload(result.data, request))


class MeAvatarView(APIView):
    """Upload an avatar image (multipart field "avatar")."""

    permission_classes = [IsAuthenticated]
    parser_classes = [MultiPartParser, FormParser]

    @extend_schema(
        operation_id="upload_my_avatar",
        summary="Upload my avatar",
        request={"multipart/form-data": AvatarUploadSerializer},
        responses={200: MeEnvelopeSerializer},
        tags=["Me"],
    )
    def post(self, request):
        serializer = AvatarUploadSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = ProfileService.set_avatar(
            request.user,
            serializer.validated_data["avatar"],
            build_absolute_uri=request.build_absolute_uri,
        )
        if not result.success:
            return error_response(result)

        return Response(_me_payload(result.data, request), status=status.HTTP_200_OK)


class UserProfileView(APIView):
    """Public profile of any user, including whether the caller follows them."""

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="get_user_profile",
        summary="Get user profile",
        responses={200: PublicProfileSerializer},
        tags=["Users"],
    )
    def get(self, request, user_id):
        user = get_object_or_404(
            User.objects.select_related("profile").prefetch_related("user_skills__skill"),
            id=user_id,
            is_active=True,
        )
        return Response(PublicProfileSerializer(user, context={"request": request}).data)
