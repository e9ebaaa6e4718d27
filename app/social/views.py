"""
Follow graph views.

Endpoints (mounted at /api/v1/users/{user_id}/):
    POST   follow/      - Follow the user
    DELETE follow/      - Unfollow the user
    GET    followers/   - Users following this user (paginated)
    GET    following/   - Users this user follows (paginated)
"""

from django.shortcuts import get_object_or_404
from drf_spectacular.utils import OpenApiResponse, extend_schema, extend_schema_view
from rest_framework import generics, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from authentication.models import Profile, User
from core.views import error_response
from social.serializers import (
    FollowerSerializer,
    FollowingSerializer,
    FollowStateSerializer,
)
from social.services import FollowService


def _follow_state(target, is_following):
    subscribers_count = (
        Profile.objects.filter(user=target)
        .values_list("subscribers_count", flat=True)
        .first()
    )
    return {"is_following": is_following, "subscribers_count": subscribers_count or 0}


class FollowView(APIView):
    """Follow or unfollow another user."""

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="follow_user",
        summary="Follow user",
        request=None,
        responses={
            201: FollowStateSerializer,
            400: OpenApiResponse(description="Self-follow or already following"),
            404: OpenApiResponse(description="User not found"),
        },
        tags=["Social"],
    )
    def post(self, request, user_id):
        target = get_object_or_404(User, id=user_id, is_active=True)

        result = FollowService.follow(request.user, target)
        if not result.success:
            return error_response(result)

        return Response(_follow_state(target, True), status=status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="unfollow_user",
        summary="Unfollow user",
        responses={
            200: FollowStateSerializer,
            400: OpenApiResponse(description="Not following"),
            404: OpenApiResponse(description="User not found"),
        },
        tags=["Social"],
    )
    def delete(self, request, user_id):
        target = get_object_or_404(User, id=user_id)

        result = FollowService.unfollow(request.user, target)
        if not result.success:
            return error_response(result)

        return Response(_follow_state(target, False))


@extend_schema_view(
    get=extend_schema(
        operation_id="list_followers",
        summary="List followers",
        tags=["Social"],
    ),
)
class FollowersListView(generics.ListAPIView):
    serializer_class = FollowerSerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        user = get_object_or_404(User, id=self.kwargs["user_id"])
        return FollowService.get_followers(user)


@extend_schema_view(
    get=extend_schema(
        operation_id="list_following",
        summary="List followed users",
        tags=["Social"],
    ),
)
class FollowingListView(generics.ListAPIView):
    serializer_class = FollowingSerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        user = get_object_or_404(User, id=self.kwargs["user_id"])
        return FollowService.get_following(user)
