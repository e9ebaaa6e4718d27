"""
Serializers for the follow graph.
"""

from rest_framework import serializers

from authentication.serializers import UserSummarySerializer
from social.models import UserFollow


class FollowerSerializer(serializers.ModelSerializer):
    """Entry of a followers list: the user who follows."""

    user = UserSummarySerializer(source="follower", read_only=True)
    followed_at = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = UserFollow
        fields = ["user", "followed_at"]


class FollowingSerializer(serializers.ModelSerializer):
    """Entry of a following list: the user being followed."""

    user = UserSummarySerializer(source="following", read_only=True)
    followed_at = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = UserFollow
        fields = ["user", "followed_at"]


class FollowStateSerializer(serializers.Serializer):
    """Response of follow / unfollow (schema only)."""

    is_following = serializers.BooleanField()
    subscribers_count = serializers.IntegerField()
