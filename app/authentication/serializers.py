"""
Serializers for authentication models.

This module provides DRF serializers for:
- UserSummarySerializer: compact {id, name, username, avatar_url} used
  when users are nested in chats, messages and follow lists
- MeSerializer: the caller's full record ("me")
- PublicProfileSerializer: another user's profile
- MeUpdateSerializer / AvatarUploadSerializer: request bodies

Related files:
    - models.py: User and Profile models
    - views.py: Views that use these serializers
"""

from django.core.validators import FileExtensionValidator
from rest_framework import serializers

from authentication.models import User
from skills.serializers import split_user_skills

AVATAR_MAX_BYTES = 5 * 1024 * 1024
AVATAR_EXTENSIONS = ["jpg", "jpeg", "png", "webp"]


class UserSummarySerializer(serializers.ModelSerializer):
    """Compact user representation for nesting."""

    name = serializers.CharField(source="profile.name", read_only=True, allow_null=True)
    username = serializers.CharField(
        source="profile.username", read_only=True, allow_null=True
    )
    avatar_url = serializers.CharField(
        source="profile.avatar_url", read_only=True, allow_null=True
    )

    class Meta:
        model = User
        fields = ["id", "name", "username", "avatar_url"]
        read_only_fields = fields


class MeSerializer(serializers.ModelSerializer):
    """
    Full representation of the authenticated user.

    Profile fields are flattened onto the user so clients see one object.
    """

    name = serializers.CharField(source="profile.name", read_only=True)
    username = serializers.CharField(source="profile.username", read_only=True)
    birth_date = serializers.DateField(source="profile.birth_date", read_only=True)
    avatar_url = serializers.CharField(source="profile.avatar_url", read_only=True)
    bio = serializers.CharField(source="profile.bio", read_only=True)
    subscription = serializers.JSONField(source="profile.subscription", read_only=True)
    subscribers_count = serializers.IntegerField(
        source="profile.subscribers_count", read_only=True
    )
    subscriptions_count = serializers.IntegerField(
        source="profile.subscriptions_count", read_only=True
    )
    owned_skills = serializers.SerializerMethodField()
    desired_skills = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = [
            "id",
            "auth_user_id",
            "email",
            "name",
            "username",
            "birth_date",
            "avatar_url",
            "bio",
            "subscription",
            "roles",
            "subscribers_count",
            "subscriptions_count",
            "owned_skills",
            "desired_skills",
            "last_login_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def _skills(self, obj):
        cache = getattr(self, "_skills_cache", {})
        if obj.pk not in cache:
            cache[obj.pk] = split_user_skills(obj)
            self._skills_cache = cache
        return cache[obj.pk]

    def get_owned_skills(self, obj):
        return self._skills(obj)[0]

    def get_desired_skills(self, obj):
        return self._skills(obj)[1]


class PublicProfileSerializer(MeSerializer):
    """
    Another user's profile.

    Hides provider identifiers and subscription details; adds whether the
    caller follows this user.
    """

    is_following = serializers.SerializerMethodField()

    class Meta(MeSerializer.Meta):
        fields = [
            "id",
            "name",
            "username",
            "avatar_url",
            "bio",
            "subscribers_count",
            "subscriptions_count",
            "owned_skills",
            "desired_skills",
            "is_following",
            "created_at",
        ]
        read_only_fields = fields

    def get_is_following(self, obj):
        from social.services import FollowService

        request = self.context.get("request")
        if not request or not request.user.is_authenticated:
            return False
        return FollowService.is_following(request.user, obj)


class MeUpdateSerializer(serializers.Serializer):
    """
    Partial update of the caller's profile.

    Every field is optional; only fields present in the body are changed.
    """

    name = serializers.CharField(max_length=150, required=False, allow_null=True, allow_blank=True)
    avatar_url = serializers.URLField(max_length=500, required=False, allow_null=True)
    username = serializers.CharField(
        max_length=30, required=False, allow_null=True, allow_blank=True
    )
    bio = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    birth_date = serializers.DateField(required=False, allow_null=True)


class AvatarUploadSerializer(serializers.Serializer):
    avatar = serializers.ImageField(
        validators=[FileExtensionValidator(allowed_extensions=AVATAR_EXTENSIONS)],
    )

    def validate_avatar(self, value):
        if value.size > AVATAR_MAX_BYTES:
            raise serializers.ValidationError("Avatar must be 5 MB or smaller.")
        return value


class MeEnvelopeSerializer(serializers.Serializer):
    """{"ok": true, "me": {...}} response envelope (schema only)."""

    ok = serializers.BooleanField()
    me = MeSerializer(allow_null=True)


class PeekProfileSerializer(serializers.Serializer):
    email = serializers.EmailField(allow_null=True)
    name = serializers.CharField(allow_null=True)
    avatarUrl = serializers.CharField(allow_null=True)


class PeekSerializer(serializers.Serializer):
    """{"exists": bool, "profile": {...}} response (schema only)."""

    exists = serializers.BooleanField()
    profile = PeekProfileSerializer()
