"""
Serializers for the admin panel API.

Request bodies use the camelCase keys of the admin web client and map
onto snake_case model fields through `source`.

Serializers:
    AdminUserSerializer: Full user record (MeSerializer plus status flags)
    AdminUserCreateSerializer: Body for POST users/create/
    AdminUserUpdateSerializer: Body for PUT users/<id>/
    AdminDeletedUserSerializer: Response for DELETE users/<id>/
    AdminSkillSerializer: Catalog entry with usage count
"""

from rest_framework import serializers

from authentication.serializers import MeSerializer
from skills.serializers import (
    DesiredSkillInputSerializer,
    OwnedSkillInputSerializer,
    SkillSerializer,
)


class AdminUserSerializer(MeSerializer):
    """User flattened with its profile, skills and status flags."""

    class Meta(MeSerializer.Meta):
        fields = MeSerializer.Meta.fields + ["is_active", "is_staff"]
        read_only_fields = fields


class AdminUserCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=150, required=False, allow_blank=True, allow_null=True)
    username = serializers.CharField(max_length=30, required=False, allow_blank=True, allow_null=True)
    email = serializers.EmailField(required=False, allow_blank=True, allow_null=True)
    avatarUrl = serializers.URLField(
        source="avatar_url", max_length=500, required=False, allow_blank=True, allow_null=True
    )
    bio = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    birthDate = serializers.DateField(source="birth_date", required=False, allow_null=True)
    authUserId = serializers.CharField(
        source="auth_user_id", max_length=255, required=False, allow_blank=True
    )
    subscribersCount = serializers.IntegerField(
        source="subscribers_count", min_value=0, required=False
    )
    subscriptionsCount = serializers.IntegerField(
        source="subscriptions_count", min_value=0, required=False
    )
    ownedSkills = OwnedSkillInputSerializer(source="owned_skills", many=True, required=False)
    desiredSkills = DesiredSkillInputSerializer(
        source="desired_skills", many=True, required=False
    )


class AdminUserUpdateSerializer(serializers.Serializer):
    """
    Partial patch for a user. Omitted keys are left untouched.
    """

    name = serializers.CharField(max_length=150, required=False, allow_blank=True, allow_null=True)
    username = serializers.CharField(max_length=30, required=False, allow_blank=True, allow_null=True)
    email = serializers.EmailField(required=False, allow_blank=True, allow_null=True)
    avatarUrl = serializers.URLField(
        source="avatar_url", max_length=500, required=False, allow_blank=True, allow_null=True
    )
    bio = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    birthDate = serializers.DateField(source="birth_date", required=False, allow_null=True)
    roles = serializers.ListField(child=serializers.CharField(max_length=50), required=False)
    subscription = serializers.JSONField(required=False, allow_null=True)
    subscribersCount = serializers.IntegerField(
        source="subscribers_count", min_value=0, required=False
    )
    subscriptionsCount = serializers.IntegerField(
        source="subscriptions_count", min_value=0, required=False
    )
    ownedSkills = OwnedSkillInputSerializer(source="owned_skills", many=True, required=False)
    desiredSkills = DesiredSkillInputSerializer(
        source="desired_skills", many=True, required=False
    )


class DeletedUserSummarySerializer(serializers.Serializer):
    id = serializers.UUIDField()
    name = serializers.CharField(allow_null=True)
    username = serializers.CharField(allow_null=True)
    email = serializers.EmailField(allow_null=True)


class AdminDeletedUserSerializer(serializers.Serializer):
    message = serializers.CharField()
    deletedUser = DeletedUserSummarySerializer()


class AdminSkillSerializer(SkillSerializer):
    users_count = serializers.IntegerField(read_only=True)

    class Meta(SkillSerializer.Meta):
        fields = SkillSerializer.Meta.fields + ["users_count"]
        read_only_fields = fields


class SeedResultSerializer(serializers.Serializer):
    created = serializers.IntegerField()
