"""
Authentication and profile services.

This module provides ProfileService, which owns the local mirror of
identity-provider accounts:
- ensure_by_sub: first-login provisioning ("bootstrap") and login refresh
- update_me: self-service profile edits
- set_avatar: avatar upload
- username helpers shared with the admin panel

Related files:
    - models.py: User, Profile
    - backends.py: Resolves request.user from the token's sub
    - admin_panel/services.py: Admin CRUD built on the same helpers
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.core.exceptions import ValidationError as DjangoValidationError
from django.utils import timezone

from authentication.models import Profile, User, validate_username_format
from core.services import BaseService, ServiceResult

if TYPE_CHECKING:
    from collections.abc import Callable

    from django.core.files.uploadedfile import UploadedFile

    from authentication.oidc import UserInfo

# Fields a user may change on their own profile
SELF_EDITABLE_FIELDS = ("name", "avatar_url", "username", "bio", "birth_date")


class ProfileService(BaseService):
    """
    Business logic for user records and their profiles.

    Usage:
        result = ProfileService.ensure_by_sub(request.auth)
        me = result.data

        result = ProfileService.update_me(user, {"name": "Ann"})
    """

    @classmethod
    def get_by_sub(cls, sub: str) -> User | None:
        """Return the user mirrored for a provider subject id, if any."""
        return User.objects.select_related("profile").filter(auth_user_id=sub).first()

    @classmethod
    def ensure_by_sub(
        cls,
        userinfo: UserInfo,
        avatar_url: str | None = None,
    ) -> ServiceResult[User]:
        """
        Create the local user for a subject id, or refresh an existing one.

        Existing users get last_login_at bumped and only *missing* name,
        email and avatar filled in from the provider; values the user has
        edited locally are never overwritten.

        Args:
            userinfo: Verified claims from the identity provider
            avatar_url: Optional avatar to seed on first login
        """
        now = timezone.now()

        with cls.atomic():
            user = (
                User.objects.select_for_update()
                .filter(auth_user_id=userinfo.sub)
                .first()
            )

            if user is None:
                user = User.objects.create_user(
                    auth_user_id=userinfo.sub,
                    email=userinfo.email,
                    last_login_at=now,
                )
                profile = user.profile
                profile.name = userinfo.name
                profile.avatar_url = avatar_url
                profile.save(update_fields=["name", "avatar_url", "updated_at"])
                cls.get_logger().info(f"Bootstrapped new user {user.id} for sub {userinfo.sub}")
                return ServiceResult.success(user)

            user.last_login_at = now
            user_fields = ["last_login_at", "updated_at"]
            if not user.email and userinfo.email:
                user.email = userinfo.email
                user_fields.append("email")
            user.save(update_fields=user_fields)

            profile, _ = Profile.objects.get_or_create(user=user)
            profile_fields = []
            if not profile.name and userinfo.name:
                profile.name = userinfo.name
                profile_fields.append("name")
            if not profile.avatar_url and avatar_url:
                profile.avatar_url = avatar_url
                profile_fields.append("avatar_url")
            if profile_fields:
                profile.save(update_fields=[*profile_fields, "updated_at"])

        cls.get_logger().debug(f"Refreshed login for user {user.id}")
        return ServiceResult.success(user)

    @classmethod
    def normalize_username(cls, username: str | None) -> str | None:
        """Lowercase and strip a username; empty values become None."""
        if username is None:
            return None
        username = username.strip().lower()
        return username or None

    @classmethod
    def is_username_taken(cls, username: str, exclude_user: User | None = None) -> bool:
        """Case-insensitive uniqueness check."""
        queryset = Profile.objects.filter(username__iexact=username)
        if exclude_user is not None:
            queryset = queryset.exclude(user=exclude_user)
        return queryset.exists()

    @classmethod
    def validate_username(
        cls, username: str, exclude_user: User | None = None
    ) -> ServiceResult[str]:
        """
        Validate format and availability of a username.

        Returns:
            ServiceResult with the normalized username
        """
        normalized = cls.normalize_username(username)
        if normalized is None:
            return ServiceResult.success(None)

        try:
            validate_username_format(normalized)
        except DjangoValidationError as exc:
            return ServiceResult.failure(
                exc.messages[0],
                error_code="INVALID_USERNAME",
            )

        if cls.is_username_taken(normalized, exclude_user=exclude_user):
            return ServiceResult.failure(
                "Username already exists",
                error_code="USERNAME_TAKEN",
            )
        return ServiceResult.success(normalized)

    @classmethod
    def update_me(cls, user: User, changes: dict) -> ServiceResult[User]:
        """
        Apply a partial update to the caller's own profile.

        Only keys present in `changes` are written, so clients can send
        {"name": "Ann"} without clearing the avatar.

        Args:
            user: The authenticated user
            changes: Subset of SELF_EDITABLE_FIELDS
        """
        profile, _ = Profile.objects.get_or_create(user=user)
        update_fields = []

        for field_name in SELF_EDITABLE_FIELDS:
            if field_name not in changes:
                continue
            value = changes[field_name]

            if field_name == "username":
                result = cls.validate_username(value, exclude_user=user)
                if not result.success:
                    return result
                value = result.data

            setattr(profile, field_name, value)
            update_fields.append(field_name)

        if update_fields:
            profile.save(update_fields=[*update_fields, "updated_at"])
            # Keep user.updated_at meaningful for "me" consumers
            user.save(update_fields=["updated_at"])
            cls.get_logger().info(f"Profile updated for user {user.id}: {update_fields}")

        return ServiceResult.success(user)

    @classmethod
    def set_avatar(
        cls,
        user: User,
        image: UploadedFile,
        build_absolute_uri: Callable[[str], str] | None = None,
    ) -> ServiceResult[User]:
        """
        Store an uploaded avatar and point avatar_url at it.

        Args:
            user: Owner of the avatar
            image: Validated image upload
            build_absolute_uri: Turns the storage URL into an absolute URL
                (usually request.build_absolute_uri)
        """
        profile, _ = Profile.objects.get_or_create(user=user)

        if profile.avatar:
            profile.avatar.delete(save=False)

        profile.avatar.save(image.name, image, save=False)
        url = profile.avatar.url
        profile.avatar_url = build_absolute_uri(url) if build_absolute_uri else url
        profile.save(update_fields=["avatar", "avatar_url", "updated_at"])

        cls.get_logger().info(f"Avatar uploaded for user {user.id}")
        return ServiceResult.success(user)
