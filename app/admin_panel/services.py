"""
Admin panel services.

AdminUserService lets platform admins manage users directly, bypassing
the identity provider bootstrap:
- list_users / count_users
- create_user: user + profile + skills in one transaction
- update_user: partial patch of user and profile fields, replace-by-type
  skills
- delete_user: hard delete (skills, follows and device tokens cascade);
  the user leaves group chats first and their direct chats are soft
  deleted

AdminSkillService exposes the catalog with usage counts and seeding.

Usage:
    from admin_panel.services import AdminUserService

    result = AdminUserService.create_user({"username": "ann", "name": "Ann"})
"""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from django.db.models import Count

from authentication.models import Profile, User
from authentication.services import ProfileService
from chat.services import ChatService
from core.exceptions import ValidationError
from core.services import BaseService, ServiceResult
from skills.models import Skill
from skills.services import SkillService

if TYPE_CHECKING:
    from django.db.models import QuerySet

# Fields written to the User row; everything else in a patch goes to Profile
USER_FIELDS = ("email", "roles")
PROFILE_FIELDS = (
    "name",
    "username",
    "avatar_url",
    "bio",
    "birth_date",
    "subscription",
    "subscribers_count",
    "subscriptions_count",
)


def _user_not_found() -> ServiceResult:
    return ServiceResult.failure("User not found", error_code="USER_NOT_FOUND")


class AdminUserService(BaseService):
    """User management for platform admins."""

    @classmethod
    def list_users(cls) -> QuerySet[User]:
        """All users, newest first, with profile and skills preloaded."""
        return (
            User.objects.select_related("profile")
            .prefetch_related("user_skills__skill")
            .order_by("-created_at")
        )

    @classmethod
    def count_users(cls) -> int:
        return User.objects.count()

    @classmethod
    def _validate_skills(cls, owned, desired) -> ServiceResult:
        referenced = [item["skillId"] for item in (owned or []) + (desired or [])]
        if not referenced:
            return ServiceResult.success({})
        return SkillService.ensure_skills_exist(referenced)

    @classmethod
    def _replace_skills(cls, user: User, owned, desired) -> None:
        """
        Replace skills inside the caller's transaction.

        Raises:
            ValidationError: Skills rejected; rolls back the transaction
        """
        result = SkillService.replace_user_skills(user, owned=owned, desired=desired)
        if not result.success:
            raise ValidationError(result.error, error_code=result.error_code)

    @classmethod
    def create_user(cls, data: dict) -> ServiceResult[User]:
        """
        Create a user with profile and skills.

        Args:
            data: Validated AdminUserCreateSerializer data (snake_case keys;
                owned_skills / desired_skills in the /me/skills/ shape)

        Returns:
            ServiceResult with the new User
        """
        username = data.get("username")
        if username:
            result = ProfileService.validate_username(username)
            if not result.success:
                return result
            username = result.data

        auth_user_id = data.get("auth_user_id") or f"admin-created-{uuid.uuid4()}"
        if User.objects.filter(auth_user_id=auth_user_id).exists():
            return ServiceResult.failure(
                "auth_user_id already exists",
                error_code="AUTH_USER_ID_TAKEN",
            )

        owned = data.get("owned_skills")
        desired = data.get("desired_skills")
        result = cls._validate_skills(owned, desired)
        if not result.success:
            return result

        try:
            with cls.atomic():
                user = User.objects.create_user(
                    auth_user_id=auth_user_id,
                    email=data.get("email"),
                )
                profile, _ = Profile.objects.get_or_create(user=user)
                profile.name = data.get("name") or None
                profile.username = username or None
                profile.avatar_url = data.get("avatar_url") or None
                profile.bio = data.get("bio") or None
                profile.birth_date = data.get("birth_date")
                profile.subscribers_count = data.get("subscribers_count") or 0
                profile.subscriptions_count = data.get("subscriptions_count") or 0
                profile.save()

                cls._replace_skills(user, owned, desired)
        except ValidationError as e:
            return ServiceResult.failure(e.message, error_code=e.error_code)

        cls.get_logger().info(f"Admin created user {user.id} ({auth_user_id})")
        return ServiceResult.success(user)

    @classmethod
    def update_user(cls, user_id, changes: dict) -> ServiceResult[User]:
        """
        Apply a partial patch to a user.

        Only keys present in `changes` are written. owned_skills /
        desired_skills replace that type when present; an empty list
        clears it.
        """
        user = User.objects.select_related("profile").filter(pk=user_id).first()
        if user is None:
            return _user_not_found()

        if "username" in changes:
            result = ProfileService.validate_username(
                changes["username"], exclude_user=user
            )
            if not result.success:
                return result
            changes = {**changes, "username": result.data}

        owned = changes.get("owned_skills")
        desired = changes.get("desired_skills")
        result = cls._validate_skills(owned, desired)
        if not result.success:
            return result

        profile, _ = Profile.objects.get_or_create(user=user)
        user_fields = [name for name in USER_FIELDS if name in changes]
        profile_fields = [name for name in PROFILE_FIELDS if name in changes]

        try:
            with cls.atomic():
                for name in user_fields:
                    setattr(user, name, changes[name])
                user.save(update_fields=[*user_fields, "updated_at"])

                if profile_fields:
                    for name in profile_fields:
                        setattr(profile, name, changes[name])
                    profile.save(update_fields=[*profile_fields, "updated_at"])

                cls._replace_skills(user, owned, desired)
        except ValidationError as e:
            return ServiceResult.failure(e.message, error_code=e.error_code)

        cls.get_logger().info(
            f"Admin updated user {user.id}: {user_fields + profile_fields}"
        )
        return ServiceResult.success(cls.list_users().get(pk=user.pk))

    @classmethod
    def delete_user(cls, user_id) -> ServiceResult[dict]:
        """
        Delete a user and everything that cascades from it.

        Returns:
            ServiceResult with {id, name, username, email} of the deleted user
        """
        user = User.objects.select_related("profile").filter(pk=user_id).first()
        if user is None:
            return _user_not_found()

        profile = getattr(user, "profile", None)
        summary = {
            "id": user.id,
            "name": profile.name if profile else None,
            "username": profile.username if profile else None,
            "email": user.email,
        }
        with cls.atomic():
            ChatService.detach_user_from_chats(user)
            user.delete()

        cls.get_logger().info(f"Admin deleted user {summary['id']}")
        return ServiceResult.success(summary)


class AdminSkillService(BaseService):
    """Skill catalog maintenance for platform admins."""

    @classmethod
    def list_skills(cls) -> QuerySet[Skill]:
        """Catalog with the number of distinct users holding each skill."""
        return Skill.objects.annotate(
            users_count=Count("user_skills__user", distinct=True)
        ).order_by("category", "name")

    @classmethod
    def seed(cls) -> ServiceResult[int]:
        return SkillService.seed_catalog()
