"""
Follow graph services.

FollowService owns UserFollow rows and the two denormalized counters on
Profile. Counter updates use F() expressions inside the same transaction
as the row change, so concurrent follows never lose increments.

Counter rules:
    follow(a, b)   -> b.subscribers_count += 1, a.subscriptions_count += 1
    unfollow(a, b) -> both decremented, never below 0
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.db import IntegrityError
from django.db.models import F

from authentication.models import Profile
from core.services import BaseService, ServiceResult
from social.models import UserFollow

if TYPE_CHECKING:
    from django.db.models import QuerySet

    from authentication.models import User


class FollowService(BaseService):
    """
    Follow / unfollow and follow-list queries.

    Usage:
        result = FollowService.follow(request.user, target)
        if not result.success:
            return error_response(result)
    """

    @classmethod
    def follow(cls, follower: User, target: User) -> ServiceResult[UserFollow]:
        """Make `follower` follow `target`."""
        if follower.pk == target.pk:
            return ServiceResult.failure(
                "You cannot follow yourself",
                error_code="CANNOT_FOLLOW_SELF",
            )

        if UserFollow.objects.filter(follower=follower, following=target).exists():
            return ServiceResult.failure(
                "Already following this user",
                error_code="ALREADY_FOLLOWING",
            )

        try:
            with cls.atomic():
                follow = UserFollow.objects.create(follower=follower, following=target)
                Profile.objects.filter(user=target).update(
                    subscribers_count=F("subscribers_count") + 1
                )
                Profile.objects.filter(user=follower).update(
                    subscriptions_count=F("subscriptions_count") + 1
                )
        except IntegrityError:
            # Lost a race against an identical follow request
            return ServiceResult.failure(
                "Already following this user",
                error_code="ALREADY_FOLLOWING",
            )

        cls.get_logger().info(f"User {follower.id} followed {target.id}")
        return ServiceResult.success(follow)

    @classmethod
    def unfollow(cls, follower: User, target: User) -> ServiceResult[None]:
        """Remove the follow from `follower` to `target`."""
        with cls.atomic():
            deleted, _ = UserFollow.objects.filter(
                follower=follower, following=target
            ).delete()
            if not deleted:
                return ServiceResult.failure(
                    "You are not following this user",
                    error_code="NOT_FOLLOWING",
                )

            Profile.objects.filter(user=target, subscribers_count__gt=0).update(
                subscribers_count=F("subscribers_count") - 1
            )
            Profile.objects.filter(user=follower, subscriptions_count__gt=0).update(
                subscriptions_count=F("subscriptions_count") - 1
            )

        cls.get_logger().info(f"User {follower.id} unfollowed {target.id}")
        return ServiceResult.success(None)

    @classmethod
    def is_following(cls, follower: User, target: User) -> bool:
        if follower.pk == target.pk:
            return False
        return UserFollow.objects.filter(follower=follower, following=target).exists()

    @classmethod
    def get_followers(cls, user: User) -> QuerySet[UserFollow]:
        """Follow rows pointing at `user`, newest first."""
        return (
            UserFollow.objects.filter(following=user)
            .select_related("follower__profile")
            .order_by("-created_at", "-id")
        )

    @classmethod
    def get_following(cls, user: User) -> QuerySet[UserFollow]:
        """Follow rows created by `user`, newest first."""
        return (
            UserFollow.objects.filter(follower=user)
            .select_related("following__profile")
            .order_by("-created_at", "-id")
        )
