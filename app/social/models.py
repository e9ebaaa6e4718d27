"""
Social graph models.

UserFollow is a directed edge: `follower` follows `following`.

Related files:
    - services.py: FollowService keeps Profile counters in sync
    - authentication/models.py: Profile.subscribers_count / subscriptions_count
"""

from django.conf import settings
from django.db import models

from core.models import BaseModel


class UserFollow(BaseModel):
    """
    A follow relationship between two users.

    Fields:
        follower: User who follows
        following: User being followed

    Constraints:
        - A user follows another user at most once
        - A user cannot follow themself
    """

    follower = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="following_links",
        help_text="User who follows",
    )
    following = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="follower_links",
        help_text="User being followed",
    )

    class Meta:
        db_table = "social_user_follow"
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["follower", "following"],
                name="unique_follow_pair",
            ),
            models.CheckConstraint(
                condition=~models.Q(follower=models.F("following")),
                name="no_self_follow",
            ),
        ]

    def __str__(self):
        return f"{self.follower_id} -> {self.following_id}"
