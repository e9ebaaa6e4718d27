"""
Tests for FollowService.

Why it matters: subscribers_count / subscriptions_count are shown on every
profile and must always equal the number of follow rows.
"""

import pytest

from social.models import UserFollow
from social.services import FollowService


def counters(user):
    user.profile.refresh_from_db()
    return user.profile.subscribers_count, user.profile.subscriptions_count


@pytest.mark.django_db
class TestFollow:
    """Tests for FollowService.follow()."""

    def test_follow_creates_row_and_updates_counters(self, user, other_user):
        result = FollowService.follow(user, other_user)

        assert result.success is True
        assert UserFollow.objects.filter(follower=user, following=other_user).exists()
        assert counters(other_user) == (1, 0)
        assert counters(user) == (0, 1)

    def test_cannot_follow_self(self, user):
        result = FollowService.follow(user, user)

        assert result.success is False
        assert result.error_code == "CANNOT_FOLLOW_SELF"
        assert counters(user) == (0, 0)

    def test_already_following(self, user, other_user):
        FollowService.follow(user, other_user)

        result = FollowService.follow(user, other_user)

        assert result.success is False
        assert result.error_code == "ALREADY_FOLLOWING"
        assert counters(other_user) == (1, 0)

    def test_mutual_follow_counts_each_direction(self, user, other_user):
        FollowService.follow(user, other_user)
        FollowService.follow(other_user, user)

        assert counters(user) == (1, 1)
        assert counters(other_user) == (1, 1)


@pytest.mark.django_db
class TestUnfollow:
    """Tests for FollowService.unfollow()."""

    def test_unfollow_removes_row_and_decrements(self, user, other_user):
        FollowService.follow(user, other_user)

        result = FollowService.unfollow(user, other_user)

        assert result.success is True
        assert not UserFollow.objects.exists()
        assert counters(other_user) == (0, 0)
        assert counters(user) == (0, 0)

    def test_not_following(self, user, other_user):
        result = FollowService.unfollow(user, other_user)

        assert result.success is False
        assert result.error_code == "NOT_FOLLOWING"

    def test_counters_never_negative(self, user, other_user):
        """A drifted counter of 0 stays at 0 instead of going negative."""
        FollowService.follow(user, other_user)
        other_user.profile.subscribers_count = 0
        other_user.profile.save()

        FollowService.unfollow(user, other_user)

        assert counters(other_user) == (0, 0)


@pytest.mark.django_db
class TestQueries:
    def test_is_following(self, user, other_user):
        assert FollowService.is_following(user, other_user) is False

        FollowService.follow(user, other_user)

        assert FollowService.is_following(user, other_user) is True
        assert FollowService.is_following(other_user, user) is False

    def test_followers_and_following_lists(self, user, other_user, third_user):
        FollowService.follow(other_user, user)
        FollowService.follow(third_user, user)

        followers = [row.follower for row in FollowService.get_followers(user)]
        following = [row.following for row in FollowService.get_following(other_user)]

        assert set(followers) == {other_user, third_user}
        assert following == [user]
