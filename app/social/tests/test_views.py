"""
Tests for follow graph endpoints.
"""

import pytest
from rest_framework import status

from social.services import FollowService


def follow_url(user_id):
    return f"/api/v1/users/{user_id}/follow/"


@pytest.mark.django_db
class TestFollowView:
    """Tests for POST/DELETE /api/v1/users/{id}/follow/."""

    def test_follow_returns_201(self, authenticated_client, other_user):
        response = authenticated_client.post(follow_url(other_user.id))

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data == {"is_following": True, "subscribers_count": 1}

    def test_follow_self_returns_400(self, authenticated_client, user):
        response = authenticated_client.post(follow_url(user.id))

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["error_code"] == "CANNOT_FOLLOW_SELF"

    def test_follow_twice_returns_400(self, authenticated_client, other_user):
        authenticated_client.post(follow_url(other_user.id))

        response = authenticated_client.post(follow_url(other_user.id))

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["error_code"] == "ALREADY_FOLLOWING"

    def test_follow_unknown_user_returns_404(self, authenticated_client):
        response = authenticated_client.post(
            follow_url("00000000-0000-0000-0000-000000000000")
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_unfollow(self, authenticated_client, user, other_user):
        FollowService.follow(user, other_user)

        response = authenticated_client.delete(follow_url(other_user.id))

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {"is_following": False, "subscribers_count": 0}

    def test_unfollow_when_not_following(self, authenticated_client, other_user):
        response = authenticated_client.delete(follow_url(other_user.id))

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["error_code"] == "NOT_FOLLOWING"

    def test_requires_authentication(self, api_client, other_user):
        response = api_client.post(follow_url(other_user.id))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestFollowLists:
    """Tests for followers/ and following/."""

    def test_followers_list_is_paginated(self, authenticated_client, user, other_user, third_user):
        FollowService.follow(other_user, user)
        FollowService.follow(third_user, user)

        response = authenticated_client.get(f"/api/v1/users/{user.id}/followers/")

        assert response.status_code == status.HTTP_200_OK
        assert response.data["count"] == 2
        ids = {item["user"]["id"] for item in response.data["results"]}
        assert ids == {str(other_user.id), str(third_user.id)}

    def test_following_list(self, authenticated_client, user, other_user):
        FollowService.follow(user, other_user)

        response = authenticated_client.get(f"/api/v1/users/{user.id}/following/")

        assert response.data["count"] == 1
        entry = response.data["results"][0]
        assert entry["user"]["name"] == "Other User"
        assert "followed_at" in entry
