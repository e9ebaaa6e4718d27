"""
API tests for admin panel endpoints.
"""

import pytest
from rest_framework import status

from authentication.models import User
from skills.constants import PREDEFINED_SKILLS
from skills.tests.factories import SkillFactory, UserSkillFactory

BASE = "/api/v1/admin"


@pytest.mark.django_db
class TestPermissions:
    @pytest.mark.parametrize(
        "method,path",
        [
            ("get", "/users/all/"),
            ("get", "/users/count/"),
            ("post", "/users/create/"),
            ("get", "/skills/"),
            ("post", "/skills/seed/"),
        ],
    )
    def test_regular_user_forbidden(self, authenticated_client, method, path):
        response = getattr(authenticated_client, method)(f"{BASE}{path}")

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_anonymous_unauthorized(self, api_client):
        response = api_client.get(f"{BASE}/users/all/")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_staff_allowed(self, authenticated_client_factory):
        from authentication.tests.factories import UserFactory

        client = authenticated_client_factory(UserFactory(is_staff=True))

        response = client.get(f"{BASE}/users/count/")

        assert response.status_code == status.HTTP_200_OK


@pytest.mark.django_db
class TestUserEndpoints:
    def test_list_newest_first_with_skills(
        self, platform_admin_client, platform_admin, user
    ):
        UserSkillFactory(user=user, skill=SkillFactory(id="python", name="Python"))

        response = platform_admin_client.get(f"{BASE}/users/all/")

        assert response.status_code == status.HTTP_200_OK
        by_id = {row["id"]: row for row in response.data}
        row = by_id[str(user.pk)]
        assert row["name"] == "Test User"
        assert row["owned_skills"][0]["skill"]["id"] == "python"
        assert row["desired_skills"] == []
        assert "subscription" in row
        created = [row["created_at"] for row in response.data]
        assert created == sorted(created, reverse=True)

    def test_count(self, platform_admin_client, user):
        response = platform_admin_client.get(f"{BASE}/users/count/")

        assert response.data == {"count": User.objects.count()}

    def test_create(self, platform_admin_client):
        response = platform_admin_client.post(
            f"{BASE}/users/create/",
            {
                "name": "Ann",
                "username": "ann",
                "avatarUrl": "https://cdn.example.com/ann.png",
                "birthDate": "1990-05-01",
                "subscriptionsCount": 2,
                "ownedSkills": [{"skillId": "python", "level": "Advanced"}],
            },
            format="json",
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["username"] == "ann"
        assert response.data["avatar_url"] == "https://cdn.example.com/ann.png"
        assert response.data["birth_date"] == "1990-05-01"
        assert response.data["subscriptions_count"] == 2
        assert response.data["owned_skills"][0]["level"] == "Advanced"

    def test_create_duplicate_username(self, platform_admin_client, user):
        user.profile.username = "ann"
        user.profile.save()

        response = platform_admin_client.post(
            f"{BASE}/users/create/", {"username": "ann"}, format="json"
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["error"] == "Username already exists"

    def test_update(self, platform_admin_client, user):
        response = platform_admin_client.put(
            f"{BASE}/users/{user.pk}/",
            {"subscription": {"plan": "pro"}, "desiredSkills": [{"skillId": "yoga"}]},
            format="json",
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["subscription"] == {"plan": "pro"}
        assert response.data["name"] == "Test User"
        assert response.data["desired_skills"][0]["skill"]["id"] == "yoga"
        assert response.data["desired_skills"][0]["level"] is None

    def test_update_unknown_user(self, platform_admin_client):
        response = platform_admin_client.put(
            f"{BASE}/users/00000000-0000-0000-0000-000000000000/",
            {"bio": "x"},
            format="json",
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_delete(self, platform_admin_client, user):
        response = platform_admin_client.delete(f"{BASE}/users/{user.pk}/")

        assert response.status_code == status.HTTP_200_OK
        assert response.data["message"] == "User deleted successfully"
        assert response.data["deletedUser"]["id"] == str(user.pk)
        assert response.data["deletedUser"]["name"] == "Test User"
        assert not User.objects.filter(pk=user.pk).exists()


@pytest.mark.django_db
class TestSkillEndpoints:
    def test_list_with_counts(self, platform_admin_client, user):
        UserSkillFactory(user=user, skill=SkillFactory(id="python"))

        response = platform_admin_client.get(f"{BASE}/skills/")

        assert response.status_code == status.HTTP_200_OK
        assert response.data[0]["id"] == "python"
        assert response.data[0]["users_count"] == 1

    def test_seed(self, platform_admin_client):
        response = platform_admin_client.post(f"{BASE}/skills/seed/")

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {"created": len(PREDEFINED_SKILLS)}
