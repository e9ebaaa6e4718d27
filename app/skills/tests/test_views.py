"""
Tests for skill endpoints.
"""

import pytest
from rest_framework import status

from skills.models import SkillType
from skills.tests.factories import SkillFactory, UserSkillFactory

SKILLS_URL = "/api/v1/skills/"
MY_SKILLS_URL = "/api/v1/me/skills/"


@pytest.mark.django_db
class TestSkillList:
    def test_lists_catalog(self, authenticated_client):
        SkillFactory(id="b", name="B", category="Two")
        SkillFactory(id="a", name="A", category="One")

        response = authenticated_client.get(SKILLS_URL)

        assert response.status_code == status.HTTP_200_OK
        assert [skill["id"] for skill in response.data] == ["a", "b"]
        assert set(response.data[0]) == {"id", "name", "category", "icon_name"}

    def test_filter_by_category(self, authenticated_client):
        SkillFactory(id="a", category="Music")
        SkillFactory(id="b", category="Sports")

        response = authenticated_client.get(SKILLS_URL, {"category": "music"})

        assert [skill["id"] for skill in response.data] == ["a"]

    def test_requires_authentication(self, api_client):
        response = api_client.get(SKILLS_URL)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestMySkills:
    def test_replace_both_lists(self, authenticated_client):
        response = authenticated_client.put(
            MY_SKILLS_URL,
            {
                "ownedSkills": [{"skillId": "python", "level": "Advanced"}],
                "desiredSkills": [{"skillId": "yoga"}],
            },
            format="json",
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["owned_skills"][0]["skill"]["id"] == "python"
        assert response.data["owned_skills"][0]["level"] == "Advanced"
        assert response.data["desired_skills"][0]["skill"]["id"] == "yoga"
        assert response.data["desired_skills"][0]["level"] is None

    def test_omitted_list_untouched(self, authenticated_client, user):
        UserSkillFactory(user=user, type=SkillType.DESIRED, level=None)

        response = authenticated_client.put(
            MY_SKILLS_URL,
            {"ownedSkills": [{"skillId": "python", "level": "Expert"}]},
            format="json",
        )

        assert len(response.data["desired_skills"]) == 1

    def test_invalid_level_rejected(self, authenticated_client):
        response = authenticated_client.put(
            MY_SKILLS_URL,
            {"ownedSkills": [{"skillId": "python", "level": "Wizard"}]},
            format="json",
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_unknown_skill_rejected(self, authenticated_client):
        response = authenticated_client.put(
            MY_SKILLS_URL,
            {"desiredSkills": [{"skillId": "nope"}]},
            format="json",
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["error_code"] == "UNKNOWN_SKILL"
