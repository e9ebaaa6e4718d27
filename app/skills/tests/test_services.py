"""
Tests for SkillService.

Covers:
- Lazy creation of catalog skills
- Replace-by-type semantics for owned/desired lists
- Catalog seeding
"""

import pytest

from skills.constants import PREDEFINED_SKILLS
from skills.models import Skill, SkillType, UserSkill
from skills.services import SkillService
from skills.tests.factories import SkillFactory, UserSkillFactory


@pytest.mark.django_db
class TestEnsureSkillsExist:
    def test_creates_catalog_skill_on_demand(self):
        result = SkillService.ensure_skills_exist(["python"])

        assert result.success
        assert result.data["python"].name == "Python"
        assert Skill.objects.filter(id="python", category="Programming").exists()

    def test_returns_stored_skill(self):
        skill = SkillFactory(id="custom", name="Custom")

        result = SkillService.ensure_skills_exist(["custom", "custom"])

        assert result.data == {"custom": skill}

    def test_unknown_skill(self):
        result = SkillService.ensure_skills_exist(["underwater-basket-weaving"])

        assert not result.success
        assert result.error_code == "UNKNOWN_SKILL"


@pytest.mark.django_db
class TestReplaceUserSkills:
    def test_replaces_owned_only(self, user):
        UserSkillFactory(user=user, skill=SkillFactory(id="old"))
        desired = UserSkillFactory(
            user=user, skill=SkillFactory(id="keep"), type=SkillType.DESIRED, level=None
        )

        result = SkillService.replace_user_skills(
            user, owned=[{"skillId": "python", "level": "Expert"}]
        )

        assert result.success
        owned = UserSkill.objects.filter(user=user, type=SkillType.OWNED)
        assert [(s.skill_id, s.level) for s in owned] == [("python", "Expert")]
        assert UserSkill.objects.filter(pk=desired.pk).exists()

    def test_empty_list_clears_type(self, user):
        UserSkillFactory(user=user, type=SkillType.DESIRED, level=None)

        SkillService.replace_user_skills(user, desired=[])

        assert not UserSkill.objects.filter(user=user, type=SkillType.DESIRED).exists()

    def test_desired_skills_have_no_level(self, user):
        SkillService.replace_user_skills(user, desired=[{"skillId": "spanish"}])

        desired = UserSkill.objects.get(user=user, type=SkillType.DESIRED)
        assert desired.level is None

    def test_duplicate_ids_collapse(self, user):
        SkillService.replace_user_skills(
            user,
            owned=[
                {"skillId": "python", "level": "Beginner"},
                {"skillId": "python", "level": "Expert"},
            ],
        )

        assert UserSkill.objects.get(user=user).level == "Expert"

    def test_invalid_level(self, user):
        result = SkillService.replace_user_skills(
            user, owned=[{"skillId": "python", "level": "Wizard"}]
        )

        assert not result.success
        assert result.error_code == "INVALID_LEVEL"

    def test_unknown_skill_leaves_existing(self, user):
        existing = UserSkillFactory(user=user)

        result = SkillService.replace_user_skills(
            user, owned=[{"skillId": "nope", "level": "Expert"}]
        )

        assert result.error_code == "UNKNOWN_SKILL"
        assert UserSkill.objects.filter(pk=existing.pk).exists()

    def test_nothing_given_is_noop(self, user):
        existing = UserSkillFactory(user=user)

        result = SkillService.replace_user_skills(user)

        assert result.success
        assert UserSkill.objects.filter(pk=existing.pk).exists()


@pytest.mark.django_db
class TestSeedCatalog:
    def test_seeds_everything_once(self):
        first = SkillService.seed_catalog()
        second = SkillService.seed_catalog()

        assert first.data == len(PREDEFINED_SKILLS)
        assert second.data == 0
        assert Skill.objects.count() == len(PREDEFINED_SKILLS)

    def test_updates_existing_rows(self):
        SkillFactory(id="python", name="Old name", category="Other")

        result = SkillService.seed_catalog()

        assert result.data == len(PREDEFINED_SKILLS) - 1
        assert Skill.objects.get(id="python").name == "Python"
