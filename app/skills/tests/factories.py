"""
Factory Boy factories for skill models.

Usage:
    from skills.tests.factories import SkillFactory, UserSkillFactory

    skill = SkillFactory(id="python", name="Python")
    UserSkillFactory(user=user, skill=skill, type="owned", level="Expert")
"""

import factory

from authentication.tests.factories import UserFactory
from skills.models import Skill, SkillLevel, SkillType, UserSkill


class SkillFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Skill
        django_get_or_create = ("id",)

    id = factory.Sequence(lambda n: f"skill-{n}")
    name = factory.Sequence(lambda n: f"Skill {n}")
    category = "Testing"
    icon_name = "star.fill"


class UserSkillFactory(factory.django.DjangoModelFactory):
    """Owned skill at Beginner level unless told otherwise."""

    class Meta:
        model = UserSkill

    user = factory.SubFactory(UserFactory)
    skill = factory.SubFactory(SkillFactory)
    type = SkillType.OWNED
    level = SkillLevel.BEGINNER
