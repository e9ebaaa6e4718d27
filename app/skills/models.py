"""
Skill models.

This module defines:
- Skill: Catalog entry keyed by a stable text slug ("python", "yoga")
- UserSkill: A skill a user has (owned, with a level) or wants (desired)

Related files:
    - constants.py: PREDEFINED_SKILLS catalog
    - services.py: SkillService (ensure catalog rows, replace user skills)
"""

import logging

from django.conf import settings
from django.db import models

from core.models import BaseModel

logger = logging.getLogger(__name__)


class SkillType(models.TextChoices):
    """Whether the user already has the skill or wants to learn it."""

    OWNED = "owned", "Owned"
    DESIRED = "desired", "Desired"


class SkillLevel(models.TextChoices):
    """Self-assessed proficiency for owned skills."""

    BEGINNER = "Beginner", "Beginner"
    INTERMEDIATE = "Intermediate", "Intermediate"
    ADVANCED = "Advanced", "Advanced"
    EXPERT = "Expert", "Expert"


class Skill(models.Model):
    """
    A skill from the catalog.

    The primary key is the slug clients send (e.g. "public-speaking"), so
    skill references survive re-seeding and can be hard-coded in clients.
    """

    id = models.CharField(
        primary_key=True,
        max_length=64,
        help_text="Stable slug identifier (e.g. 'python')",
    )
    name = models.CharField(
        max_length=100,
        help_text="Display name",
    )
    category = models.CharField(
        max_length=50,
        db_index=True,
        help_text="Catalog section (e.g. 'Programming')",
    )
    icon_name = models.CharField(
        max_length=100,
        blank=True,
        help_text="SF Symbol name used by clients",
    )

    class Meta:
        db_table = "skills_skill"
        ordering = ["category", "name"]

    def __str__(self):
        return self.name


class UserSkill(BaseModel):
    """
    Link between a user and a skill.

    Fields:
        user: Skill holder
        skill: Catalog skill
        type: owned | desired
        level: Proficiency; only meaningful for owned skills (null for desired)
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="user_skills",
        help_text="User this skill belongs to",
    )
    skill = models.ForeignKey(
        Skill,
        on_delete=models.CASCADE,
        related_name="user_skills",
        help_text="Catalog skill",
    )
    type = models.CharField(
        max_length=10,
        choices=SkillType.choices,
        help_text="Owned or desired",
    )
    level = models.CharField(
        max_length=20,
        choices=SkillLevel.choices,
        blank=True,
        null=True,
        help_text="Proficiency level (owned skills only)",
    )

    class Meta:
        db_table = "skills_user_skill"
        ordering = ["created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["user", "skill", "type"],
                name="unique_user_skill_per_type",
            ),
            models.CheckConstraint(
                condition=models.Q(type=SkillType.OWNED) | models.Q(level__isnull=True),
                name="desired_skill_has_no_level",
            ),
        ]
        indexes = [
            models.Index(fields=["user", "type"], name="user_skill_type_idx"),
        ]

    def __str__(self):
        return f"{self.user_id} {self.type} {self.skill_id}"
