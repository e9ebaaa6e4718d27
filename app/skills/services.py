"""
Skill services.

SkillService owns the skill catalog and each user's owned/desired lists:
- ensure_skills_exist: make sure referenced catalog skills have rows
- replace_user_skills: replace-by-type semantics used by /me/skills/ and
  the admin panel
- seed_catalog: upsert the whole catalog

Replace semantics:
    owned=None      -> owned skills untouched
    owned=[]        -> owned skills cleared
    owned=[...]     -> owned skills replaced by exactly this list
    (same for desired)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.services import BaseService, ServiceResult
from skills.constants import PREDEFINED_SKILLS, SKILL_CATALOG
from skills.models import Skill, SkillLevel, SkillType, UserSkill

if TYPE_CHECKING:
    from collections.abc import Iterable

    from authentication.models import User


class SkillService(BaseService):
    """Catalog management and user skill replacement."""

    @classmethod
    def ensure_skills_exist(cls, skill_ids: Iterable[str]) -> ServiceResult[dict[str, Skill]]:
        """
        Return Skill rows for the given ids, creating catalog skills on demand.

        Fails with UNKNOWN_SKILL if an id is neither stored nor in the catalog.

        Returns:
            ServiceResult with {skill_id: Skill}
        """
        wanted = list(dict.fromkeys(skill_ids))
        existing = {skill.id: skill for skill in Skill.objects.filter(id__in=wanted)}

        for skill_id in wanted:
            if skill_id in existing:
                continue
            definition = SKILL_CATALOG.get(skill_id)
            if definition is None:
                return ServiceResult.failure(
                    f"Unknown skill: {skill_id}",
                    error_code="UNKNOWN_SKILL",
                )
            existing[skill_id], _ = Skill.objects.get_or_create(
                id=definition.id,
                defaults={
                    "name": definition.name,
                    "category": definition.category,
                    "icon_name": definition.icon_name,
                },
            )
            cls.get_logger().info(f"Created catalog skill on demand: {skill_id}")

        return ServiceResult.success(existing)

    @classmethod
    def replace_user_skills(
        cls,
        user: User,
        owned: list[dict] | None = None,
        desired: list[dict] | None = None,
    ) -> ServiceResult[User]:
        """
        Replace a user's owned and/or desired skills.

        Args:
            user: Skill holder
            owned: [{"skillId": str, "level": str}] or None to leave untouched
            desired: [{"skillId": str}] or None to leave untouched
        """
        if owned is None and desired is None:
            return ServiceResult.success(user)

        for item in owned or []:
            level = item.get("level")
            if level not in SkillLevel.values:
                return ServiceResult.failure(
                    f"Invalid level for {item.get('skillId')}: {level}",
                    error_code="INVALID_LEVEL",
                )

        referenced = [item["skillId"] for item in (owned or []) + (desired or [])]

        with cls.atomic():
            ensure = cls.ensure_skills_exist(referenced)
            if not ensure.success:
                return ensure
            skills = ensure.data

            if owned is not None:
                UserSkill.objects.filter(user=user, type=SkillType.OWNED).delete()
                rows = {}
                for item in owned:
                    rows[item["skillId"]] = UserSkill(
                        user=user,
                        skill=skills[item["skillId"]],
                        type=SkillType.OWNED,
                        level=item["level"],
                    )
                UserSkill.objects.bulk_create(rows.values())

            if desired is not None:
                UserSkill.objects.filter(user=user, type=SkillType.DESIRED).delete()
                rows = {}
                for item in desired:
                    rows[item["skillId"]] = UserSkill(
                        user=user,
                        skill=skills[item["skillId"]],
                        type=SkillType.DESIRED,
                        level=None,
                    )
                UserSkill.objects.bulk_create(rows.values())

        cls.get_logger().info(
            f"Skills replaced for user {user.id} "
            f"(owned={'-' if owned is None else len(owned)}, "
            f"desired={'-' if desired is None else len(desired)})"
        )
        return ServiceResult.success(user)

    @classmethod
    def seed_catalog(cls) -> ServiceResult[int]:
        """
        Upsert every predefined skill.

        Returns:
            ServiceResult with the number of newly created skills
        """
        created_count = 0
        with cls.atomic():
            for definition in PREDEFINED_SKILLS:
                _, created = Skill.objects.update_or_create(
                    id=definition.id,
                    defaults={
                        "name": definition.name,
                        "category": definition.category,
                        "icon_name": definition.icon_name,
                    },
                )
                created_count += int(created)

        cls.get_logger().info(f"Skill catalog seeded: {created_count} created")
        return ServiceResult.success(created_count)
