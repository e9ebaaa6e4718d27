"""
Serializers for skills.

- SkillSerializer: catalog entry
- OwnedSkillSerializer / DesiredSkillSerializer: nested {skill, level}
  representation used inside user payloads
- SkillReplaceSerializer: request body for replacing a user's skills
"""

from rest_framework import serializers

from skills.models import Skill, SkillLevel, SkillType, UserSkill


class SkillSerializer(serializers.ModelSerializer):
    class Meta:
        model = Skill
        fields = ["id", "name", "category", "icon_name"]
        read_only_fields = fields


class UserSkillSerializer(serializers.ModelSerializer):
    """{skill: {...}, level} entry of a user's owned/desired list."""

    skill = SkillSerializer(read_only=True)

    class Meta:
        model = UserSkill
        fields = ["skill", "level"]
        read_only_fields = fields


def split_user_skills(user):
    """
    Return (owned, desired) serialized lists for a user.

    Uses the prefetched user_skills relation when available.
    """
    owned, desired = [], []
    for user_skill in user.user_skills.all():
        data = UserSkillSerializer(user_skill).data
        if user_skill.type == SkillType.OWNED:
            owned.append(data)
        else:
            desired.append(data)
    return owned, desired


class OwnedSkillInputSerializer(serializers.Serializer):
    skillId = serializers.CharField(max_length=64)
    level = serializers.ChoiceField(choices=SkillLevel.choices)


class DesiredSkillInputSerializer(serializers.Serializer):
    skillId = serializers.CharField(max_length=64)


class SkillReplaceSerializer(serializers.Serializer):
    """
    Body for PUT /me/skills/.

    Omitted lists are left untouched; empty lists clear that type.
    """

    ownedSkills = OwnedSkillInputSerializer(many=True, required=False)
    desiredSkills = DesiredSkillInputSerializer(many=True, required=False)
