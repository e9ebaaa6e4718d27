"""
Django admin configuration for skills.
"""

from django.contrib import admin
from django.db.models import Count

from skills.models import Skill, UserSkill


@admin.register(Skill)
class SkillAdmin(admin.ModelAdmin):
    list_display = ["id", "name", "category", "icon_name", "user_count"]
    list_filter = ["category"]
    search_fields = ["id", "name"]
    ordering = ["category", "name"]

    def get_queryset(self, request):
        return super().get_queryset(request).annotate(_user_count=Count("user_skills"))

    @admin.display(description="Users", ordering="_user_count")
    def user_count(self, obj):
        return obj._user_count


@admin.register(UserSkill)
class UserSkillAdmin(admin.ModelAdmin):
    list_display = ["user", "skill", "type", "level", "created_at"]
    list_filter = ["type", "level", "skill__category"]
    search_fields = ["user__email", "user__profile__username", "skill__name"]
    raw_id_fields = ["user"]
    list_select_related = ["user", "skill"]
