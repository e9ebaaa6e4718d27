"""
URL configuration for skills app.

URL structure:
    /api/v1/skills/   - Skill catalog (GET)

The /api/v1/me/skills/ route is mounted with the other /me/ routes in
authentication/urls.py.
"""

from django.urls import path

from skills.views import SkillListView

app_name = "skills"

urlpatterns = [
    path("", SkillListView.as_view(), name="skill-list"),
]
