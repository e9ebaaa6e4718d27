"""
URL configuration for the admin panel API.

Mounted at /api/v1/admin/ by config/urls.py.
"""

from django.urls import path

from admin_panel.views import (
    AdminSkillListView,
    AdminSkillSeedView,
    AdminUserCountView,
    AdminUserCreateView,
    AdminUserDetailView,
    AdminUserListView,
)

app_name = "admin_panel"

urlpatterns = [
    path("users/all/", AdminUserListView.as_view(), name="user-list"),
    path("users/count/", AdminUserCountView.as_view(), name="user-count"),
    path("users/create/", AdminUserCreateView.as_view(), name="user-create"),
    path("users/<uuid:user_id>/", AdminUserDetailView.as_view(), name="user-detail"),
    path("skills/", AdminSkillListView.as_view(), name="skill-list"),
    path("skills/seed/", AdminSkillSeedView.as_view(), name="skill-seed"),
]
