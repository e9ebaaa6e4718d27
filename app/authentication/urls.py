"""
URL configuration for authentication app.

URL structure (mounted at /api/v1/):
    me/                 - Current user (GET / PUT / PATCH)
    me/peek/            - Registration state from token userinfo (GET)
    me/bootstrap/       - Create/refresh local record (POST)
    me/avatar/          - Avatar upload (POST, multipart)
    me/skills/          - Replace owned/desired skills (PUT)
    users/{id}/         - Public profile (GET)
"""

from django.urls import path

from authentication.views import (
    MeAvatarView,
    MeBootstrapView,
    MePeekView,
    MeView,
    UserProfileView,
)
from skills.views import MySkillsView

app_name = "authentication"

urlpatterns = [
    path("me/", MeView.as_view(), name="me"),
    path("me/peek/", MePeekView.as_view(), name="me-peek"),
    path("me/bootstrap/", MeBootstrapView.as_view(), name="me-bootstrap"),
    path("me/avatar/", MeAvatarView.as_view(), name="me-avatar"),
    path("me/skills/", MySkillsView.as_view(), name="me-skills"),
    path("users/<uuid:user_id>/", UserProfileView.as_view(), name="user-profile"),
]
