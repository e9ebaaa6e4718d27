"""
URL configuration for the Django application.

The `urlpatterns` list routes URLs to views. This is the root URL configuration
that includes all app-specific routes.

URL Structure:
    /admin/                        - Django admin interface
    /health/                       - Health check endpoint (for load balancers, Docker)
    /api/schema/                   - OpenAPI schema (YAML)
    /api/docs/                     - Swagger UI
    /api/redoc/                    - ReDoc
    /api/v1/                       - Profile endpoints (authentication.urls)
        me/                        - Current user (GET/PUT)
        me/peek/                   - Provider profile preview
        me/bootstrap/              - Create/refresh the local user
        me/avatar/                 - Avatar upload
        me/skills/                 - Replace own skills
        users/{id}/                - Public profile
    /api/v1/users/                 - Follow graph
        {id}/follow/               - Follow (POST) / unfollow (DELETE)
        {id}/followers/            - Followers list
        {id}/following/            - Following list
    /api/v1/skills/                - Skill catalog
    /api/v1/chats/                 - Chat endpoints (see chat.urls)
    /api/v1/notifications/         - Device token registration
    /api/v1/admin/                 - Admin panel API (platform admins)

WebSocket routes live in chat.routing and are served by config.asgi.

For more information, see:
https://docs.djangoproject.com/en/5.2/topics/http/urls/
"""

from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import (
    SpectacularAPIView,
    SpectacularRedocView,
    SpectacularSwaggerView,
)

from core.views import health_check

# =============================================================================
# API v1 Routes
# =============================================================================
# All routes here are prefixed with /api/v1/ automatically
api_v1_patterns = [
    # Profile and "me" endpoints
    path("", include("authentication.urls")),
    # Follow graph
    path("users/", include("social.urls")),
    # Skill catalog
    path("skills/", include("skills.urls")),
    # Chat
    path("chats/", include("chat.urls")),
    # Push notifications
    path("notifications/", include("notifications.urls")),
    # Admin panel API
    path("admin/", include("admin_panel.urls")),
]

urlpatterns = [
    # Documentation
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path(
        "api/docs/",
        SpectacularSwaggerView.as_view(url_name="schema"),
        name="swagger-ui",
    ),
    path("api/redoc/", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),
    # Admin
    path("admin/", admin.site.urls),
    # Health check (Docker, Kubernetes, load balancers)
    path("health/", health_check, name="health_check"),
    # API v1
    path("api/v1/", include(api_v1_patterns)),
]

# =============================================================================
# Admin Site Customization
# =============================================================================
admin.site.site_header = "Skillmate Admin"
admin.site.site_title = "Skillmate Admin Portal"
admin.site.index_title = "Users, chats and skills"
