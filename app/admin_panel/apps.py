"""Django app configuration for the admin panel API."""

from django.apps import AppConfig


class AdminPanelConfig(AppConfig):
    """Configuration for the admin_panel app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "admin_panel"
    verbose_name = "Admin Panel"
