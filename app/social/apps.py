"""
Django app configuration for social.
"""

from django.apps import AppConfig


class SocialConfig(AppConfig):
    """Configuration for the social application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "social"
    verbose_name = "Social"
