"""
Django app configuration for skills.
"""

from django.apps import AppConfig


class SkillsConfig(AppConfig):
    """Configuration for the skills application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "skills"
    verbose_name = "Skills"
