"""
Django signals for authentication.

This module defines signal handlers for:
- Auto-creating Profile when User is created
- Logging role changes that grant admin panel access

Related files:
    - models.py: User and Profile models
    - apps.py: Signal import in ready()
"""

import logging

from django.conf import settings
from django.db.models.signals import post_save
from django.dispatch import receiver

logger = logging.getLogger(__name__)


@receiver(post_save, sender=settings.AUTH_USER_MODEL)
def create_user_profile(sender, instance, created, **kwargs):
    """
    Create a Profile for newly created users.

    Every code path that creates a User (bootstrap, admin panel,
    createsuperuser) relies on this to guarantee user.profile exists.
    """
    if created:
        from authentication.models import Profile

        Profile.objects.get_or_create(user=instance)
        logger.debug(f"Profile created for user: {instance.id}")


@receiver(post_save, sender=settings.AUTH_USER_MODEL)
def log_role_change(sender, instance, created, update_fields, **kwargs):
    """Log when a user's roles are written explicitly."""
    if not created and update_fields and "roles" in update_fields:
        logger.info(f"Roles updated for user {instance.id}: {instance.roles}")
