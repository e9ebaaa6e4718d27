"""
Authentication models.

This module defines the identity models:
- User: Local account keyed by the identity provider's subject id (sub)
- Profile: Public profile data (OneToOne with User)

Identity is owned by an external OIDC provider. A User row is a local
mirror created on first login ("bootstrap") and keyed by auth_user_id,
the provider's stable `sub` claim. Staff accounts for the Django admin
use the same table with a hand-picked auth_user_id and a password.

Related files:
    - managers.py: UserManager keyed by auth_user_id
    - backends.py: DRF authentication against the userinfo endpoint
    - services.py: ProfileService (bootstrap, profile updates, avatar)
    - signals.py: Auto-create profile on user creation
"""

import re

from django.conf import settings
from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin
from django.core.exceptions import ValidationError
from django.db import models
from django.db.models.functions import Lower

from authentication.managers import UserManager
from core.model_mixins import UUIDPrimaryKeyMixin
from core.models import BaseModel

# Role that grants access to the admin panel API
ADMIN_ROLE = "admin"

USERNAME_PATTERN = re.compile(r"^[a-z0-9_-]{3,30}$")


def validate_username_format(value):
    """Validate username format: 3-30 chars, lowercase alphanumeric + _ + -."""
    if not USERNAME_PATTERN.match(value.lower()):
        raise ValidationError(
            "Username must be 3-30 characters and contain only "
            "letters, numbers, underscores, and hyphens."
        )


class User(UUIDPrimaryKeyMixin, AbstractBaseUser, PermissionsMixin):
    """
    Local user record mirrored from the identity provider.

    Fields:
        auth_user_id: OIDC subject id; unique and used as USERNAME_FIELD
        email: Snapshot of the provider email at last bootstrap
        roles: Application roles, e.g. ["admin"]
        last_login_at: Last successful bootstrap
        is_active: Whether the user account is active
        is_staff: Whether the user can access Django admin
        created_at / updated_at: Row timestamps

    Note:
        OIDC users never have a usable password; tokens are verified
        against the provider on every request.
    """

    auth_user_id = models.CharField(
        max_length=255,
        unique=True,
        help_text="Subject id (sub) issued by the identity provider",
    )
    email = models.EmailField(
        max_length=254,
        blank=True,
        null=True,
        help_text="Email snapshot from the identity provider",
    )
    roles = models.JSONField(
        default=list,
        blank=True,
        help_text='Application roles (e.g. ["admin"])',
    )
    last_login_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="When the user last bootstrapped a session",
    )

    # Account status flags
    is_active = models.BooleanField(
        default=True,
        help_text="Whether this user account is active. Deselect instead of deleting.",
    )
    is_staff = models.BooleanField(
        default=False,
        help_text="Whether the user can access the admin site.",
    )

    created_at = models.DateTimeField(
        auto_now_add=True,
        db_index=True,
        help_text="When the user account was created",
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        help_text="When the user record was last modified",
    )

    USERNAME_FIELD = "auth_user_id"
    REQUIRED_FIELDS = []

    objects = UserManager()

    class Meta:
        db_table = "authentication_user"
        verbose_name = "user"
        verbose_name_plural = "users"
        ordering = ["-created_at"]

    def __str__(self):
        return self.email or self.auth_user_id

    def get_full_name(self):
        try:
            return self.profile.name or self.email or self.auth_user_id
        except Profile.DoesNotExist:
            return self.email or self.auth_user_id

    def get_short_name(self):
        return self.get_full_name()

    @property
    def display_name(self):
        """Name shown in notifications: profile name, then username, then email."""
        try:
            profile = self.profile
        except Profile.DoesNotExist:
            return self.email or "Someone"
        return profile.name or profile.username or self.email or "Someone"

    @property
    def is_platform_admin(self):
        """Whether the user may use the admin panel API."""
        return self.is_staff or ADMIN_ROLE in (self.roles or [])


def avatar_upload_path(instance, filename):
    """Store avatars per user: avatars/<user_id>/<filename>."""
    return f"avatars/{instance.user_id}/{filename}"


class Profile(BaseModel):
    """
    Public profile data for a user.

    Fields:
        user: OneToOne link to User (also serves as primary key)
        name: Display name
        username: Unique handle (case-insensitive), optional
        birth_date: Date of birth
        avatar_url: Absolute URL of the avatar (uploaded or external)
        avatar: Uploaded avatar image, if any
        bio: Free-form about text
        subscription: Subscription snapshot (plan, status, period dates...)
        subscribers_count: Number of followers (denormalized)
        subscriptions_count: Number of users followed (denormalized)

    Note:
        Profile is automatically created via signals when a User is created.
        The two counters are maintained by social.services.FollowService
        with F() expressions; never write them from request data except
        through the admin panel.
    """

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="profile",
        primary_key=True,
        help_text="User this profile belongs to",
    )
    name = models.CharField(
        max_length=150,
        blank=True,
        null=True,
        help_text="Display name",
    )
    username = models.CharField(
        max_length=30,
        blank=True,
        null=True,
        db_index=True,
        validators=[validate_username_format],
        help_text="Unique username (3-30 chars, alphanumeric + _ + -)",
    )
    birth_date = models.DateField(
        blank=True,
        null=True,
        help_text="Date of birth",
    )
    avatar_url = models.URLField(
        max_length=500,
        blank=True,
        null=True,
        help_text="Absolute URL of the user's avatar",
    )
    avatar = models.ImageField(
        upload_to=avatar_upload_path,
        blank=True,
        null=True,
        help_text="Uploaded avatar image",
    )
    bio = models.TextField(
        blank=True,
        null=True,
        help_text="Short biography",
    )
    subscription = models.JSONField(
        blank=True,
        null=True,
        help_text="Subscription snapshot, e.g. {plan, status, period_end}",
    )
    # Example subscription structure:
    # {
    #     "plan": "pro_monthly",
    #     "status": "active",
    #     "period_end": "2025-01-31T00:00:00Z",
    #     "auto_renew": true
    # }
    subscribers_count = models.PositiveIntegerField(
        default=0,
        help_text="Number of users following this user",
    )
    subscriptions_count = models.PositiveIntegerField(
        default=0,
        help_text="Number of users this user follows",
    )

    class Meta:
        db_table = "authentication_profile"
        verbose_name = "profile"
        verbose_name_plural = "profiles"
        constraints = [
            # Case-insensitive unique constraint for username
            models.UniqueConstraint(
                Lower("username"),
                name="unique_username_case_insensitive",
                condition=models.Q(username__gt=""),  # Only for non-empty usernames
            ),
        ]

    def __str__(self):
        return self.username or self.name or str(self.user)

    def clean(self):
        """Normalize username to lowercase for case-insensitive uniqueness."""
        super().clean()
        if self.username:
            self.username = self.username.lower()
