"""
Custom user manager for identity-provider-backed accounts.

Users are keyed by auth_user_id (the OIDC `sub`) instead of email or
username. Regular users never get a usable password; superusers created
from the command line do, so they can sign in to the Django admin.

Related files:
    - models.py: User model that uses this manager
"""

from django.contrib.auth.models import BaseUserManager


class UserManager(BaseUserManager):
    """
    Custom manager for User model keyed by auth_user_id.

    Usage:
        # Mirror a provider account
        user = User.objects.create_user(
            auth_user_id="f3c1...",
            email="user@example.com",
        )

        # Staff account for the Django admin
        admin = User.objects.create_superuser(
            auth_user_id="staff-alice",
            password="adminpassword",
        )
    """

    def create_user(self, auth_user_id, email=None, password=None, **extra_fields):
        """
        Create and save a user.

        Args:
            auth_user_id: Identity provider subject id (required)
            email: Email snapshot (optional)
            password: Password (only for staff accounts)
            **extra_fields: Additional fields to set on the user

        Raises:
            ValueError: If auth_user_id is not provided
        """
        if not auth_user_id:
            raise ValueError("The auth_user_id field must be set")

        if email:
            email = self.normalize_email(email)

        extra_fields.setdefault("is_staff", False)
        extra_fields.setdefault("is_superuser", False)

        user = self.model(auth_user_id=auth_user_id, email=email or None, **extra_fields)

        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()

        user.save(using=self._db)
        return user

    def create_superuser(self, auth_user_id, password=None, **extra_fields):
        """
        Create and save a superuser.

        Raises:
            ValueError: If is_staff or is_superuser is not True
        """
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True.")

        return self.create_user(auth_user_id, password=password, **extra_fields)
