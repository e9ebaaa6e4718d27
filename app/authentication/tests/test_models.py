"""
Tests for authentication models, manager and signals.
"""

import pytest
from django.db import IntegrityError

from authentication.models import Profile, User
from authentication.tests.factories import UserFactory


@pytest.mark.django_db
class TestUserManager:
    """Tests for UserManager."""

    def test_create_user_sets_unusable_password(self):
        user = User.objects.create_user(auth_user_id="sub-x", email="X@EXAMPLE.COM")

        assert user.has_usable_password() is False
        assert user.email == "X@example.com"
        assert user.is_staff is False

    def test_create_user_requires_auth_user_id(self):
        with pytest.raises(ValueError):
            User.objects.create_user(auth_user_id="")

    def test_create_superuser_is_staff_with_password(self):
        admin = User.objects.create_superuser(auth_user_id="staff-1", password="pw-123456")

        assert admin.is_staff is True
        assert admin.is_superuser is True
        assert admin.check_password("pw-123456")

    def test_auth_user_id_is_unique(self):
        UserFactory(auth_user_id="dup")

        with pytest.raises(IntegrityError):
            User.objects.create_user(auth_user_id="dup")


@pytest.mark.django_db
class TestUserProperties:
    def test_profile_created_by_signal(self):
        """
        Every new user gets exactly one profile.

        Why it matters: serializers read profile fields without guards.
        """
        user = UserFactory()

        assert Profile.objects.filter(user=user).count() == 1

    def test_display_name_falls_back(self):
        user = UserFactory(email="fallback@example.com")
        assert user.display_name == "fallback@example.com"

        user.profile.username = "handle"
        assert user.display_name == "handle"

        user.profile.name = "Real Name"
        assert user.display_name == "Real Name"

    @pytest.mark.parametrize(
        "roles,is_staff,expected",
        [
            ([], False, False),
            (["admin"], False, True),
            (["editor"], False, False),
            ([], True, True),
        ],
    )
    def test_is_platform_admin(self, roles, is_staff, expected):
        user = UserFactory(roles=roles, is_staff=is_staff)

        assert user.is_platform_admin is expected


@pytest.mark.django_db
class TestProfileUsernameConstraint:
    def test_username_unique_case_insensitively(self):
        UserFactory(profile_data={"username": "casey"})
        other = UserFactory()
        other.profile.username = "CASEY"

        with pytest.raises(IntegrityError):
            other.profile.save()

    def test_multiple_null_usernames_allowed(self):
        UserFactory()
        UserFactory()

        assert Profile.objects.filter(username__isnull=True).count() == 2
