"""
Tests for ProfileService business logic.

Covers:
- ensure_by_sub: first-login provisioning and login refresh
- validate_username: format and case-insensitive uniqueness
- update_me: partial self-service updates
- set_avatar: avatar storage and URL

Test Organization:
    - Each service method has its own test class
    - Each test validates ONE specific behavior
"""

from datetime import date

import pytest
from freezegun import freeze_time

from authentication.models import User
from authentication.oidc import UserInfo
from authentication.services import ProfileService
from authentication.tests.conftest import create_test_image
from authentication.tests.factories import UserFactory


@pytest.mark.django_db
class TestEnsureBySub:
    """Tests for ProfileService.ensure_by_sub()."""

    def test_creates_user_and_profile_on_first_login(self):
        """
        An unknown sub creates a User plus Profile seeded from userinfo.

        Why it matters: bootstrap is the only way provider accounts get a
        local record.
        """
        info = UserInfo(sub="new-sub", email="New@Example.com", name="Newbie")

        with freeze_time("2025-03-01 12:00:00"):
            result = ProfileService.ensure_by_sub(info, avatar_url="https://cdn.example.com/a.png")

        assert result.success is True
        user = result.data
        assert user.auth_user_id == "new-sub"
        assert user.email == "New@example.com"
        assert user.last_login_at.isoformat().startswith("2025-03-01T12:00:00")
        assert user.has_usable_password() is False
        user.profile.refresh_from_db()
        assert user.profile.name == "Newbie"
        assert user.profile.avatar_url == "https://cdn.example.com/a.png"

    def test_existing_user_keeps_local_edits(self):
        """
        Provider values only fill gaps; local edits win.

        Why it matters: users rename themselves in-app and must not be
        reverted on every login.
        """
        user = UserFactory(auth_user_id="known", profile_data={"name": "Local Name"})
        original_email = user.email

        result = ProfileService.ensure_by_sub(
            UserInfo(sub="known", email="other@example.com", name="Provider Name")
        )

        assert result.success is True
        assert result.data.pk == user.pk
        user.refresh_from_db()
        user.profile.refresh_from_db()
        assert user.profile.name == "Local Name"
        assert user.email == original_email

    def test_existing_user_gets_missing_fields_filled(self):
        user = UserFactory(auth_user_id="gappy", email=None)

        ProfileService.ensure_by_sub(
            UserInfo(sub="gappy", email="gappy@example.com", name="Gappy")
        )

        user.refresh_from_db()
        user.profile.refresh_from_db()
        assert user.email == "gappy@example.com"
        assert user.profile.name == "Gappy"

    def test_refresh_bumps_last_login(self):
        user = UserFactory(auth_user_id="returning")

        with freeze_time("2030-01-01 08:00:00"):
            ProfileService.ensure_by_sub(UserInfo(sub="returning"))

        user.refresh_from_db()
        assert user.last_login_at.year == 2030

    def test_is_idempotent(self):
        info = UserInfo(sub="twice")

        ProfileService.ensure_by_sub(info)
        ProfileService.ensure_by_sub(info)

        assert User.objects.filter(auth_user_id="twice").count() == 1


@pytest.mark.django_db
class TestValidateUsername:
    """Tests for ProfileService.validate_username()."""

    def test_normalizes_to_lowercase(self):
        result = ProfileService.validate_username("  MixedCase ")

        assert result.success is True
        assert result.data == "mixedcase"

    def test_rejects_invalid_format(self):
        result = ProfileService.validate_username("a!")

        assert result.success is False
        assert result.error_code == "INVALID_USERNAME"

    def test_rejects_taken_username_case_insensitively(self):
        UserFactory(profile_data={"username": "taken"})

        result = ProfileService.validate_username("TAKEN")

        assert result.success is False
        assert result.error_code == "USERNAME_TAKEN"
        assert result.error == "Username already exists"

    def test_own_username_is_not_taken(self):
        user = UserFactory(profile_data={"username": "mine"})

        result = ProfileService.validate_username("mine", exclude_user=user)

        assert result.success is True

    def test_blank_clears_username(self):
        result = ProfileService.validate_username("   ")

        assert result.success is True
        assert result.data is None


@pytest.mark.django_db
class TestUpdateMe:
    """Tests for ProfileService.update_me()."""

    def test_updates_only_given_fields(self, user):
        """
        Absent keys are left untouched.

        Why it matters: clients send partial bodies; missing keys must not
        clear data.
        """
        user.profile.avatar_url = "https://cdn.example.com/keep.png"
        user.profile.save()

        result = ProfileService.update_me(
            user, {"name": "Renamed", "birth_date": date(1991, 2, 3)}
        )

        assert result.success is True
        user.profile.refresh_from_db()
        assert user.profile.name == "Renamed"
        assert user.profile.birth_date == date(1991, 2, 3)
        assert user.profile.avatar_url == "https://cdn.example.com/keep.png"

    def test_explicit_null_clears_field(self, user):
        user.profile.bio = "old"
        user.profile.save()

        ProfileService.update_me(user, {"bio": None})

        user.profile.refresh_from_db()
        assert user.profile.bio is None

    def test_username_is_normalized(self, user):
        ProfileService.update_me(user, {"username": "NewHandle"})

        user.profile.refresh_from_db()
        assert user.profile.username == "newhandle"

    def test_duplicate_username_fails_without_changes(self, user, other_user):
        other_user.profile.username = "dupe"
        other_user.profile.save()

        result = ProfileService.update_me(user, {"name": "X", "username": "Dupe"})

        assert result.success is False
        assert result.error_code == "USERNAME_TAKEN"
        user.profile.refresh_from_db()
        assert user.profile.name == "Test User"

    def test_ignores_non_editable_keys(self, user):
        ProfileService.update_me(user, {"subscribers_count": 999})

        user.profile.refresh_from_db()
        assert user.profile.subscribers_count == 0


@pytest.mark.django_db
class TestSetAvatar:
    """Tests for ProfileService.set_avatar()."""

    def test_stores_file_and_sets_absolute_url(self, user, settings, tmp_path):
        settings.MEDIA_ROOT = tmp_path

        result = ProfileService.set_avatar(
            user,
            create_test_image("face.png"),
            build_absolute_uri=lambda url: f"http://testserver{url}",
        )

        assert result.success is True
        user.profile.refresh_from_db()
        assert user.profile.avatar.name.startswith(f"avatars/{user.id}/")
        assert user.profile.avatar_url.startswith("http://testserver/media/avatars/")
