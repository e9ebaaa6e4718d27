"""
Test configuration and fixtures for authentication tests.

Shared user fixtures (user, other_user, authenticated_client, ...) live
in app/conftest.py; this module adds authentication-specific data.
"""

from io import BytesIO

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from PIL import Image

from authentication.tests.factories import UserFactory


def create_test_image(name="avatar.png", size=(64, 64), image_format="PNG"):
    """
    Create an in-memory image upload.

    Returns:
        SimpleUploadedFile suitable for ImageField / multipart uploads
    """
    image = Image.new("RGB", size, color="red")
    buffer = BytesIO()
    image.save(buffer, format=image_format)
    buffer.seek(0)
    return SimpleUploadedFile(
        name=name,
        content=buffer.read(),
        content_type=f"image/{image_format.lower()}",
    )


@pytest.fixture
def named_user(db):
    """User with a complete profile (name and username set)."""
    return UserFactory(
        profile_data={"name": "Ann Example", "username": "ann", "bio": "Hi"}
    )


@pytest.fixture
def valid_me_update_data():
    """Valid body for PUT /api/v1/me/."""
    return {
        "name": "Updated Name",
        "username": "Updated_Handle",
        "bio": "Guitar and salsa",
        "birth_date": "1990-05-17",
    }


@pytest.fixture
def avatar_file():
    return create_test_image()
