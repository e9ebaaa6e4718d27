"""
Shared pytest configuration for all apps.

Project-wide behaviour:
    - The OIDC userinfo call is replaced by an in-process fake identity
      provider, so no test ever reaches the network.
    - Redis-backed services are swapped for in-memory equivalents
      (local-memory cache, in-memory channel layer).
    - Tests are auto-marked unit / integration / e2e by filename.

Usage:
    def test_me(identity_provider, api_client, user):
        token = identity_provider.token_for(user)
        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")
        ...

    def test_with_helper(authenticated_client_factory, user):
        client = authenticated_client_factory(user)
"""

import pytest
from django.core.cache import cache
from rest_framework.test import APIClient


def pytest_configure():
    """Tune settings that must be in place before any view is imported."""
    from django.conf import settings

    # Disable throttling during tests to prevent rate limit failures
    settings.REST_FRAMEWORK["DEFAULT_THROTTLE_CLASSES"] = []
    settings.REST_FRAMEWORK["DEFAULT_THROTTLE_RATES"] = {}

    settings.PASSWORD_HASHERS = [
        "django.contrib.auth.hashers.MD5PasswordHasher",
    ]


def pytest_collection_modifyitems(items):
    """
    Auto-mark tests based on filename patterns.

    Mapping:
    - test_integration.py → e2e (full user journey workflows)
    - test_views.py, test_services.py, test_tasks.py, etc. → integration
    - test_models.py, test_serializers.py, test_oidc.py, etc. → unit
    - Unmatched files → integration (safe default for Django)

    Explicit markers on test functions/classes take precedence.
    """
    e2e_patterns = ["test_integration.py"]

    unit_patterns = [
        "test_models.py",
        "test_serializers.py",
        "test_managers.py",
        "test_signals.py",
        "test_oidc.py",
        "test_providers.py",
        "test_constants.py",
    ]

    for item in items:
        existing_markers = {m.name for m in item.iter_markers()}
        if existing_markers & {"unit", "integration", "e2e"}:
            continue

        filename = str(item.fspath).split("/")[-1]

        if any(pattern in filename for pattern in e2e_patterns):
            item.add_marker(pytest.mark.e2e)
        elif any(pattern in filename for pattern in unit_patterns):
            item.add_marker(pytest.mark.unit)
        else:
            item.add_marker(pytest.mark.integration)


class FakeIdentityProvider:
    """
    In-memory stand-in for the identity provider's userinfo endpoint.

    Tokens are registered explicitly; unknown tokens are rejected exactly
    like the real provider rejects them.
    """

    def __init__(self):
        self._tokens = {}
        self.calls = 0

    def register(self, sub, email=None, name=None, token=None):
        """Register claims and return the bearer token that resolves to them."""
        from authentication.oidc import UserInfo

        token = token or f"token-{sub}"
        self._tokens[token] = UserInfo(sub=sub, email=email, name=name)
        return token

    def token_for(self, user):
        """Return a valid token for an existing local user."""
        return self.register(user.auth_user_id, email=user.email)

    def revoke(self, token):
        self._tokens.pop(token, None)

    def request_userinfo(self, token):
        from authentication.oidc import TokenVerificationError

        self.calls += 1
        try:
            return self._tokens[token]
        except KeyError:
            raise TokenVerificationError("invalid token") from None


@pytest.fixture(autouse=True)
def identity_provider(monkeypatch):
    """Replace the userinfo HTTP call with FakeIdentityProvider."""
    provider = FakeIdentityProvider()
    monkeypatch.setattr(
        "authentication.oidc.request_userinfo", provider.request_userinfo
    )
    return provider


@pytest.fixture(autouse=True)
def in_memory_backends(settings):
    """Run cache and channel layer in memory, with userinfo caching off."""
    settings.CACHES = {
        "default": {
            "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
            "LOCATION": "tests",
        }
    }
    settings.CHANNEL_LAYERS = {
        "default": {"BACKEND": "channels.layers.InMemoryChannelLayer"}
    }
    settings.OIDC_USERINFO_CACHE_TTL = 0
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def api_client():
    """Unauthenticated DRF API client."""
    return APIClient()


@pytest.fixture
def authenticated_client_factory(identity_provider):
    """
    Factory fixture that returns an APIClient carrying a bearer token
    for the given user.
    """

    def make_client(user):
        client = APIClient()
        token = identity_provider.token_for(user)
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")
        return client

    return make_client


# =============================================================================
# User Fixtures
# =============================================================================


@pytest.fixture
def user(db):
    """Create a basic active user with auto-created profile."""
    from authentication.tests.factories import UserFactory

    return UserFactory(profile_data={"name": "Test User"})


@pytest.fixture
def other_user(db):
    """A second active user, for interactions between two accounts."""
    from authentication.tests.factories import UserFactory

    return UserFactory(profile_data={"name": "Other User"})


@pytest.fixture
def third_user(db):
    from authentication.tests.factories import UserFactory

    return UserFactory(profile_data={"name": "Third User"})


@pytest.fixture
def platform_admin(db):
    """User holding the "admin" role (admin panel access)."""
    from authentication.tests.factories import UserFactory

    return UserFactory(roles=["admin"], profile_data={"name": "Admin"})


@pytest.fixture
def inactive_user(db):
    """Create a deactivated user (is_active=False)."""
    from authentication.tests.factories import UserFactory

    return UserFactory(is_active=False)


@pytest.fixture
def authenticated_client(authenticated_client_factory, user):
    """API client authenticated as `user`."""
    return authenticated_client_factory(user)


@pytest.fixture
def other_client(authenticated_client_factory, other_user):
    """API client authenticated as `other_user`."""
    return authenticated_client_factory(other_user)


@pytest.fixture
def platform_admin_client(authenticated_client_factory, platform_admin):
    """API client authenticated as `platform_admin`."""
    return authenticated_client_factory(platform_admin)
