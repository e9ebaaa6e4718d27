"""
DRF authentication and permission classes for OIDC bearer tokens.

OIDCAuthentication resolves "Authorization: Bearer <token>" into:
    request.auth -> UserInfo (always, once the token is valid)
    request.user -> local User for userinfo.sub, or AnonymousUser when the
                    caller has not bootstrapped yet

Keeping request.auth populated for not-yet-registered callers lets the
/me/peek/ and /me/bootstrap/ endpoints work before a local User exists,
while IsAuthenticated still rejects them everywhere else.
"""

from __future__ import annotations

import logging

from django.contrib.auth.models import AnonymousUser
from rest_framework import exceptions
from rest_framework.authentication import BaseAuthentication, get_authorization_header
from rest_framework.permissions import BasePermission

from authentication.models import User
from authentication.oidc import TokenVerificationError, UserInfo, verify_token

logger = logging.getLogger(__name__)


class OIDCAuthentication(BaseAuthentication):
    """Authenticate requests with identity-provider access tokens."""

    keyword = "Bearer"

    def authenticate(self, request):
        auth = get_authorization_header(request).split()
        if not auth or auth[0].lower() != self.keyword.lower().encode():
            return None

        if len(auth) != 2:
            raise exceptions.AuthenticationFailed("missing bearer")

        try:
            token = auth[1].decode()
        except UnicodeError as exc:
            raise exceptions.AuthenticationFailed("invalid token") from exc

        try:
            userinfo = verify_token(token)
        except TokenVerificationError as exc:
            raise exceptions.AuthenticationFailed(exc.message) from exc

        user = (
            User.objects.select_related("profile")
            .filter(auth_user_id=userinfo.sub)
            .first()
        )
        if user is None:
            return (AnonymousUser(), userinfo)
        if not user.is_active:
            raise exceptions.AuthenticationFailed("User inactive or deleted.")

        return (user, userinfo)

    def authenticate_header(self, request):
        return f'{self.keyword} realm="api"'


class HasVerifiedToken(BasePermission):
    """
    Allow any caller whose bearer token was verified.

    Used by the /me/ endpoints that must work before bootstrap.
    """

    def has_permission(self, request, view):
        return isinstance(request.auth, UserInfo)


class IsPlatformAdmin(BasePermission):
    """Allow staff users and users holding the "admin" role."""

    message = "Admin role required."

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.is_platform_admin)
