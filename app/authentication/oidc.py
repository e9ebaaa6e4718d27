"""
Client for the external OIDC identity provider.

Access tokens issued by the provider are opaque to this service. A token
is considered valid when the provider's userinfo endpoint accepts it and
returns a subject id (`sub`).

Flow:
    1. Hash the token and look for a cached userinfo payload
    2. On miss, GET OIDC_USERINFO_URL with "Authorization: Bearer <token>"
    3. Non-2xx, transport errors and payloads without `sub` are rejected
    4. Cache the payload for OIDC_USERINFO_CACHE_TTL seconds

Usage:
    from authentication.oidc import TokenVerificationError, verify_token

    try:
        userinfo = verify_token(token)
    except TokenVerificationError:
        ...  # 401 / close websocket

Related files:
    - backends.py: DRF authentication class built on verify_token
    - chat/middleware.py: WebSocket authentication built on verify_token
"""

from __future__ import annotations

import hashlib
import logging
from dataclasses import asdict, dataclass

import httpx
from django.conf import settings
from django.core.cache import cache

from core.exceptions import BaseApplicationError

logger = logging.getLogger(__name__)

USERINFO_CACHE_PREFIX = "oidc:userinfo:"


class TokenVerificationError(BaseApplicationError):
    """The identity provider did not accept the token."""

    default_error_code: str = "INVALID_TOKEN"


@dataclass(frozen=True)
class UserInfo:
    """Claims returned by the userinfo endpoint."""

    sub: str
    email: str | None = None
    name: str | None = None


def _cache_key(token: str) -> str:
    digest = hashlib.sha256(token.encode("utf-8")).hexdigest()
    return f"{USERINFO_CACHE_PREFIX}{digest}"


def request_userinfo(token: str) -> UserInfo:
    """
    Call the userinfo endpoint for a bearer token.

    Raises:
        TokenVerificationError: Provider rejected the token, was unreachable,
            or returned a payload without a subject id.
    """
    try:
        response = httpx.get(
            settings.OIDC_USERINFO_URL,
            headers={"Authorization": f"Bearer {token}"},
            timeout=settings.OIDC_TIMEOUT,
        )
    except httpx.HTTPError as exc:
        logger.warning(f"Userinfo request failed: {exc}")
        raise TokenVerificationError("invalid token") from exc

    if not response.is_success:
        logger.info(f"Userinfo rejected token: {response.status_code}")
        raise TokenVerificationError("invalid token")

    try:
        payload = response.json()
    except ValueError as exc:
        raise TokenVerificationError("invalid token") from exc

    sub = payload.get("sub") if isinstance(payload, dict) else None
    if not sub:
        logger.info("Userinfo payload missing sub claim")
        raise TokenVerificationError("invalid token")

    return UserInfo(
        sub=str(sub),
        email=payload.get("email") or None,
        name=payload.get("name") or None,
    )


def verify_token(token: str) -> UserInfo:
    """
    Resolve a bearer token to provider claims, using the cache when possible.

    Raises:
        TokenVerificationError: If the token is empty or rejected.
    """
    if not token:
        raise TokenVerificationError("missing bearer")

    ttl = settings.OIDC_USERINFO_CACHE_TTL
    key = _cache_key(token)
    if ttl:
        cached = cache.get(key)
        if cached:
            return UserInfo(**cached)

    userinfo = request_userinfo(token)

    if ttl:
        cache.set(key, asdict(userinfo), timeout=ttl)
    return userinfo
