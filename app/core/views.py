"""
Core views providing infrastructure endpoints and response helpers.

Contents:
    health_check: Liveness/readiness endpoint used by Docker and load balancers
    error_response: Turn a failed ServiceResult into a DRF Response
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.core.cache import cache
from django.db import DatabaseError, connection
from django.http import JsonResponse
from rest_framework import status
from rest_framework.response import Response

if TYPE_CHECKING:
    from core.services import ServiceResult

# Error codes that mean "you may not do this" rather than "bad input"
FORBIDDEN_ERROR_CODES = frozenset(
    {
        "PERMISSION_DENIED",
        "NOT_PARTICIPANT",
        "ADMIN_REQUIRED",
    }
)


def error_response(result: ServiceResult, status_code: int | None = None) -> Response:
    """
    Build the standard error Response for a failed service call.

    Status is derived from the error code unless given explicitly:
        *_NOT_FOUND            -> 404
        FORBIDDEN_ERROR_CODES  -> 403
        anything else          -> 400
    """
    if status_code is None:
        code = result.error_code or ""
        if code.endswith("NOT_FOUND"):
            status_code = status.HTTP_404_NOT_FOUND
        elif code in FORBIDDEN_ERROR_CODES:
            status_code = status.HTTP_403_FORBIDDEN
        else:
            status_code = status.HTTP_400_BAD_REQUEST
    return Response(result.to_response(), status=status_code)


def health_check(request):
    """
    Health check endpoint for monitoring and orchestration.

    Returns:
        JsonResponse with status and component health:
        - status: "healthy" or "unhealthy"
        - database: "connected" or "disconnected"
        - cache: "connected" or "disconnected"

    HTTP Status Codes:
        200: All systems operational
        503: Database unreachable
    """
    health_status = {
        "status": "healthy",
        "database": "unknown",
        "cache": "unknown",
    }
    is_healthy = True

    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
        health_status["database"] = "connected"
    except DatabaseError:
        health_status["database"] = "disconnected"
        health_status["status"] = "unhealthy"
        is_healthy = False

    # Cache failure is not critical (django-redis runs with IGNORE_EXCEPTIONS)
    cache.set("health_check", "ok", timeout=1)
    if cache.get("health_check") == "ok":
        health_status["cache"] = "connected"
    else:
        health_status["cache"] = "disconnected"

    status_code = 200 if is_healthy else 503
    return JsonResponse(health_status, status=status_code)
