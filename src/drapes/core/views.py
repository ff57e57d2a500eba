"""Core views for the storefront."""

import logging

from django.db import DatabaseError, connection
from django.http import JsonResponse
from django.shortcuts import redirect

logger = logging.getLogger(__name__)


def health_check(request):
    """Health check endpoint for container orchestration."""
    try:
        # Check database connection
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")

        return JsonResponse({"status": "healthy", "database": "connected"})
    except DatabaseError as e:
        logger.error("Health check failed: %s", e)
        return JsonResponse(
            {"status": "unhealthy", "error": str(e)},
            status=503,
        )


def index(request):
    """Homepage view."""
    if request.user.is_authenticated and request.user.is_staff:
        return redirect("staff:dashboard")

    return redirect("catalog:product-list")
