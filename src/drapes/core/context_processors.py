"""Context processors for the storefront core."""

from django.conf import settings


def site_context(request):
    """Add site branding to templates."""
    return {
        "site_name": getattr(settings, "SITE_NAME", "Elegant Drapes"),
    }
