"""Core app configuration."""

from django.apps import AppConfig


class CoreConfig(AppConfig):
    """Configuration for the core application."""

    name = "drapes.core"
    verbose_name = "Elegant Drapes Core"
    default_auto_field = "django.db.models.BigAutoField"
