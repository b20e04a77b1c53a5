"""
Django Resolver app configuration.
"""

from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class ResolverConfig(AppConfig):
    """Resolver application configuration."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "resolver"
    verbose_name = _("Order resolution")

    def ready(self):
        """Import signal handlers when app is ready."""
        # Import handlers to register them
        from resolver.signals import handlers  # noqa: F401
