"""
Django app configuration for billing.
"""

from django.apps import AppConfig


class BillingConfig(AppConfig):
    """Configuration for the billing application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "billing"
    verbose_name = "Billing"

    def ready(self):
        """
        Import signals when the app is ready.

        This ensures the account-creation handler is connected when Django starts.
        """
        from billing import signals  # noqa: F401
