"""
Factories that wire billing components from Django settings.

Views call these per request instead of importing module-level clients, so
tests can override settings or patch a single factory.

Settings:
    STRIPE_SECRET_KEY: Required by get_stripe_adapter()
    STRIPE_WEBHOOK_SECRET: Returned by get_webhook_secret()
    STRIPE_API_TIMEOUT_SECONDS: HTTP timeout for Stripe calls (default: 10)
    STRIPE_MAX_RETRIES: SDK network retries (default: 0)
"""

from __future__ import annotations

from django.conf import settings

from billing.adapters import StripeAdapter
from billing.services import CheckoutService
from billing.store import AccountStore


def get_stripe_adapter() -> StripeAdapter:
    """
    Raises:
        ConfigurationError: STRIPE_SECRET_KEY is empty
    """
    return StripeAdapter(
        api_key=getattr(settings, "STRIPE_SECRET_KEY", ""),
        timeout=getattr(settings, "STRIPE_API_TIMEOUT_SECONDS", 10),
        max_network_retries=getattr(settings, "STRIPE_MAX_RETRIES", 0),
    )


def get_checkout_service() -> CheckoutService:
    return CheckoutService(get_stripe_adapter())


def get_account_store() -> AccountStore:
    return AccountStore()


def get_webhook_secret() -> str:
    return getattr(settings, "STRIPE_WEBHOOK_SECRET", "")
