"""
Payment provider adapters.

All Stripe API calls go through these adapters to ensure consistent error
handling, timeouts and observability.

Usage:
    from billing.adapters import StripeAdapter, CreateCheckoutSessionParams

    adapter = StripeAdapter(api_key=settings.STRIPE_SECRET_KEY)
    customer_id = adapter.find_customer_by_email("user@example.com")
"""

from billing.adapters.stripe_adapter import (
    CheckoutSessionResult,
    CreateCheckoutSessionParams,
    StripeAdapter,
)

__all__ = [
    "CheckoutSessionResult",
    "CreateCheckoutSessionParams",
    "StripeAdapter",
]
