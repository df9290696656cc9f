"""
Webhook handling for subscription events from Stripe.

Webhooks are verified against the raw body, normalized into a BillingEvent
and reconciled into BillingAccount synchronously.

Usage:
    # In urls.py
    from billing.webhooks.views import stripe_webhook

    urlpatterns = [
        path("webhooks/stripe/", stripe_webhook, name="stripe_webhook"),
    ]
"""

from billing.webhooks.events import BillingEvent, EventType
from billing.webhooks.handlers import ReconcileOutcome, reconcile, register_handler
from billing.webhooks.verifier import WebhookVerifier, verify
from billing.webhooks.views import stripe_webhook

__all__ = [
    "BillingEvent",
    "EventType",
    "ReconcileOutcome",
    "WebhookVerifier",
    "reconcile",
    "register_handler",
    "stripe_webhook",
    "verify",
]
