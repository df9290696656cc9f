"""
Webhook endpoint view for Stripe.

The view:
1. Verifies the webhook signature over the raw body
2. Reconciles the event into the account store
3. Acknowledges with {"received": true}

Processing is synchronous; a store failure answers 500 so Stripe
redelivers, and redelivery is harmless because every transition is
idempotent.

Usage:
    # In urls.py
    from billing.webhooks.views import stripe_webhook

    urlpatterns = [
        path("webhooks/stripe/", stripe_webhook, name="stripe_webhook"),
    ]
"""

from __future__ import annotations

import logging

from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_POST

from billing.exceptions import AccountStoreError, WebhookVerificationError
from billing.providers import get_account_store, get_webhook_secret
from billing.webhooks.handlers import reconcile
from billing.webhooks.verifier import verify

logger = logging.getLogger(__name__)


@csrf_exempt
@require_POST
def stripe_webhook(request: HttpRequest) -> JsonResponse:
    """
    Receive and reconcile Stripe webhook events.

    Security:
    - Signature verification prevents spoofed webhooks
    - CSRF exemption required for external webhooks
    - Only POST requests accepted

    Returns:
        JsonResponse with status:
        - 200: Event accepted, whether or not it changed an account
        - 400: Missing credentials, invalid signature or invalid event
        - 500: Account store failure (Stripe will retry)

    Example Stripe-Signature header:
        t=1614556800,v1=xxx,v0=yyy
    """
    try:
        event = verify(
            request.body,
            request.headers.get("Stripe-Signature"),
            get_webhook_secret(),
        )
    except WebhookVerificationError as e:
        logger.warning(
            "Webhook verification failed",
            extra={"error_code": e.error_code, "error": e.message},
        )
        return JsonResponse(e.to_dict(), status=e.http_status)

    logger.info(
        f"Received Stripe webhook: {event.type}",
        extra={"stripe_event_id": event.id, "event_type": event.type},
    )

    try:
        result = reconcile(event, get_account_store())
    except AccountStoreError as e:
        logger.error(
            "Webhook reconciliation failed",
            extra={"stripe_event_id": event.id, "event_type": event.type},
            exc_info=True,
        )
        return JsonResponse(e.to_dict(), status=e.http_status)

    logger.info(
        f"Webhook {result.data.value}",
        extra={"stripe_event_id": event.id, "outcome": result.data.value},
    )
    return JsonResponse({"received": True})
