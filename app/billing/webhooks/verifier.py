"""
Webhook signature verification.

Nothing reaches the reconciler unless it went through ``verify``. The
signature is checked over the exact bytes received; the body is parsed
only after the signature matches.

Usage:
    from billing.webhooks.verifier import verify

    event = verify(request.body, request.headers.get("Stripe-Signature"), secret)
"""

from __future__ import annotations

import json
import logging

import stripe

from billing.adapters import StripeAdapter
from billing.exceptions import (
    InvalidEventError,
    InvalidSignatureError,
    MissingCredentialsError,
)
from billing.webhooks.events import BillingEvent

logger = logging.getLogger(__name__)

DEFAULT_TOLERANCE_SECONDS = stripe.Webhook.DEFAULT_TOLERANCE


def verify(
    raw_body: bytes | str,
    signature_header: str | None,
    shared_secret: str | None,
    tolerance: int = DEFAULT_TOLERANCE_SECONDS,
) -> BillingEvent:
    """
    Authenticate a webhook delivery and decode it into a BillingEvent.

    Args:
        raw_body: Request body exactly as received
        signature_header: Value of the Stripe-Signature header
        shared_secret: Endpoint signing secret (whsec_xxx)
        tolerance: Maximum age of the signed timestamp, in seconds

    Raises:
        MissingCredentialsError: Header or secret absent
        InvalidSignatureError: Signature does not match, is malformed or stale
        InvalidEventError: Authentic body is not a Stripe event object
    """
    if not signature_header:
        raise MissingCredentialsError("Missing Stripe-Signature header")
    if not shared_secret:
        raise MissingCredentialsError(
            "Webhook secret is not configured",
            details={"setting": "STRIPE_WEBHOOK_SECRET"},
        )

    if isinstance(raw_body, bytes):
        try:
            payload = raw_body.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidSignatureError("Webhook body is not valid UTF-8") from e
    else:
        payload = raw_body

    StripeAdapter.verify_signature_header(
        payload, signature_header, shared_secret, tolerance
    )

    try:
        data = json.loads(payload)
    except json.JSONDecodeError as e:
        raise InvalidEventError("Webhook body is not valid JSON") from e

    event = BillingEvent.from_payload(data)
    logger.debug(
        "Webhook signature verified",
        extra={"stripe_event_id": event.id, "event_type": event.type},
    )
    return event


class WebhookVerifier:
    """Binds ``verify`` to one endpoint secret."""

    def __init__(
        self,
        shared_secret: str | None,
        tolerance: int = DEFAULT_TOLERANCE_SECONDS,
    ) -> None:
        self.shared_secret = shared_secret
        self.tolerance = tolerance

    def verify(self, raw_body: bytes | str, signature_header: str | None) -> BillingEvent:
        return verify(raw_body, signature_header, self.shared_secret, self.tolerance)
