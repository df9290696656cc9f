"""
Pytest fixtures for webhook tests.

Provides signed Stripe event payloads for the verifier, handler and view
tests. Signatures are real HMAC-SHA256 values in Stripe's header format, so
verification runs through the Stripe SDK unmocked.
"""

import hashlib
import hmac
import json
import time
from typing import Any

import pytest

WEBHOOK_SECRET = "whsec_test_secret"


def sign_payload(
    payload: str,
    secret: str = WEBHOOK_SECRET,
    timestamp: int | None = None,
) -> str:
    """Build a Stripe-Signature header for ``payload``."""
    timestamp = int(time.time()) if timestamp is None else timestamp
    signed = f"{timestamp}.{payload}".encode("utf-8")
    signature = hmac.new(secret.encode("utf-8"), signed, hashlib.sha256).hexdigest()
    return f"t={timestamp},v1={signature}"


def make_event(
    event_type: str,
    obj: dict[str, Any],
    event_id: str = "evt_test123",
) -> dict[str, Any]:
    """Wrap a data.object in a Stripe event envelope."""
    return {
        "id": event_id,
        "object": "event",
        "type": event_type,
        "api_version": "2025-03-31.basil",
        "created": 1700000000,
        "livemode": False,
        "data": {"object": obj},
    }


# =============================================================================
# Event Payload Fixtures
# =============================================================================


@pytest.fixture
def webhook_secret():
    return WEBHOOK_SECRET


@pytest.fixture
def checkout_completed_payload():
    """checkout.session.completed for user u1 (cus_1 / sub_1)."""

    def _create(
        user_id: str | None = "u1",
        customer: Any = "cus_1",
        subscription: Any = "sub_1",
        event_id: str = "evt_checkout_1",
    ) -> dict[str, Any]:
        metadata = {"userId": user_id} if user_id else {}
        return make_event(
            "checkout.session.completed",
            {
                "id": "cs_test_1",
                "object": "checkout.session",
                "mode": "subscription",
                "status": "complete",
                "customer": customer,
                "subscription": subscription,
                "metadata": metadata,
            },
            event_id=event_id,
        )

    return _create


@pytest.fixture
def subscription_payload():
    """customer.subscription.updated / .deleted for user u1."""

    def _create(
        event_type: str = "customer.subscription.updated",
        status: str = "active",
        user_id: str | None = "u1",
        subscription_id: str = "sub_1",
        customer: str = "cus_1",
        event_id: str = "evt_subscription_1",
    ) -> dict[str, Any]:
        metadata = {"userId": user_id} if user_id else {}
        return make_event(
            event_type,
            {
                "id": subscription_id,
                "object": "subscription",
                "status": status,
                "customer": customer,
                "metadata": metadata,
            },
            event_id=event_id,
        )

    return _create


@pytest.fixture
def signed_request_body():
    """Serialize a payload and sign it: returns (body, header)."""

    def _create(payload: dict[str, Any], secret: str = WEBHOOK_SECRET) -> tuple[str, str]:
        body = json.dumps(payload)
        return body, sign_payload(body, secret)

    return _create
