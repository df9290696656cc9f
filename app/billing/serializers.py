"""
DRF serializers for the billing app.

This module provides serializers for:
- Checkout and billing portal requests
- Hosted page URL responses
- Billing account display

Field names are camelCase on the wire.
"""

from __future__ import annotations

from rest_framework import serializers


class CreateCheckoutSessionSerializer(serializers.Serializer):
    """
    Checkout session request.

    Fields:
        priceId: Stripe Price ID of the plan to subscribe to
    """

    priceId = serializers.CharField(max_length=255, trim_whitespace=True)


class CreateBillingPortalSerializer(serializers.Serializer):
    """
    Billing portal request.

    Fields:
        returnUrl: Where the portal sends the user back to (optional)
    """

    returnUrl = serializers.URLField(required=False)


class RedirectUrlSerializer(serializers.Serializer):
    """Response carrying a Stripe-hosted page URL."""

    url = serializers.URLField()


class BillingAccountSerializer(serializers.Serializer):
    """
    Read-only view of a BillingAccount.

    Usage:
        serializer = BillingAccountSerializer(account)
    """

    plan = serializers.CharField(read_only=True)
    paymentCustomerId = serializers.CharField(
        source="payment_customer_id", read_only=True, allow_null=True
    )
    paymentSubscriptionId = serializers.CharField(
        source="payment_subscription_id", read_only=True, allow_null=True
    )
    isPro = serializers.BooleanField(source="is_pro", read_only=True)
