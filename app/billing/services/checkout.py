"""
Checkout service for starting Pro subscriptions.

This module provides the CheckoutService class which turns an upgrade
request into a provider-hosted checkout URL. The plan itself is never
changed here; it changes only when the matching webhook arrives.

Usage:
    from billing.providers import get_checkout_service

    service = get_checkout_service()
    url = service.start_checkout(
        user_id=str(user.pk),
        user_email=user.email,
        price_id="price_123",
        success_url="https://app.example.com/dashboard/billing?success=true",
        cancel_url="https://app.example.com/dashboard/billing?cancelled=true",
    )
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.services import BaseService

from billing.adapters import CreateCheckoutSessionParams
from billing.exceptions import AuthenticationError, ValidationError
from billing.services.customers import CustomerResolver

if TYPE_CHECKING:
    from billing.adapters import StripeAdapter
    from billing.models import BillingAccount


class CheckoutService(BaseService):
    """
    Starts Stripe Checkout and Billing Portal sessions.

    Holds its adapter and resolver as collaborators; nothing is persisted
    locally by either operation.
    """

    def __init__(
        self,
        adapter: StripeAdapter,
        resolver: CustomerResolver | None = None,
    ) -> None:
        self.adapter = adapter
        self.resolver = resolver or CustomerResolver(adapter)

    def start_checkout(
        self,
        user_id: str,
        user_email: str,
        price_id: str,
        success_url: str,
        cancel_url: str,
    ) -> str:
        """
        Create a subscription checkout session and return its redirect URL.

        The user id is written to both the session and the subscription
        metadata, which is how later webhooks find their way back to the
        account.

        Args:
            user_id: Opaque id of the authenticated user
            user_email: Email used to find or create the Stripe customer
            price_id: Stripe Price id of the plan
            success_url: Redirect after a completed purchase
            cancel_url: Redirect after an abandoned purchase

        Returns:
            Hosted checkout URL, verbatim from Stripe

        Raises:
            AuthenticationError: No user id
            ValidationError: Empty price id
            UpstreamError: Stripe failed
        """
        if not user_id:
            raise AuthenticationError("Authentication required")
        if not price_id or not price_id.strip():
            raise ValidationError(
                "Price ID is required",
                details={"field": "priceId"},
            )

        customer_id = self.resolver.resolve(user_id, user_email)

        result = self.adapter.create_checkout_session(
            CreateCheckoutSessionParams(
                customer_id=customer_id,
                price_id=price_id,
                success_url=success_url,
                cancel_url=cancel_url,
                metadata={"userId": user_id},
                subscription_metadata={"userId": user_id},
            )
        )

        self.get_logger().info(
            "Checkout session created",
            extra={
                "user_id": user_id,
                "customer_id": customer_id,
                "checkout_session_id": result.id,
                "price_id": price_id,
            },
        )
        return result.url

    def start_billing_portal(self, account: BillingAccount, return_url: str) -> str:
        """
        Open a Billing Portal session for an account that already pays.

        Raises:
            ValidationError: The account has no Stripe customer yet
            UpstreamError: Stripe failed
        """
        if not account.payment_customer_id:
            raise ValidationError(
                "No billing account exists for this user",
                error_code="NO_PAYMENT_CUSTOMER",
            )

        url = self.adapter.create_billing_portal_session(
            customer_id=account.payment_customer_id,
            return_url=return_url,
        )
        self.get_logger().info(
            "Billing portal session created",
            extra={
                "user_id": account.user_id,
                "customer_id": account.payment_customer_id,
            },
        )
        return url
