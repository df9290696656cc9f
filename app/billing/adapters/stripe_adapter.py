"""
Stripe API adapter for billing operations.

This module provides the StripeAdapter class which encapsulates every Stripe
API interaction the billing app performs. All Stripe calls go through this
adapter to ensure consistent error handling, timeouts and observability.

Features:
- Explicit construction with an API key (no module-level Stripe globals)
- Configurable timeouts and SDK-level network retries
- Automatic error translation to billing exceptions
- Structured logging with timing metrics

Configuration (via settings, read by billing.providers):
- STRIPE_SECRET_KEY: Stripe API secret key
- STRIPE_API_TIMEOUT_SECONDS: API call timeout (default: 10)
- STRIPE_MAX_RETRIES: SDK network retries (default: 0)

Usage:
    from billing.adapters import StripeAdapter, CreateCheckoutSessionParams

    adapter = StripeAdapter(api_key=settings.STRIPE_SECRET_KEY)
    customer_id = adapter.find_customer_by_email("user@example.com")
    result = adapter.create_checkout_session(
        CreateCheckoutSessionParams(
            customer_id=customer_id,
            price_id="price_123",
            success_url="https://app.example.com/dashboard/billing?success=true",
            cancel_url="https://app.example.com/dashboard/billing?cancelled=true",
            subscription_metadata={"userId": "5f0c..."},
        )
    )
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import stripe

from billing.exceptions import (
    ConfigurationError,
    InvalidSignatureError,
    ProviderRejectedError,
    ProviderUnavailableError,
)

if TYPE_CHECKING:
    from collections.abc import Callable


# =============================================================================
# Data Types
# =============================================================================


@dataclass
class CreateCheckoutSessionParams:
    """
    Parameters for creating a Stripe Checkout Session.

    Attributes:
        customer_id: Stripe Customer ID (cus_xxx) the session is bound to
        price_id: Stripe Price ID (price_xxx) of the single line item
        success_url: Redirect target after a completed purchase
        cancel_url: Redirect target after an abandoned purchase
        metadata: Key-value pairs attached to the Checkout Session
        subscription_metadata: Key-value pairs attached to the resulting Subscription
        quantity: Line item quantity (default: 1)
        mode: Checkout mode (default: 'subscription')
        payment_method_types: Allowed payment methods (default: ['card'])
    """

    customer_id: str
    price_id: str
    success_url: str
    cancel_url: str
    metadata: dict[str, str] = field(default_factory=dict)
    subscription_metadata: dict[str, str] = field(default_factory=dict)
    quantity: int = 1
    mode: str = "subscription"
    payment_method_types: list[str] = field(default_factory=lambda: ["card"])

    def __post_init__(self) -> None:
        """Validate parameters after initialization."""
        if not self.customer_id:
            raise ValueError("customer_id is required")
        if not self.price_id:
            raise ValueError("price_id is required")
        if self.quantity <= 0:
            raise ValueError("quantity must be positive")

    def to_stripe_params(self) -> dict[str, Any]:
        params: dict[str, Any] = {
            "customer": self.customer_id,
            "payment_method_types": list(self.payment_method_types),
            "line_items": [{"price": self.price_id, "quantity": self.quantity}],
            "mode": self.mode,
            "success_url": self.success_url,
            "cancel_url": self.cancel_url,
        }
        if self.metadata:
            params["metadata"] = dict(self.metadata)
        if self.subscription_metadata:
            params["subscription_data"] = {"metadata": dict(self.subscription_metadata)}
        return params


@dataclass
class CheckoutSessionResult:
    """
    Result from Stripe Checkout Session creation.

    Attributes:
        id: Checkout Session ID (cs_xxx)
        url: Provider-hosted checkout page the purchaser is redirected to
        customer_id: Customer the session is bound to
        mode: Checkout mode
    """

    id: str
    url: str
    customer_id: str | None = None
    mode: str | None = None


# =============================================================================
# Stripe Adapter
# =============================================================================


class StripeAdapter:
    """
    Adapter for Stripe API operations.

    Holds one ``stripe.StripeClient``. Instances carry no per-request state
    and are safe to share between threads.

    Raises (from every API method):
        ProviderRejectedError: Stripe refused the request (permanent)
        ProviderUnavailableError: Stripe unreachable or failing (transient)
    """

    def __init__(
        self,
        api_key: str | None,
        timeout: int = 10,
        max_network_retries: int = 0,
        client: stripe.StripeClient | None = None,
    ) -> None:
        """
        Args:
            api_key: Stripe secret key (sk_xxx)
            timeout: HTTP timeout in seconds
            max_network_retries: Retries performed by the SDK's HTTP client
            client: Pre-built StripeClient (tests inject a mock here)

        Raises:
            ConfigurationError: api_key is missing
        """
        if not api_key:
            raise ConfigurationError(
                "Stripe is not configured",
                details={"setting": "STRIPE_SECRET_KEY"},
            )

        if client is None:
            client = stripe.StripeClient(
                api_key,
                http_client=stripe.RequestsClient(timeout=timeout),
                max_network_retries=max_network_retries,
            )
        self._client = client

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """Get logger for this adapter."""
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")

    # =========================================================================
    # Customers
    # =========================================================================

    def find_customer_by_email(self, email: str) -> str | None:
        """
        Look up the first Stripe Customer registered with ``email``.

        Returns:
            Customer ID (cus_xxx), or None if no customer matches
        """
        customers = self._execute(
            "list_customers",
            {"email": email},
            lambda: self._client.v1.customers.list(
                params={"email": email, "limit": 1}
            ),
        )
        if not customers.data:
            return None
        return customers.data[0].id

    def create_customer(self, email: str, user_id: str) -> str:
        """
        Create a Stripe Customer tagged with the user id.

        Args:
            email: Customer email (may be empty)
            user_id: Opaque user id, stored as metadata.userId

        Returns:
            Customer ID (cus_xxx)
        """
        params: dict[str, Any] = {"metadata": {"userId": user_id}}
        if email:
            params["email"] = email

        customer = self._execute(
            "create_customer",
            {"user_id": user_id},
            lambda: self._client.v1.customers.create(params=params),
        )
        return customer.id

    # =========================================================================
    # Checkout & Billing Portal
    # =========================================================================

    def create_checkout_session(
        self,
        params: CreateCheckoutSessionParams,
    ) -> CheckoutSessionResult:
        """
        Create a Stripe Checkout Session.

        Returns:
            CheckoutSessionResult with the hosted checkout URL
        """
        session = self._execute(
            "create_checkout_session",
            {
                "customer_id": params.customer_id,
                "price_id": params.price_id,
                "mode": params.mode,
            },
            lambda: self._client.v1.checkout.sessions.create(
                params=params.to_stripe_params()
            ),
        )
        return CheckoutSessionResult(
            id=session.id,
            url=session.url,
            customer_id=params.customer_id,
            mode=params.mode,
        )

    def create_billing_portal_session(self, customer_id: str, return_url: str) -> str:
        """
        Create a Stripe Billing Portal session for an existing customer.

        Returns:
            Portal URL (https://billing.stripe.com/...)
        """
        session = self._execute(
            "create_billing_portal_session",
            {"customer_id": customer_id},
            lambda: self._client.v1.billing_portal.sessions.create(
                params={"customer": customer_id, "return_url": return_url}
            ),
        )
        return session.url

    # =========================================================================
    # Webhook Verification
    # =========================================================================

    @staticmethod
    def verify_signature_header(
        payload: str,
        signature: str,
        secret: str,
        tolerance: int = stripe.Webhook.DEFAULT_TOLERANCE,
    ) -> None:
        """
        Check a Stripe-Signature header against the exact payload text.

        Does not need an API key, so it is usable without an adapter
        instance.

        Raises:
            InvalidSignatureError: Header malformed, stale or not matching
        """
        try:
            stripe.WebhookSignature.verify_header(payload, signature, secret, tolerance)
        except stripe.SignatureVerificationError as e:
            raise InvalidSignatureError(
                "Invalid webhook signature",
                details={"error": str(e)},
            ) from e

    # =========================================================================
    # Call Wrapper & Error Handling
    # =========================================================================

    def _execute(
        self,
        operation: str,
        log_context: dict[str, Any],
        call: Callable[[], Any],
    ) -> Any:
        """Run one Stripe call with timing logs and error translation."""
        logger = self.get_logger()
        log_context = {"operation": operation, **log_context}

        start_time = time.time()
        logger.info("Starting Stripe operation", extra=log_context)

        try:
            result = call()
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            self._handle_stripe_error(e, log_context, duration_ms)
            raise  # Never reached, but satisfies type checker

        duration_ms = (time.time() - start_time) * 1000
        logger.info(
            "Stripe operation completed",
            extra={**log_context, "duration_ms": duration_ms},
        )
        return result

    def _handle_stripe_error(
        self,
        error: Exception,
        log_context: dict[str, Any],
        duration_ms: float,
    ) -> None:
        """
        Translate Stripe exceptions to billing exceptions.

        Raises:
            ProviderRejectedError: Invalid request, authentication or permission error
            ProviderUnavailableError: Rate limit, connection or server error
        """
        logger = self.get_logger()
        log_context = {**log_context, "duration_ms": duration_ms}

        if isinstance(error, stripe.InvalidRequestError):
            logger.error(
                "Invalid request to Stripe",
                extra={**log_context, "stripe_code": error.code},
            )
            raise ProviderRejectedError(
                str(error.user_message or error),
                details={"stripe_code": error.code, "param": error.param},
            ) from error

        elif isinstance(error, (stripe.AuthenticationError, stripe.PermissionError)):
            # Wrong or restricted API key - operational issue
            logger.critical(
                "Stripe authentication failed - check API key",
                extra=log_context,
            )
            raise ProviderRejectedError(
                "Stripe authentication failed",
                details={"stripe_code": "authentication_error"},
            ) from error

        elif isinstance(error, stripe.RateLimitError):
            logger.warning("Rate limited by Stripe", extra=log_context)
            raise ProviderUnavailableError(
                "Stripe rate limit exceeded. Please retry.",
                details={"stripe_code": "rate_limit"},
            ) from error

        elif isinstance(error, stripe.APIConnectionError):
            logger.error(
                "Connection error to Stripe",
                extra=log_context,
                exc_info=True,
            )
            raise ProviderUnavailableError(
                "Could not connect to Stripe. Please retry.",
                details={"stripe_code": "api_connection_error"},
            ) from error

        elif isinstance(error, stripe.StripeError):
            logger.error(
                "Stripe API error",
                extra=log_context,
                exc_info=True,
            )
            raise ProviderUnavailableError(
                "Stripe service error. Please retry.",
                details={"stripe_code": getattr(error, "code", None) or "api_error"},
            ) from error

        else:
            logger.error(
                f"Unexpected error from Stripe: {type(error).__name__}",
                extra=log_context,
                exc_info=True,
            )
            raise ProviderUnavailableError(
                f"Unexpected Stripe error: {error}",
                details={"stripe_code": "unknown_error"},
            ) from error
