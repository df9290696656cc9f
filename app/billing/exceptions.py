"""
Billing-specific exceptions.

Every failure the billing app can surface is one of these. Views render them
with ``to_dict()`` and answer with ``http_status``. None of them is retried
internally.

Exception Hierarchy:
    BillingError (base for billing domain)
    ├── ConfigurationError - Provider integration not set up (503)
    ├── AuthenticationError - Caller not authenticated, checkout only (401)
    ├── WebhookVerificationError - Webhook trust boundary failures (400)
    │   ├── MissingCredentialsError - Signature header or shared secret absent
    │   ├── InvalidSignatureError - Signature does not match the raw body
    │   └── InvalidEventError - Verified body is not an event object
    └── UpstreamError - Provider or store unreachable/rejected (also ExternalServiceError)
        ├── ProviderUnavailableError - Network/5xx/rate limit (transient)
        ├── ProviderRejectedError - Provider refused the request (permanent)
        └── AccountStoreError - Account store write/read failed

    ValidationError - Missing required input (core.exceptions.ValidationError)

Usage:
    from billing.exceptions import ConfigurationError, ValidationError

    if not price_id:
        raise ValidationError("Price ID is required")
"""

from __future__ import annotations

from core.exceptions import (
    BaseApplicationError,
    ExternalServiceError,
    ValidationError,
)

__all__ = [
    "AccountStoreError",
    "AuthenticationError",
    "BillingError",
    "ConfigurationError",
    "InvalidEventError",
    "InvalidSignatureError",
    "MissingCredentialsError",
    "ProviderRejectedError",
    "ProviderUnavailableError",
    "UpstreamError",
    "ValidationError",
    "WebhookVerificationError",
]


class BillingError(BaseApplicationError):
    """Base exception for all billing operations."""

    default_error_code: str = "BILLING_ERROR"


class ConfigurationError(BillingError):
    """
    Raised when the payment provider integration is not configured.

    Raised at construction time by components that need a secret
    (e.g. ``StripeAdapter`` without ``STRIPE_SECRET_KEY``), so a
    misconfigured deployment fails loudly instead of at first use.
    """

    default_error_code: str = "BILLING_NOT_CONFIGURED"
    http_status: int = 503


class AuthenticationError(BillingError):
    """Raised when a checkout is attempted without an authenticated user."""

    default_error_code: str = "AUTHENTICATION_REQUIRED"
    http_status: int = 401


# =============================================================================
# Webhook Trust Boundary
# =============================================================================


class WebhookVerificationError(BillingError):
    """
    Base for webhook deliveries that must be rejected.

    The webhook view answers every subclass with 400 and performs no state
    mutation, so the provider records the delivery as failed.
    """

    default_error_code: str = "WEBHOOK_VERIFICATION_FAILED"
    http_status: int = 400


class MissingCredentialsError(WebhookVerificationError):
    """Raised when the signature header or the shared secret is absent."""

    default_error_code: str = "WEBHOOK_MISSING_CREDENTIALS"


class InvalidSignatureError(WebhookVerificationError):
    """Raised when the signature does not match the raw payload."""

    default_error_code: str = "WEBHOOK_INVALID_SIGNATURE"


class InvalidEventError(WebhookVerificationError):
    """Raised when an authentic payload is not a usable event object."""

    default_error_code: str = "WEBHOOK_INVALID_EVENT"


# =============================================================================
# Upstream Failures
# =============================================================================


class UpstreamError(BillingError, ExternalServiceError):
    """
    Raised when the payment provider or the account store fails.

    Attributes:
        is_retryable: Whether repeating the same call later may succeed.
            Informational only; callers do not retry.
    """

    default_error_code: str = "UPSTREAM_ERROR"
    http_status: int = 502
    is_retryable: bool = False


class ProviderUnavailableError(UpstreamError):
    """Provider unreachable, rate limited or answering with a server error."""

    default_error_code: str = "PROVIDER_UNAVAILABLE"
    is_retryable: bool = True


class ProviderRejectedError(UpstreamError):
    """Provider rejected the request (bad parameters, bad API key, unknown price)."""

    default_error_code: str = "PROVIDER_REJECTED"


class AccountStoreError(UpstreamError):
    """Account store could not complete a read or write."""

    default_error_code: str = "ACCOUNT_STORE_ERROR"
    http_status: int = 500
    is_retryable: bool = True
