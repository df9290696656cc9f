"""
Pytest fixtures for Stripe adapter tests.

This module provides a mocked StripeClient, canned Stripe responses and
Stripe error instances.

Sections:
    - Mock Stripe Response Fixtures
    - Mock Stripe Client Fixtures
    - Mock Stripe Error Fixtures
"""

from dataclasses import dataclass
from typing import Any
from unittest.mock import MagicMock

import pytest
import stripe

from billing.adapters import StripeAdapter


# =============================================================================
# Mock Stripe Response Fixtures
# =============================================================================


@dataclass
class MockStripeObject:
    """Mock Stripe API object with attribute access."""

    data: dict[str, Any]

    def __getattr__(self, name: str) -> Any:
        if name == "data":
            return self.__dict__["data"]
        return self.data.get(name)

    def to_dict(self) -> dict[str, Any]:
        return self.data


@dataclass
class MockStripeList:
    """Mock Stripe list response with data attribute."""

    items: list[MockStripeObject]
    has_more: bool = False

    @property
    def data(self) -> list[MockStripeObject]:
        return self.items


@pytest.fixture
def mock_customer():
    """Create a mock Customer response."""

    def _create(
        id: str = "cus_test123",
        email: str = "user@example.com",
        metadata: dict | None = None,
    ) -> MockStripeObject:
        return MockStripeObject(
            {
                "id": id,
                "object": "customer",
                "email": email,
                "metadata": metadata or {},
            }
        )

    return _create


@pytest.fixture
def mock_checkout_session():
    """Create a mock Checkout Session response."""

    def _create(
        id: str = "cs_test123",
        url: str = "https://checkout.stripe.com/c/pay/cs_test123",
        customer: str = "cus_test123",
    ) -> MockStripeObject:
        return MockStripeObject(
            {
                "id": id,
                "object": "checkout.session",
                "url": url,
                "customer": customer,
                "mode": "subscription",
            }
        )

    return _create


# =============================================================================
# Mock Stripe Client Fixtures
# =============================================================================


@pytest.fixture
def stripe_client(mock_customer, mock_checkout_session):
    """MagicMock standing in for stripe.StripeClient with default responses."""
    client = MagicMock()
    client.v1.customers.list.return_value = MockStripeList(items=[])
    client.v1.customers.create.return_value = mock_customer(id="cus_new123")
    client.v1.checkout.sessions.create.return_value = mock_checkout_session()
    client.v1.billing_portal.sessions.create.return_value = MockStripeObject(
        {
            "id": "bps_test123",
            "object": "billing_portal.session",
            "url": "https://billing.stripe.com/p/session/test_123",
        }
    )
    return client


@pytest.fixture
def adapter(stripe_client):
    """StripeAdapter wired to the mocked client."""
    return StripeAdapter(api_key="sk_test_123", client=stripe_client)


# =============================================================================
# Mock Stripe Error Fixtures
# =============================================================================


@pytest.fixture
def invalid_request_error():
    """Create a Stripe InvalidRequestError."""

    def _create(
        message: str = "No such price: 'price_missing'",
        param: str | None = "line_items[0][price]",
        code: str = "resource_missing",
    ) -> stripe.InvalidRequestError:
        return stripe.InvalidRequestError(
            message=message,
            param=param,
            code=code,
        )

    return _create


@pytest.fixture
def rate_limit_error():
    """Create a Stripe RateLimitError."""
    return stripe.RateLimitError(
        message="Too many requests hit the API too quickly.",
    )


@pytest.fixture
def api_connection_error():
    """Create a Stripe APIConnectionError."""
    return stripe.APIConnectionError(
        message="Could not connect to Stripe.",
    )


@pytest.fixture
def api_error():
    """Create a Stripe APIError."""
    return stripe.APIError(
        message="Something went wrong on Stripe's end.",
    )


@pytest.fixture
def authentication_error():
    """Create a Stripe AuthenticationError."""
    return stripe.AuthenticationError(
        message="Invalid API Key provided.",
    )
