"""
Pytest fixtures for billing app tests.

Provides users, API clients and a mocked StripeAdapter for service and view
tests.
"""

from unittest.mock import MagicMock

import pytest
from rest_framework.test import APIClient

from authentication.tests.factories import UserFactory
from billing.adapters import CheckoutSessionResult, StripeAdapter

CHECKOUT_URL = "https://checkout.stripe.com/c/pay/cs_test_abc123"
PORTAL_URL = "https://billing.stripe.com/p/session/test_abc123"


# =============================================================================
# User Fixtures
# =============================================================================


@pytest.fixture
def user(db):
    """Create a user; the registration signal gives it a Free account."""
    return UserFactory(email="buyer@example.com")


@pytest.fixture
def api_client():
    """Unauthenticated DRF API client."""
    return APIClient()


@pytest.fixture
def authenticated_client(user):
    """API client authenticated as ``user``."""
    client = APIClient()
    client.force_authenticate(user=user)
    return client


# =============================================================================
# Stripe Adapter Fixtures
# =============================================================================


@pytest.fixture
def mock_adapter():
    """StripeAdapter mock with successful default responses."""
    adapter = MagicMock(spec=StripeAdapter)
    adapter.find_customer_by_email.return_value = None
    adapter.create_customer.return_value = "cus_new123"
    adapter.create_checkout_session.return_value = CheckoutSessionResult(
        id="cs_test_abc123",
        url=CHECKOUT_URL,
        customer_id="cus_new123",
        mode="subscription",
    )
    adapter.create_billing_portal_session.return_value = PORTAL_URL
    return adapter
