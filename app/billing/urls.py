"""
URL configuration for the billing app.

Routes:
    - POST /checkout/ - Create checkout session
    - POST /portal/ - Create billing portal session
    - GET /account/ - Current user's billing account
    - POST /webhooks/stripe/ - Stripe webhook endpoint

All routes are prefixed with /api/v1/billing/ when included in the main URLconf.
"""

from django.urls import path

from billing.views import BillingAccountView, BillingPortalView, CheckoutSessionView
from billing.webhooks.views import stripe_webhook

app_name = "billing"

urlpatterns = [
    path("checkout/", CheckoutSessionView.as_view(), name="checkout"),
    path("portal/", BillingPortalView.as_view(), name="portal"),
    path("account/", BillingAccountView.as_view(), name="account"),
    # Webhook endpoints
    path("webhooks/stripe/", stripe_webhook, name="stripe_webhook"),
]
