"""
Billing app for Stripe subscriptions.

This app handles:
- Stripe customer resolution
- Checkout and billing portal sessions
- Webhook verification and reconciliation into BillingAccount

Related apps:
    - authentication: User whose primary key is the billing user id

Usage:
    from billing.providers import get_checkout_service

    url = get_checkout_service().start_checkout(
        user_id, email, price_id, success_url, cancel_url
    )
"""
