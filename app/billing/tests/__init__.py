"""
Tests for billing app.

This package contains test modules for:
- test_models.py: BillingAccount model tests
- test_store.py: AccountStore upsert/read tests
- test_signals.py: Account creation on registration
- test_services.py: CustomerResolver and CheckoutService tests
- test_views.py: Checkout, portal and account endpoint tests

Adapter and webhook tests live beside their packages.
"""
