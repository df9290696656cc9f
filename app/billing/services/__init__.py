"""
Billing services.

This module provides:
- CustomerResolver: Maps a user to a Stripe Customer
- CheckoutService: Starts checkout and billing portal sessions

Usage:
    from billing.services import CheckoutService

    service = CheckoutService(adapter)
    url = service.start_checkout(user_id, email, price_id, success_url, cancel_url)
"""

from billing.services.checkout import CheckoutService
from billing.services.customers import CustomerResolver

__all__ = [
    "CheckoutService",
    "CustomerResolver",
]
