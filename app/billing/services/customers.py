"""
Customer resolution for checkout.

Maps an application user to a Stripe Customer: reuse the first customer
registered with the user's email, otherwise create one tagged with the
user id.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.services import BaseService

if TYPE_CHECKING:
    from billing.adapters import StripeAdapter


class CustomerResolver(BaseService):
    """
    Resolve the Stripe Customer id for a user.

    Two concurrent resolutions for the same new email may both create a
    customer. Duplicates are tolerated; later lookups return whichever
    match Stripe lists first.
    """

    def __init__(self, adapter: StripeAdapter) -> None:
        self.adapter = adapter

    def resolve(self, user_id: str, email: str) -> str:
        """
        Return an existing customer id for ``email`` or create a new customer.

        An empty email never matches an existing customer.

        Raises:
            UpstreamError: Stripe lookup or creation failed
        """
        logger = self.get_logger()

        if email:
            customer_id = self.adapter.find_customer_by_email(email)
            if customer_id:
                logger.debug(
                    "Reusing existing Stripe customer",
                    extra={"user_id": user_id, "customer_id": customer_id},
                )
                return customer_id

        customer_id = self.adapter.create_customer(email=email, user_id=user_id)
        logger.info(
            "Created Stripe customer",
            extra={"user_id": user_id, "customer_id": customer_id},
        )
        return customer_id
