"""
Account store gateway.

AccountStore is the only write path to BillingAccount rows. Writes are
single-row upserts by user id that assign absolute values taken from the
caller, never values derived from a previously read row, so two concurrent
webhook handlers for the same user serialize through the row lock without
any coordination here.

Usage:
    from billing.store import AccountStore

    store = AccountStore()
    store.upsert("5f0c...", plan=Plan.PRO, payment_subscription_id="sub_123")
"""

from __future__ import annotations

import logging
from typing import Any

from django.db import DatabaseError

from core.services import BaseService

from billing.exceptions import AccountStoreError
from billing.models import BillingAccount

logger = logging.getLogger(__name__)

# Fields the reconciler is allowed to touch
MUTABLE_FIELDS = frozenset(
    {"plan", "payment_customer_id", "payment_subscription_id"}
)


class AccountStore(BaseService):
    """
    Upsert/read access to BillingAccount rows.

    Raises:
        AccountStoreError: Any database failure, surfaced as a single
            terminal error for the current invocation.
    """

    model = BillingAccount

    def upsert(self, user_id: str, **fields: Any) -> BillingAccount:
        """
        Create or update the account for ``user_id``.

        Only the given fields are written; other columns keep their values
        (or their defaults on creation).

        Args:
            user_id: Opaque user identifier
            **fields: Subset of plan, payment_customer_id, payment_subscription_id

        Returns:
            The stored BillingAccount

        Raises:
            ValueError: A field outside MUTABLE_FIELDS was passed
            AccountStoreError: The database rejected the write
        """
        unknown = set(fields) - MUTABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot upsert BillingAccount fields: {sorted(unknown)}")

        try:
            with self.atomic():
                account, created = self.model.objects.update_or_create(
                    user_id=user_id,
                    defaults=fields,
                )
        except DatabaseError as e:
            logger.error(
                "BillingAccount upsert failed",
                extra={"user_id": user_id, "fields": sorted(fields)},
                exc_info=True,
            )
            raise AccountStoreError(
                "Account store write failed",
                details={"user_id": user_id, "error": type(e).__name__},
            ) from e

        logger.info(
            "BillingAccount upserted",
            extra={
                "user_id": user_id,
                "account_created": created,
                "fields": sorted(fields),
            },
        )
        return account

    def get(self, user_id: str) -> BillingAccount | None:
        """
        Read the account for ``user_id`` (display consumers only).

        Returns:
            The BillingAccount, or None if the user has none
        """
        try:
            return self.model.objects.filter(user_id=user_id).first()
        except DatabaseError as e:
            raise AccountStoreError(
                "Account store read failed",
                details={"user_id": user_id, "error": type(e).__name__},
            ) from e
