"""
Billing models.

BillingAccount is the durable per-user record of plan and payment linkage.
It is written only by the webhook reconciler (through billing.store) and by
the registration signal that creates it; everything else reads it.

Invariant:
    plan == Pro implies payment_subscription_id was set by a
    checkout.session.completed or customer.subscription.updated event.

Usage:
    from billing.models import BillingAccount, Plan

    account = BillingAccount.objects.get(user_id=str(user.pk))
    if account.is_pro:
        ...
"""

from __future__ import annotations

from django.db import models

from core.models import BaseModel


class Plan(models.TextChoices):
    """Feature tier, derived solely from billing events."""

    FREE = "Free", "Free"
    PRO = "Pro", "Pro"


class BillingAccount(BaseModel):
    """
    Plan and payment references for one user.

    Keyed by the opaque user id string carried in checkout metadata, so an
    event can be applied without resolving the user row first.

    Fields:
        user_id: Opaque user identifier (the User primary key as a string)
        plan: Current plan (Free/Pro)
        payment_customer_id: Stripe Customer ID (cus_xxx), set on checkout
        payment_subscription_id: Stripe Subscription ID (sub_xxx), cleared on deletion
    """

    user_id = models.CharField(
        max_length=255,
        primary_key=True,
        help_text="Opaque user identifier",
    )

    plan = models.CharField(
        max_length=16,
        choices=Plan.choices,
        default=Plan.FREE,
        db_index=True,
        help_text="Current plan",
    )

    payment_customer_id = models.CharField(
        max_length=255,
        null=True,
        blank=True,
        db_index=True,
        help_text="Stripe Customer ID (cus_xxx)",
    )

    payment_subscription_id = models.CharField(
        max_length=255,
        null=True,
        blank=True,
        help_text="Stripe Subscription ID (sub_xxx)",
    )

    class Meta:
        ordering = ["-created_at"]
        verbose_name = "Billing Account"
        verbose_name_plural = "Billing Accounts"

    def __str__(self) -> str:
        return f"BillingAccount({self.user_id}, {self.plan})"

    @property
    def is_pro(self) -> bool:
        return self.plan == Plan.PRO

    @property
    def has_subscription(self) -> bool:
        return bool(self.payment_subscription_id)
