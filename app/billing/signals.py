"""
Django signals for billing.

Every new user gets a Free BillingAccount with no Stripe references, so
display consumers always find one.

Related files:
    - models.py: BillingAccount
    - apps.py: Signal import in ready()
"""

import logging

from django.conf import settings
from django.db.models.signals import post_save
from django.dispatch import receiver

logger = logging.getLogger(__name__)


@receiver(post_save, sender=settings.AUTH_USER_MODEL)
def create_billing_account(sender, instance, created, **kwargs):
    """
    Create a Free BillingAccount for newly created users.

    Uses get_or_create so an account written earlier by a webhook for the
    same user id is left as it is.
    """
    if created:
        from billing.models import BillingAccount, Plan

        BillingAccount.objects.get_or_create(
            user_id=str(instance.pk),
            defaults={"plan": Plan.FREE},
        )
        logger.debug(f"BillingAccount created for user: {instance.pk}")
