"""
Factory Boy factories for billing models.

Usage:
    from billing.tests.factories import BillingAccountFactory

    # Free account without Stripe references
    account = BillingAccountFactory()

    # Paying account
    account = BillingAccountFactory(pro=True)
"""

import factory

from billing.models import BillingAccount, Plan


class BillingAccountFactory(factory.django.DjangoModelFactory):
    """
    Factory for BillingAccount instances.

    The ``pro`` trait fills in plan and both Stripe references.
    """

    class Meta:
        model = BillingAccount
        django_get_or_create = ("user_id",)

    user_id = factory.Sequence(lambda n: f"user-{n}")
    plan = Plan.FREE
    payment_customer_id = None
    payment_subscription_id = None

    class Params:
        pro = factory.Trait(
            plan=Plan.PRO,
            payment_customer_id=factory.Sequence(lambda n: f"cus_test{n}"),
            payment_subscription_id=factory.Sequence(lambda n: f"sub_test{n}"),
        )
