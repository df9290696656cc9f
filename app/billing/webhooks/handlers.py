"""
Webhook event handlers that reconcile Stripe state into BillingAccount.

This module provides a handler registry and the handlers for the three
subscription lifecycle events the app tracks. Every handler writes absolute
values taken from the event through a single AccountStore.upsert, so
replaying an event leaves the account exactly as one delivery would.

Transitions:
    checkout.session.completed     -> Pro, set customer and subscription ids
    customer.subscription.updated  -> Pro if status is active, else ignored
    customer.subscription.deleted  -> Free, clear subscription id

Usage:
    from billing.webhooks.handlers import reconcile, register_handler

    @register_handler("invoice.payment_failed")
    def handle_payment_failed(event: BillingEvent, store: AccountStore) -> ServiceResult:
        ...

    result = reconcile(event, store)
"""

from __future__ import annotations

import enum
import logging
from typing import TYPE_CHECKING, Callable

from core.services import ServiceResult

from billing.models import Plan
from billing.webhooks.events import BillingEvent, EventType

if TYPE_CHECKING:
    from billing.store import AccountStore

    Handler = Callable[[BillingEvent, AccountStore], ServiceResult]


logger = logging.getLogger(__name__)


class ReconcileOutcome(str, enum.Enum):
    """What reconcile() did with an event."""

    APPLIED = "applied"
    SKIPPED = "skipped"  # no user id could be recovered
    IGNORED = "ignored"  # event type or status is not acted on


# =============================================================================
# Handler Registry
# =============================================================================


# Maps event type strings to handler functions
WEBHOOK_HANDLERS: dict[str, Handler] = {}


def register_handler(event_type: str) -> Callable:
    """
    Decorator to register a webhook event handler.

    Args:
        event_type: The Stripe event type (e.g., "checkout.session.completed")
    """

    def decorator(func: Handler) -> Handler:
        WEBHOOK_HANDLERS[event_type] = func
        logger.debug(f"Registered webhook handler for {event_type}")
        return func

    return decorator


def reconcile(event: BillingEvent, store: AccountStore) -> ServiceResult[ReconcileOutcome]:
    """
    Dispatch a verified event to its handler.

    Unknown event types succeed as IGNORED so Stripe does not redeliver them.

    Returns:
        ServiceResult whose data is the ReconcileOutcome

    Raises:
        AccountStoreError: The account write failed
    """
    handler = WEBHOOK_HANDLERS.get(event.type)

    if not handler:
        logger.info(
            f"No handler registered for event type: {event.type}",
            extra={"stripe_event_id": event.id},
        )
        return ServiceResult.success(ReconcileOutcome.IGNORED)

    logger.info(
        f"Dispatching {event.type} to handler",
        extra={"stripe_event_id": event.id, "user_id": event.user_id},
    )

    return handler(event, store)


def _skip_without_user(event: BillingEvent) -> ServiceResult[ReconcileOutcome]:
    logger.warning(
        f"{event.type}: no userId in metadata, skipping",
        extra={"stripe_event_id": event.id, "customer_id": event.customer_id},
    )
    return ServiceResult.success(ReconcileOutcome.SKIPPED)


# =============================================================================
# Subscription Lifecycle Handlers
# =============================================================================


@register_handler(EventType.CHECKOUT_SESSION_COMPLETED)
def handle_checkout_completed(
    event: BillingEvent, store: AccountStore
) -> ServiceResult[ReconcileOutcome]:
    """
    Upgrade the user to Pro and record both Stripe references.

    This is the only event that sets payment_customer_id. Sessions without a
    subscription (one-off payments) are ignored so the account is never Pro
    without a subscription reference.
    """
    if not event.user_id:
        return _skip_without_user(event)

    if not event.subscription_id:
        logger.warning(
            "checkout.session.completed without subscription, ignoring",
            extra={"stripe_event_id": event.id, "user_id": event.user_id},
        )
        return ServiceResult.success(ReconcileOutcome.IGNORED)

    store.upsert(
        event.user_id,
        plan=Plan.PRO,
        payment_customer_id=event.customer_id,
        payment_subscription_id=event.subscription_id,
    )

    logger.info(
        "Account upgraded to Pro from checkout",
        extra={
            "stripe_event_id": event.id,
            "user_id": event.user_id,
            "subscription_id": event.subscription_id,
        },
    )
    return ServiceResult.success(ReconcileOutcome.APPLIED)


@register_handler(EventType.SUBSCRIPTION_UPDATED)
def handle_subscription_updated(
    event: BillingEvent, store: AccountStore
) -> ServiceResult[ReconcileOutcome]:
    """
    Set Pro when the subscription is active.

    past_due, incomplete, trialing and the like leave the account alone;
    only deletion downgrades.
    """
    if not event.user_id:
        return _skip_without_user(event)

    if not event.is_active_subscription:
        logger.info(
            f"Subscription status {event.status!r} not acted on",
            extra={"stripe_event_id": event.id, "user_id": event.user_id},
        )
        return ServiceResult.success(ReconcileOutcome.IGNORED)

    fields = {"plan": Plan.PRO}
    if event.subscription_id:
        fields["payment_subscription_id"] = event.subscription_id
    store.upsert(event.user_id, **fields)

    logger.info(
        "Account set to Pro from active subscription",
        extra={
            "stripe_event_id": event.id,
            "user_id": event.user_id,
            "subscription_id": event.subscription_id,
        },
    )
    return ServiceResult.success(ReconcileOutcome.APPLIED)


@register_handler(EventType.SUBSCRIPTION_DELETED)
def handle_subscription_deleted(
    event: BillingEvent, store: AccountStore
) -> ServiceResult[ReconcileOutcome]:
    """
    Downgrade to Free and clear the subscription reference.

    payment_customer_id is kept so the user can resubscribe with the same
    customer.
    """
    if not event.user_id:
        return _skip_without_user(event)

    store.upsert(
        event.user_id,
        plan=Plan.FREE,
        payment_subscription_id=None,
    )

    logger.info(
        "Account downgraded to Free",
        extra={
            "stripe_event_id": event.id,
            "user_id": event.user_id,
            "subscription_id": event.subscription_id,
        },
    )
    return ServiceResult.success(ReconcileOutcome.APPLIED)
