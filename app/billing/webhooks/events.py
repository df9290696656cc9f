"""
Normalized view of a verified Stripe event.

Stripe represents expandable references either as an id string or as the
expanded object. BillingEvent.from_payload collapses every reference the
reconciler needs to a plain string (or None) once, before dispatch, so
handlers never inspect raw payload shapes.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from billing.exceptions import InvalidEventError


class EventType:
    """Stripe event types the reconciler acts on."""

    CHECKOUT_SESSION_COMPLETED = "checkout.session.completed"
    SUBSCRIPTION_UPDATED = "customer.subscription.updated"
    SUBSCRIPTION_DELETED = "customer.subscription.deleted"


class SubscriptionStatus:
    ACTIVE = "active"


USER_ID_METADATA_KEY = "userId"


def reference_id(value: Any) -> str | None:
    """
    Collapse an expandable Stripe reference to its id.

    ``"sub_123"`` and ``{"id": "sub_123", ...}`` both give ``"sub_123"``;
    anything else (None, empty string, object without id) gives None.
    """
    if isinstance(value, Mapping):
        value = value.get("id")
    if isinstance(value, str) and value:
        return value
    return None


def _metadata_user_id(source: Any) -> str | None:
    if not isinstance(source, Mapping):
        return None
    metadata = source.get("metadata")
    if not isinstance(metadata, Mapping):
        return None
    user_id = metadata.get(USER_ID_METADATA_KEY)
    if isinstance(user_id, str) and user_id:
        return user_id
    return None


def _resolve_user_id(obj: Mapping[str, Any]) -> str | None:
    """
    Find the user id, preferring subscription metadata over session metadata.

    Subscription objects carry their own metadata; checkout sessions expose
    the subscription's metadata through ``subscription_details`` or an
    expanded ``subscription`` object.
    """
    if obj.get("object") == "subscription":
        return _metadata_user_id(obj)

    return (
        _metadata_user_id(obj.get("subscription_details"))
        or _metadata_user_id(obj.get("subscription"))
        or _metadata_user_id(obj)
    )


@dataclass(frozen=True)
class BillingEvent:
    """
    A verified Stripe event with its references normalized.

    Attributes:
        id: Stripe event id (evt_xxx)
        type: Stripe event type (e.g. "customer.subscription.deleted")
        object: Raw ``data.object`` of the event
        user_id: Application user id recovered from metadata, if any
        customer_id: Stripe Customer id, if the object references one
        subscription_id: Stripe Subscription id, if the object is or references one
        status: The object's ``status`` field, if present
    """

    id: str
    type: str
    object: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)
    user_id: str | None = None
    customer_id: str | None = None
    subscription_id: str | None = None
    status: str | None = None

    @classmethod
    def from_payload(cls, payload: Any) -> BillingEvent:
        """
        Build a BillingEvent from a decoded Stripe event body.

        Raises:
            InvalidEventError: Payload is not an object with string id and type
        """
        if not isinstance(payload, Mapping):
            raise InvalidEventError("Webhook payload is not a JSON object")

        event_id = payload.get("id")
        event_type = payload.get("type")
        if not isinstance(event_id, str) or not isinstance(event_type, str):
            raise InvalidEventError(
                "Webhook payload is missing event id or type",
                details={"id": event_id, "type": event_type},
            )

        data = payload.get("data")
        obj = data.get("object") if isinstance(data, Mapping) else None
        if not isinstance(obj, Mapping):
            obj = {}

        if obj.get("object") == "subscription":
            subscription_id = reference_id(obj.get("id"))
        else:
            subscription_id = reference_id(obj.get("subscription"))

        status = obj.get("status")

        return cls(
            id=event_id,
            type=event_type,
            object=dict(obj),
            user_id=_resolve_user_id(obj),
            customer_id=reference_id(obj.get("customer")),
            subscription_id=subscription_id,
            status=status if isinstance(status, str) else None,
        )

    @property
    def is_active_subscription(self) -> bool:
        return self.status == SubscriptionStatus.ACTIVE
