"""
Tests for BillingEvent normalization.

Tests cover:
- Expandable references given as ids or expanded objects
- User id lookup order
- Envelope validation
"""

import pytest

from billing.exceptions import InvalidEventError
from billing.webhooks.events import BillingEvent, reference_id

from .conftest import make_event


class TestReferenceId:
    """Tests for reference_id."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("sub_1", "sub_1"),
            ({"id": "sub_1", "object": "subscription"}, "sub_1"),
            (None, None),
            ("", None),
            ({"object": "subscription"}, None),
            (42, None),
        ],
    )
    def test_collapses_to_string_or_none(self, value, expected):
        assert reference_id(value) == expected


class TestFromPayload:
    """Tests for BillingEvent.from_payload."""

    def test_checkout_session_with_string_references(self):
        """Should take customer and subscription ids as given."""
        event = BillingEvent.from_payload(
            make_event(
                "checkout.session.completed",
                {
                    "object": "checkout.session",
                    "customer": "cus_1",
                    "subscription": "sub_1",
                    "metadata": {"userId": "u1"},
                },
            )
        )

        assert event.user_id == "u1"
        assert event.customer_id == "cus_1"
        assert event.subscription_id == "sub_1"

    def test_checkout_session_with_expanded_references(self):
        """Should collapse expanded customer and subscription objects to ids."""
        event = BillingEvent.from_payload(
            make_event(
                "checkout.session.completed",
                {
                    "object": "checkout.session",
                    "customer": {"id": "cus_1", "object": "customer"},
                    "subscription": {
                        "id": "sub_1",
                        "object": "subscription",
                        "metadata": {"userId": "u1"},
                    },
                    "metadata": {},
                },
            )
        )

        assert event.user_id == "u1"
        assert event.customer_id == "cus_1"
        assert event.subscription_id == "sub_1"

    def test_subscription_metadata_wins_over_session_metadata(self):
        """Should prefer subscription metadata when both carry a user id."""
        event = BillingEvent.from_payload(
            make_event(
                "checkout.session.completed",
                {
                    "object": "checkout.session",
                    "subscription": "sub_1",
                    "subscription_details": {"metadata": {"userId": "from_sub"}},
                    "metadata": {"userId": "from_session"},
                },
            )
        )

        assert event.user_id == "from_sub"

    def test_falls_back_to_session_metadata(self):
        """Should use session metadata when the subscription has none."""
        event = BillingEvent.from_payload(
            make_event(
                "checkout.session.completed",
                {
                    "object": "checkout.session",
                    "subscription": "sub_1",
                    "subscription_details": {"metadata": {}},
                    "metadata": {"userId": "u1"},
                },
            )
        )

        assert event.user_id == "u1"

    def test_subscription_object(self):
        """Should read id, status and metadata from a subscription object."""
        event = BillingEvent.from_payload(
            make_event(
                "customer.subscription.updated",
                {
                    "id": "sub_1",
                    "object": "subscription",
                    "status": "past_due",
                    "customer": "cus_1",
                    "metadata": {"userId": "u1"},
                },
            )
        )

        assert event.subscription_id == "sub_1"
        assert event.status == "past_due"
        assert event.is_active_subscription is False
        assert event.user_id == "u1"

    def test_no_user_id(self):
        """Should leave user_id as None when no metadata carries it."""
        event = BillingEvent.from_payload(
            make_event("customer.subscription.deleted", {"id": "sub_1", "object": "subscription"})
        )

        assert event.user_id is None

    def test_missing_data_object(self):
        """Should accept events without data.object as empty."""
        event = BillingEvent.from_payload({"id": "evt_1", "type": "ping"})

        assert event.object == {}
        assert event.user_id is None

    @pytest.mark.parametrize(
        "payload",
        [
            None,
            [],
            {"type": "checkout.session.completed"},
            {"id": "evt_1"},
            {"id": 1, "type": "checkout.session.completed"},
        ],
    )
    def test_rejects_non_events(self, payload):
        with pytest.raises(InvalidEventError):
            BillingEvent.from_payload(payload)
