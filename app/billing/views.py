"""
DRF views for the billing app.

Endpoints:
    POST /api/v1/billing/checkout/ - Create checkout session
    POST /api/v1/billing/portal/ - Create billing portal session
    GET /api/v1/billing/account/ - Current user's billing account
    POST /api/v1/billing/webhooks/stripe/ - Stripe webhook (billing.webhooks.views)

Security:
    - All endpoints require authentication except the webhook
    - The webhook verifies the Stripe signature instead
"""

from __future__ import annotations

import logging

from django.conf import settings
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from core.exceptions import BaseApplicationError, NotFoundError

from billing.exceptions import ValidationError
from billing.providers import get_account_store, get_checkout_service
from billing.serializers import (
    BillingAccountSerializer,
    CreateBillingPortalSerializer,
    CreateCheckoutSessionSerializer,
    RedirectUrlSerializer,
)

logger = logging.getLogger(__name__)

BILLING_PAGE_PATH = "/dashboard/billing"


def _frontend_origin(request) -> str:
    """Origin of the calling frontend, falling back to BILLING_FRONTEND_URL."""
    origin = request.headers.get("Origin") or settings.BILLING_FRONTEND_URL
    return origin.rstrip("/")


def _error_response(error: BaseApplicationError) -> Response:
    return Response(error.to_dict(), status=error.http_status)


class CheckoutSessionView(APIView):
    """
    Start a Pro subscription checkout.

    POST /api/v1/billing/checkout/

    Request:
        {"priceId": "price_xxx"}

    Returns:
        200 {"url": "https://checkout.stripe.com/..."}
        400 missing price, 401 unauthenticated,
        502 Stripe failure, 503 Stripe not configured
    """

    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = CreateCheckoutSessionSerializer(data=request.data)
        if not serializer.is_valid():
            return _error_response(
                ValidationError("Price ID is required", details=serializer.errors)
            )

        origin = _frontend_origin(request)
        try:
            url = get_checkout_service().start_checkout(
                user_id=str(request.user.pk),
                user_email=request.user.email or "",
                price_id=serializer.validated_data["priceId"],
                success_url=f"{origin}{BILLING_PAGE_PATH}?success=true",
                cancel_url=f"{origin}{BILLING_PAGE_PATH}?cancelled=true",
            )
        except BaseApplicationError as e:
            logger.warning(
                "Checkout failed",
                extra={"user_id": str(request.user.pk), "error_code": e.error_code},
            )
            return _error_response(e)

        return Response(RedirectUrlSerializer({"url": url}).data)


class BillingPortalView(APIView):
    """
    Open the Stripe Billing Portal for the current user.

    POST /api/v1/billing/portal/

    Request:
        {"returnUrl": "https://app.example.com/dashboard/billing"}  (optional)

    Returns:
        200 {"url": "https://billing.stripe.com/..."}
        400 no Stripe customer yet, 404 no billing account
    """

    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = CreateBillingPortalSerializer(data=request.data)
        if not serializer.is_valid():
            return _error_response(
                ValidationError("Invalid return URL", details=serializer.errors)
            )

        return_url = serializer.validated_data.get(
            "returnUrl", f"{_frontend_origin(request)}{BILLING_PAGE_PATH}"
        )
        user_id = str(request.user.pk)

        try:
            account = get_account_store().get(user_id)
            if account is None:
                raise NotFoundError("Billing account not found")
            url = get_checkout_service().start_billing_portal(account, return_url)
        except BaseApplicationError as e:
            return _error_response(e)

        return Response(RedirectUrlSerializer({"url": url}).data)


class BillingAccountView(APIView):
    """
    Current user's plan and Stripe references.

    GET /api/v1/billing/account/
    """

    permission_classes = [IsAuthenticated]

    def get(self, request):
        try:
            account = get_account_store().get(str(request.user.pk))
        except BaseApplicationError as e:
            return _error_response(e)

        if account is None:
            return _error_response(NotFoundError("Billing account not found"))

        return Response(BillingAccountSerializer(account).data)
