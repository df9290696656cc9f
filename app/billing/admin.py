"""
Billing admin configuration.

BillingAccount is written only by webhook reconciliation, so the admin is
read-only.
"""

from django.contrib import admin

from billing.models import BillingAccount


@admin.register(BillingAccount)
class BillingAccountAdmin(admin.ModelAdmin):
    """Read-only visibility into plan and Stripe references."""

    list_display = [
        "user_id",
        "plan",
        "payment_customer_id",
        "payment_subscription_id",
        "updated_at",
    ]
    list_filter = ["plan"]
    search_fields = ["user_id", "payment_customer_id", "payment_subscription_id"]
    readonly_fields = [
        "user_id",
        "plan",
        "payment_customer_id",
        "payment_subscription_id",
        "created_at",
        "updated_at",
    ]
    ordering = ["-updated_at"]

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
