"""
Django admin configuration for marketplace records.

Payment transactions are shown read-only: their status is driven by the
payment provider and their ledger link by the posting engine.
"""

from django.contrib import admin

from .models import Order, PaymentTransaction


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ["id", "farmer", "buyer", "total_price", "status", "created_at"]
    list_filter = ["status"]
    search_fields = ["id", "farmer__username", "buyer__username"]
    readonly_fields = ["id", "created_at", "updated_at"]
    raw_id_fields = ["farmer", "buyer"]


@admin.register(PaymentTransaction)
class PaymentTransactionAdmin(admin.ModelAdmin):
    """
    Admin configuration for PaymentTransaction.

    Read-only; ledger_entry_id shows whether the payment has been posted.
    """

    list_display = [
        "id",
        "order",
        "amount",
        "currency",
        "status",
        "provider",
        "is_posted",
        "created_at",
    ]
    list_filter = ["status", "provider", "currency"]
    search_fields = ["id", "provider_reference", "ledger_entry_id"]
    ordering = ["-created_at"]

    def has_add_permission(self, request, obj=None) -> bool:
        return False

    def has_change_permission(self, request, obj=None) -> bool:
        return False

    def has_delete_permission(self, request, obj=None) -> bool:
        return False

    @admin.display(boolean=True, description="Posted")
    def is_posted(self, obj: PaymentTransaction) -> bool:
        return obj.is_posted
