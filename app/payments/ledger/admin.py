"""
Django admin configuration for ledger models.

This module configures the admin interface for LedgerAccount and
JournalEntry, enforcing immutability for posted entries while providing
visibility into the chart of accounts and posting history.

Key features:
- JournalEntry and its lines are immutable (no add/edit/delete)
- Accounts can be browsed but are created only by the posting engine
- Useful filters and search capabilities
"""

from django.contrib import admin

from .models import JournalEntry, JournalLine, LedgerAccount


class ReadOnlyAdminMixin:
    """
    Ledger records are created only through the posting engine.

    Corrections are recorded as new entries, never by editing or
    deleting existing ones.
    """

    def has_add_permission(self, request, obj=None) -> bool:
        return False

    def has_change_permission(self, request, obj=None) -> bool:
        return False

    def has_delete_permission(self, request, obj=None) -> bool:
        return False


@admin.register(LedgerAccount)
class LedgerAccountAdmin(ReadOnlyAdminMixin, admin.ModelAdmin):
    """
    Admin configuration for LedgerAccount.

    Shows the chart of accounts with parents and owners.
    """

    list_display = ["code", "name", "type", "parent", "owner_id", "created_at"]
    list_filter = ["type"]
    search_fields = ["code", "name", "owner_id"]
    readonly_fields = ["id", "created_at", "updated_at"]
    ordering = ["code"]


class JournalLineInline(ReadOnlyAdminMixin, admin.TabularInline):
    model = JournalLine
    fields = ["account", "debit", "credit", "memo"]
    readonly_fields = fields
    extra = 0


@admin.register(JournalEntry)
class JournalEntryAdmin(ReadOnlyAdminMixin, admin.ModelAdmin):
    """
    Admin configuration for JournalEntry.

    Journal entries are immutable - they cannot be added, edited or
    deleted through the admin interface.
    """

    list_display = [
        "id",
        "created_at",
        "reference_type",
        "reference_id",
        "order_id",
        "currency",
        "total_display",
    ]
    list_filter = ["reference_type", "currency", "created_at"]
    search_fields = ["id", "reference_id", "order_id", "memo"]
    readonly_fields = [
        "id",
        "reference_type",
        "reference_id",
        "order_id",
        "currency",
        "memo",
        "created_at",
    ]
    inlines = [JournalLineInline]
    date_hierarchy = "created_at"
    ordering = ["-created_at"]

    def total_display(self, obj: JournalEntry) -> str:
        """Display the entry total (sum of debits)."""
        return f"{obj.total_debit} {obj.currency}"

    total_display.short_description = "Total"
