"""
Ledger models for double-entry bookkeeping.

This module defines the models of the payment ledger:
- LedgerAccount: Node of the chart of accounts (clearing, payables, revenue)
- JournalEntry: One balanced, immutable record of a business event
- JournalLine: A single debit or credit of an entry against an account

Following double-entry bookkeeping principles, the lines of every entry
debit and credit the same total, so the books always balance.

Storage constraints carry the concurrency guarantees:
- LedgerAccount.code is unique (idempotent account upsert)
- (JournalEntry.reference_type, JournalEntry.reference_id) is unique
  (at most one entry per source event)

Usage:
    from payments.ledger.models import JournalEntry

    entry = JournalEntry.objects.get(
        reference_type=JournalEntry.PAYMENT_COMPLETED,
        reference_id=transaction_id,
    )
    assert entry.is_balanced
"""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings
from django.db import models
from django.db.models import Q, Sum
from django.db.models.functions import Coalesce

from core.model_mixins import UUIDPrimaryKeyMixin
from core.models import BaseModel

from .exceptions import ImmutableLedgerRecord

ZERO = Decimal("0.00")


def default_currency() -> str:
    return settings.LEDGER_DEFAULT_CURRENCY


class AccountType(models.TextChoices):
    """
    Types of ledger accounts.

    Values:
        ASSET: Resources held (e.g. payment clearing cash)
        LIABILITY: Amounts owed (e.g. payables to farmers)
        REVENUE: Income earned (e.g. platform fees)
        EXPENSE: Costs incurred
        EQUITY: Owner's residual interest
    """

    ASSET = "ASSET", "Asset"
    LIABILITY = "LIABILITY", "Liability"
    REVENUE = "REVENUE", "Revenue"
    EXPENSE = "EXPENSE", "Expense"
    EQUITY = "EQUITY", "Equity"


class LedgerAccount(UUIDPrimaryKeyMixin, BaseModel):
    """
    An account of the chart of accounts.

    Accounts form a tree through ``parent``: each farmer has a payable
    sub-account under the "Payables to Farmers" liability. Accounts are
    created lazily by ChartOfAccounts.ensure_account() and never deleted.

    Fields:
        id: UUID primary key (from UUIDPrimaryKeyMixin)
        code: Stable, unique identifier (natural key for upserts)
        name: Display label
        type: Account category, write-once
        parent: Optional parent account
        owner_id: Optional id of the user this account tracks
        created_at/updated_at: Timestamps (from BaseModel)

    Constraints:
        - code is unique
    """

    code = models.CharField(
        max_length=32,
        unique=True,
        help_text="Stable account code, e.g. '1000' or '2000-1a2b3c4d'",
    )
    name = models.CharField(
        max_length=191,
        help_text="Display label of this account",
    )
    type = models.CharField(
        max_length=16,
        choices=AccountType.choices,
        help_text="Category of this account",
    )
    parent = models.ForeignKey(
        "self",
        null=True,
        blank=True,
        on_delete=models.PROTECT,
        related_name="children",
        help_text="Parent account this one rolls up to",
    )
    owner_id = models.CharField(
        max_length=64,
        null=True,
        blank=True,
        db_index=True,
        help_text="Id of the user this account tracks (e.g. a farmer)",
    )

    class Meta(BaseModel.Meta):
        ordering = ["code"]

    def __str__(self) -> str:
        """Return string representation."""
        return f"{self.code} {self.name}"

    def delete(self, *args, **kwargs):
        raise ImmutableLedgerRecord(
            f"Ledger account {self.code} cannot be deleted",
            details={"account_id": str(self.pk), "code": self.code},
        )


class JournalEntry(UUIDPrimaryKeyMixin, models.Model):
    """
    A balanced group of debit/credit lines recording one business event.

    Entries are immutable once created - corrections are made via new
    entries. The pair (reference_type, reference_id) identifies the source
    event and is unique, which makes posting idempotent.

    Fields:
        id: UUID primary key (from UUIDPrimaryKeyMixin)
        reference_type: Kind of source event (e.g. 'payment_completed')
        reference_id: Id of the source event (e.g. transaction id)
        order_id: Id of the originating order (informational)
        currency: Currency code of all lines
        memo: Human-readable description
        created_at: Timestamp when the entry was recorded
    """

    PAYMENT_COMPLETED = "payment_completed"

    reference_type = models.CharField(
        max_length=64,
        help_text="Kind of source event, e.g. 'payment_completed'",
    )
    reference_id = models.CharField(
        max_length=191,
        help_text="Id of the source event",
    )
    order_id = models.CharField(
        max_length=191,
        null=True,
        blank=True,
        help_text="Id of the originating order",
    )
    currency = models.CharField(
        max_length=8,
        default=default_currency,
        help_text="Currency code of this entry",
    )
    memo = models.TextField(
        blank=True,
        default="",
        help_text="Human-readable description of this entry",
    )
    created_at = models.DateTimeField(
        auto_now_add=True,
        db_index=True,
        help_text="Timestamp when this entry was recorded",
    )

    class Meta:
        ordering = ["-created_at"]
        verbose_name_plural = "journal entries"
        constraints = [
            models.UniqueConstraint(
                fields=["reference_type", "reference_id"],
                name="unique_journal_entry_reference",
            )
        ]

    def __str__(self) -> str:
        """Return string representation."""
        return f"{self.reference_type}:{self.reference_id}"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ImmutableLedgerRecord(
                f"Journal entry {self.pk} is immutable",
                details={"entry_id": str(self.pk)},
            )
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ImmutableLedgerRecord(
            f"Journal entry {self.pk} cannot be deleted",
            details={"entry_id": str(self.pk)},
        )

    def _line_total(self, field: str) -> Decimal:
        total = self.lines.aggregate(
            total=Coalesce(Sum(field), ZERO, output_field=models.DecimalField())
        )["total"]
        # Backends differ in the scale of aggregated decimals
        return Decimal(total).quantize(ZERO)

    @property
    def total_debit(self) -> Decimal:
        return self._line_total("debit")

    @property
    def total_credit(self) -> Decimal:
        return self._line_total("credit")

    @property
    def is_balanced(self) -> bool:
        return self.total_debit == self.total_credit


class JournalLine(UUIDPrimaryKeyMixin, models.Model):
    """
    One debit or credit of a journal entry against an account.

    Exactly one of debit/credit is non-zero. Lines are owned by their
    entry and are immutable.

    Constraints:
        - debit and credit are non-negative, exactly one is non-zero
    """

    entry = models.ForeignKey(
        JournalEntry,
        on_delete=models.PROTECT,
        related_name="lines",
        help_text="Entry this line belongs to",
    )
    account = models.ForeignKey(
        LedgerAccount,
        on_delete=models.PROTECT,
        related_name="journal_lines",
        help_text="Account debited or credited",
    )
    debit = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=ZERO,
        help_text="Debit amount (two decimals)",
    )
    credit = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=ZERO,
        help_text="Credit amount (two decimals)",
    )
    memo = models.TextField(
        blank=True,
        default="",
        help_text="Line-level annotation",
    )

    class Meta:
        constraints = [
            models.CheckConstraint(
                condition=(
                    Q(debit__gt=0, credit=0) | Q(debit=0, credit__gt=0)
                ),
                name="journal_line_one_sided_positive",
            )
        ]

    def __str__(self) -> str:
        """Return string representation."""
        if self.debit:
            return f"DR {self.account_id} {self.debit}"
        return f"CR {self.account_id} {self.credit}"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ImmutableLedgerRecord(
                f"Journal line {self.pk} is immutable",
                details={"line_id": str(self.pk)},
            )
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ImmutableLedgerRecord(
            f"Journal line {self.pk} cannot be deleted",
            details={"line_id": str(self.pk)},
        )
