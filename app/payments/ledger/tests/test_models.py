"""
Tests for ledger models.

Covers immutability of posted records and the storage constraints the
posting engine relies on for exactly-once behavior.
"""

from decimal import Decimal

import pytest
from django.db import IntegrityError, transaction

from payments.ledger.exceptions import ImmutableLedgerRecord
from payments.ledger.models import JournalEntry, JournalLine, LedgerAccount
from payments.ledger.tests.factories import (
    JournalEntryFactory,
    JournalLineFactory,
    LedgerAccountFactory,
)


class TestLedgerAccount:
    """Tests for LedgerAccount."""

    def test_str(self, db):
        account = LedgerAccountFactory(code="1000", name="Payment Clearing")

        assert str(account) == "1000 Payment Clearing"

    def test_code_is_unique(self, db):
        LedgerAccountFactory(code="1000")

        with pytest.raises(IntegrityError):
            with transaction.atomic():
                LedgerAccountFactory(code="1000")

    def test_can_be_renamed(self, db):
        account = LedgerAccountFactory(name="Old")
        account.name = "New"
        account.save()

        account.refresh_from_db()
        assert account.name == "New"

    def test_cannot_be_deleted(self, db):
        account = LedgerAccountFactory()

        with pytest.raises(ImmutableLedgerRecord):
            account.delete()

        assert LedgerAccount.objects.filter(pk=account.pk).exists()

    def test_children(self, db):
        parent = LedgerAccountFactory()
        child = LedgerAccountFactory(parent=parent)

        assert list(parent.children.all()) == [child]


class TestJournalEntry:
    """Tests for JournalEntry."""

    def test_default_currency_from_settings(self, db, settings):
        settings.LEDGER_DEFAULT_CURRENCY = "KES"

        entry = JournalEntry.objects.create(
            reference_type=JournalEntry.PAYMENT_COMPLETED,
            reference_id="txn-1",
        )

        assert entry.currency == "KES"

    def test_reference_is_unique(self, db):
        JournalEntryFactory(reference_id="txn-1")

        with pytest.raises(IntegrityError):
            with transaction.atomic():
                JournalEntryFactory(reference_id="txn-1")

    def test_same_reference_id_allowed_for_other_reference_type(self, db):
        JournalEntryFactory(reference_id="txn-1")
        JournalEntryFactory(reference_id="txn-1", reference_type="refund_completed")

        assert JournalEntry.objects.filter(reference_id="txn-1").count() == 2

    def test_cannot_be_updated(self, db):
        entry = JournalEntryFactory(memo="original")
        entry.memo = "edited"

        with pytest.raises(ImmutableLedgerRecord):
            entry.save()

        entry.refresh_from_db()
        assert entry.memo == "original"

    def test_cannot_be_deleted(self, db):
        entry = JournalEntryFactory()

        with pytest.raises(ImmutableLedgerRecord):
            entry.delete()

        assert JournalEntry.objects.filter(pk=entry.pk).exists()

    def test_totals_and_balance(self, db):
        entry = JournalEntryFactory()
        JournalLineFactory(entry=entry, debit=Decimal("100.00"))
        JournalLineFactory(entry=entry, debit=Decimal("0.00"), credit=Decimal("98.00"))
        JournalLineFactory(entry=entry, debit=Decimal("0.00"), credit=Decimal("2.00"))

        assert entry.total_debit == Decimal("100.00")
        assert entry.total_credit == Decimal("100.00")
        assert entry.is_balanced

    def test_unbalanced_entry_is_reported(self, db):
        entry = JournalEntryFactory()
        JournalLineFactory(entry=entry, debit=Decimal("100.00"))

        assert not entry.is_balanced

    def test_empty_entry_totals_are_zero(self, db):
        entry = JournalEntryFactory()

        assert entry.total_debit == Decimal("0.00")
        assert entry.total_credit == Decimal("0.00")


class TestJournalLine:
    """Tests for JournalLine."""

    def test_str(self, db):
        debit = JournalLineFactory(debit=Decimal("5.00"))
        credit = JournalLineFactory(debit=Decimal("0.00"), credit=Decimal("5.00"))

        assert str(debit).startswith("DR ")
        assert str(credit).startswith("CR ")

    @pytest.mark.parametrize(
        "debit,credit",
        [
            ("0.00", "0.00"),
            ("10.00", "10.00"),
            ("-10.00", "0.00"),
            ("0.00", "-10.00"),
        ],
    )
    def test_check_constraint_rejects_invalid_sides(self, db, debit, credit):
        """Exactly one side must be positive and the other zero."""
        entry = JournalEntryFactory()
        account = LedgerAccountFactory()

        with pytest.raises(IntegrityError):
            with transaction.atomic():
                JournalLine.objects.create(
                    entry=entry,
                    account=account,
                    debit=Decimal(debit),
                    credit=Decimal(credit),
                )

    def test_cannot_be_updated(self, db):
        line = JournalLineFactory(debit=Decimal("5.00"))
        line.debit = Decimal("6.00")

        with pytest.raises(ImmutableLedgerRecord):
            line.save()

    def test_cannot_be_deleted(self, db):
        line = JournalLineFactory()

        with pytest.raises(ImmutableLedgerRecord):
            line.delete()

