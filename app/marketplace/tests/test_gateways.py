"""
Tests for DjangoTransactionGateway.

Covers transaction lookup (including malformed and unknown ids) and the
ledger entry back-link.
"""

import uuid
from decimal import Decimal

import pytest

from marketplace.gateways import DjangoTransactionGateway
from marketplace.models import TransactionStatus
from marketplace.tests.factories import PaymentTransactionFactory, UserFactory
from payments.ledger.protocols import TransactionGateway
from payments.ledger.types import PaymentCompletedEvent


@pytest.fixture
def gateway():
    return DjangoTransactionGateway()


class TestLookupTransaction:
    """Tests for DjangoTransactionGateway.lookup_transaction()."""

    def test_implements_transaction_gateway_protocol(self, gateway):
        assert isinstance(gateway, TransactionGateway)

    def test_resolves_transaction_with_order_and_farmer(self, db, gateway):
        """Should map the transaction, order and farmer onto the event."""
        farmer = UserFactory(first_name="Amina", last_name="Nakato")
        txn = PaymentTransactionFactory(
            order__farmer=farmer,
            amount=Decimal("1500.00"),
            currency="UGX",
        )

        event = gateway.lookup_transaction(str(txn.id))

        assert isinstance(event, PaymentCompletedEvent)
        assert event.transaction_id == str(txn.id)
        assert event.gross_amount == Decimal("1500.00")
        assert event.currency == "UGX"
        assert event.order_id == str(txn.order.id)
        assert event.farmer_id == str(farmer.pk)
        assert event.farmer_name == "Amina Nakato"
        assert event.transaction_status == TransactionStatus.COMPLETED
        assert event.is_completed

    def test_accepts_uuid_instances(self, db, gateway):
        txn = PaymentTransactionFactory()

        event = gateway.lookup_transaction(txn.id)

        assert event.transaction_id == str(txn.id)

    def test_canonicalizes_transaction_id(self, db, gateway):
        """Uppercase ids resolve to the stored lowercase form."""
        txn = PaymentTransactionFactory()

        event = gateway.lookup_transaction(str(txn.id).upper())

        assert event.transaction_id == str(txn.id)

    def test_falls_back_to_username_without_full_name(self, db, gateway):
        farmer = UserFactory(username="okello", first_name="", last_name="")
        txn = PaymentTransactionFactory(order__farmer=farmer)

        event = gateway.lookup_transaction(str(txn.id))

        assert event.farmer_name == "okello"

    def test_reports_pending_status(self, db, gateway):
        txn = PaymentTransactionFactory(status=TransactionStatus.PENDING)

        event = gateway.lookup_transaction(str(txn.id))

        assert event.transaction_status == TransactionStatus.PENDING
        assert not event.is_completed

    def test_returns_none_for_unknown_id(self, db, gateway):
        assert gateway.lookup_transaction(str(uuid.uuid4())) is None

    @pytest.mark.parametrize("transaction_id", ["not-a-uuid", "", "123", None])
    def test_returns_none_for_malformed_id(self, db, gateway, transaction_id):
        assert gateway.lookup_transaction(transaction_id) is None


class TestCanonicalId:
    """Tests for DjangoTransactionGateway.canonical_id()."""

    def test_spellings_of_one_id_agree(self, gateway):
        transaction_id = uuid.uuid4()

        assert gateway.canonical_id(str(transaction_id).upper()) == str(transaction_id)
        assert gateway.canonical_id(transaction_id) == str(transaction_id)
        assert gateway.canonical_id(transaction_id.hex) == str(transaction_id)

    @pytest.mark.parametrize("transaction_id", ["not-a-uuid", "", "123", None])
    def test_malformed_id_is_none(self, gateway, transaction_id):
        assert gateway.canonical_id(transaction_id) is None


class TestLinkLedgerEntry:
    """Tests for DjangoTransactionGateway.link_ledger_entry()."""

    def test_stores_entry_id_on_transaction(self, db, gateway):
        txn = PaymentTransactionFactory()
        entry_id = uuid.uuid4()

        gateway.link_ledger_entry(str(txn.id), entry_id)

        txn.refresh_from_db()
        assert txn.ledger_entry_id == entry_id
        assert txn.is_posted

    def test_unknown_transaction_is_ignored(self, db, gateway):
        gateway.link_ledger_entry(str(uuid.uuid4()), uuid.uuid4())

    def test_malformed_transaction_id_is_ignored(self, db, gateway):
        gateway.link_ledger_entry("not-a-uuid", uuid.uuid4())
