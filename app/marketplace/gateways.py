"""
Transaction gateway over the marketplace models.

Implements payments.ledger.protocols.TransactionGateway so the posting
engine can read payment transactions and record the journal entry id on
them without importing marketplace models directly.

Usage:
    from marketplace.gateways import DjangoTransactionGateway
    from payments.ledger import PostingService

    service = PostingService(gateway=DjangoTransactionGateway())

Configured as the default through settings.LEDGER_TRANSACTION_GATEWAY.
"""

from __future__ import annotations

import logging
import uuid

from payments.ledger.types import PaymentCompletedEvent

from .models import PaymentTransaction

logger = logging.getLogger(__name__)


def _parse_id(transaction_id) -> uuid.UUID | None:
    try:
        return uuid.UUID(str(transaction_id))
    except (TypeError, ValueError, AttributeError):
        return None


def farmer_display_name(farmer) -> str:
    """Full name of the farmer, falling back to the username."""
    return farmer.get_full_name().strip() or farmer.get_username()


class DjangoTransactionGateway:
    """
    Resolves PaymentTransaction rows into PaymentCompletedEvents.

    Malformed and unknown ids both resolve to None, which the posting
    engine reports as TransactionNotFound.
    """

    def canonical_id(self, transaction_id) -> str | None:
        """Lowercase hyphenated UUID text, or None for malformed ids."""
        pk = _parse_id(transaction_id)
        return str(pk) if pk is not None else None

    def lookup_transaction(self, transaction_id: str) -> PaymentCompletedEvent | None:
        pk = _parse_id(transaction_id)
        if pk is None:
            logger.debug(f"Malformed transaction id: {transaction_id!r}")
            return None

        txn = (
            PaymentTransaction.objects.select_related("order", "order__farmer")
            .filter(pk=pk)
            .first()
        )
        if txn is None:
            return None

        order = txn.order
        farmer = order.farmer
        return PaymentCompletedEvent(
            transaction_id=str(txn.id),
            gross_amount=txn.amount,
            currency=txn.currency,
            order_id=str(order.id),
            farmer_id=str(farmer.pk),
            farmer_name=farmer_display_name(farmer),
            transaction_status=txn.status,
        )

    def link_ledger_entry(self, transaction_id: str, entry_id: uuid.UUID) -> None:
        pk = _parse_id(transaction_id)
        if pk is None:
            return

        updated = PaymentTransaction.objects.filter(pk=pk).update(ledger_entry_id=entry_id)
        if not updated:
            logger.warning(
                f"No transaction {transaction_id} to link entry {entry_id} to",
                extra={"transaction_id": str(transaction_id), "entry_id": str(entry_id)},
            )
