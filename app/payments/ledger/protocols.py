"""
Protocol definitions for the collaborators of the posting engine.

The ledger does not own the marketplace's transaction and order records.
It reads and annotates them through a TransactionGateway, supplied by the
surrounding system.

Protocols define contracts that adapters must fulfill, enabling:
- Dependency inversion (the ledger depends on an abstraction)
- Easy fakes in tests

Available Protocols:
    TransactionGateway: Id normalisation, lookup of payment transactions
        and entry back-links

Usage:
    from payments.ledger.protocols import TransactionGateway

    class InMemoryGateway:
        def canonical_id(self, transaction_id): ...
        def lookup_transaction(self, transaction_id): ...
        def link_ledger_entry(self, transaction_id, entry_id): ...

    # InMemoryGateway is a valid TransactionGateway
    # even without explicit inheritance (duck typing)
    gateway: TransactionGateway = InMemoryGateway()

Note:
    The default implementation is marketplace.gateways.DjangoTransactionGateway,
    selected by settings.LEDGER_TRANSACTION_GATEWAY.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    import uuid

    from .types import PaymentCompletedEvent


@runtime_checkable
class TransactionGateway(Protocol):
    """
    Read access to payment transactions plus the ledger back-reference.
    """

    def canonical_id(self, transaction_id) -> str | None:
        """
        Normalise a transaction id to the form entries are stored under.

        Every spelling of the same transaction (e.g. upper or lower case
        UUID text, or a uuid.UUID) must map to one string.

        Returns:
            The canonical id, or None if the id is malformed
        """
        ...

    def lookup_transaction(self, transaction_id: str) -> PaymentCompletedEvent | None:
        """
        Resolve a payment transaction with its order and farmer.

        Args:
            transaction_id: Id of the payment transaction

        Returns:
            The transaction as a PaymentCompletedEvent, or None if unknown
        """
        ...

    def link_ledger_entry(self, transaction_id: str, entry_id: uuid.UUID) -> None:
        """
        Record the journal entry id on the transaction.

        Best effort: the posting engine logs failures and carries on.

        Args:
            transaction_id: Id of the payment transaction
            entry_id: Id of the journal entry posted for it
        """
        ...
