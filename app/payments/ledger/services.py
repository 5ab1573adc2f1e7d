"""
Ledger posting service.

This module provides the PostingService class which turns completed
payments into balanced journal entries. All ledger writes for payments
go through this service.

Each completed payment produces exactly one entry:

    DR 1000 Payment Clearing        gross
    CR 2000-xxxxxxxx Farmer Payable farmer_net
    CR 4000 Platform Fees Revenue   fee

Exactly-once posting relies on the unique (reference_type, reference_id)
constraint of JournalEntry: a duplicate insert fails, and the loser re-reads
the winner's entry and reports it as an idempotent replay. No in-process
locks are used, so any number of workers may post concurrently.

Usage:
    from payments.ledger.services import post_payment_completed

    result = post_payment_completed(transaction_id)
    if result.ok:
        print(result.entry_id, result.idempotent)
    else:
        print(f"Not yet processed: {result.reason}")
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from django.conf import settings
from django.db import IntegrityError, transaction
from django.utils.module_loading import import_string

from .chart import ChartOfAccounts
from .exceptions import TransactionNotFound, UnbalancedEntry
from .fees import FeePolicy, round2, to_decimal
from .models import ZERO, JournalEntry, JournalLine
from .types import JournalLineSpec, PostingResult, RejectionReason

if TYPE_CHECKING:
    from .protocols import TransactionGateway
    from .models import LedgerAccount
    from .types import BaseAccounts, FeeSplit, PaymentCompletedEvent


logger = logging.getLogger(__name__)


def get_transaction_gateway() -> TransactionGateway:
    """Instantiate the gateway named by settings.LEDGER_TRANSACTION_GATEWAY."""
    return import_string(settings.LEDGER_TRANSACTION_GATEWAY)()


def build_payment_lines(
    split: FeeSplit,
    accounts: BaseAccounts,
    farmer_account: LedgerAccount,
) -> list[JournalLineSpec]:
    """
    Build the lines of a completed-payment entry.

    Zero amounts produce no line (a rate of 0 means no fee line). This
    departs from the three-line shape on purpose: every stored line has
    exactly one positive side, so a 0.00 fee yields a two-line entry.

    Args:
        split: Fee split of the payment
        accounts: BaseAccounts of the chart
        farmer_account: The farmer's payable sub-account

    Returns:
        Lines ordered debit first
    """
    candidates = [
        (accounts.cash, split.gross, "debit", "Cash received (payment clearing)"),
        (farmer_account, split.farmer_net, "credit", "Payable to farmer"),
        (accounts.fee_revenue, split.fee, "credit", "Platform fee revenue"),
    ]
    return [
        JournalLineSpec(account=account, memo=memo, **{side: amount})
        for account, amount, side, memo in candidates
        if amount != 0
    ]


def assert_balanced(lines: list[JournalLineSpec]) -> None:
    """
    Check that debits equal credits.

    Raises:
        UnbalancedEntry: If the totals differ or there are no lines
    """
    total_debit = sum((line.debit for line in lines), ZERO)
    total_credit = sum((line.credit for line in lines), ZERO)
    if not lines or total_debit != total_credit:
        raise UnbalancedEntry(total_debit=total_debit, total_credit=total_credit)


class PostingService:
    """
    Posts completed payments to the ledger.

    Args:
        gateway: TransactionGateway used to resolve and annotate transactions
            (defaults to settings.LEDGER_TRANSACTION_GATEWAY)

    Example:
        service = PostingService(gateway=DjangoTransactionGateway())
        result = service.post_payment_completed(transaction_id)
    """

    reference_type = JournalEntry.PAYMENT_COMPLETED

    def __init__(self, gateway: TransactionGateway | None = None):
        self.gateway = gateway if gateway is not None else get_transaction_gateway()

    def find_posted_entry(self, transaction_id: str) -> JournalEntry | None:
        """Return the entry already posted for this transaction, if any."""
        return JournalEntry.objects.filter(
            reference_type=self.reference_type,
            reference_id=str(transaction_id),
        ).first()

    def post_payment_completed(self, transaction_id: str) -> PostingResult:
        """
        Post a completed payment, exactly once.

        Steps:
        1. Normalise the id through the gateway (TransactionNotFound if malformed)
        2. Return the existing entry if this transaction was posted
        3. Resolve the transaction (TransactionNotFound if missing)
        4. Reject unless the transaction is completed
        5. Reject non-positive gross or negative farmer net
        6. Ensure accounts and write the balanced entry atomically
        7. Link the entry back onto the transaction (best effort)

        The entry is stored under the canonical id, so every spelling of
        the same transaction id replays the same entry.

        No retries are performed here. Every write path is idempotent,
        so callers may retry the whole call on storage failures.

        Args:
            transaction_id: Id of the payment transaction

        Returns:
            PostingResult - ok with entry_id, or rejected with a reason

        Raises:
            TransactionNotFound: If the transaction does not exist
            DatabaseError: On storage failures
        """
        reference_id = self.gateway.canonical_id(transaction_id)
        if reference_id is None:
            logger.error(
                "Malformed payment transaction id",
                extra={"transaction_id": str(transaction_id)},
            )
            raise TransactionNotFound(str(transaction_id))

        log_extra = {"transaction_id": reference_id}

        existing = self.find_posted_entry(reference_id)
        if existing is not None:
            logger.info(
                f"Payment {reference_id} already posted as entry {existing.id}",
                extra={**log_extra, "entry_id": str(existing.id)},
            )
            return PostingResult.already_posted(existing.id)

        event = self.gateway.lookup_transaction(reference_id)
        if event is None:
            logger.error("Payment transaction not found", extra=log_extra)
            raise TransactionNotFound(reference_id)

        if not event.is_completed:
            return self._reject(
                RejectionReason.TRANSACTION_NOT_COMPLETED,
                reference_id,
                status=event.transaction_status,
            )

        gross = to_decimal(event.gross_amount)
        if gross is None or not gross.is_finite() or round2(gross) <= 0:
            return self._reject(
                RejectionReason.INVALID_AMOUNT,
                reference_id,
                gross_amount=str(event.gross_amount),
            )

        split = FeePolicy.from_settings().split(gross)
        if split.farmer_net < 0:
            return self._reject(
                RejectionReason.INVALID_NET_AMOUNT,
                reference_id,
                farmer_net=str(split.farmer_net),
            )

        entry, created = self._write_entry(reference_id, event, split)
        if not created:
            return PostingResult.already_posted(entry.id)

        self._link_entry(reference_id, entry)
        return PostingResult.posted(entry.id)

    def _reject(self, reason: RejectionReason, transaction_id: str, **context) -> PostingResult:
        logger.info(
            f"Payment {transaction_id} not posted: {reason}",
            extra={"transaction_id": transaction_id, "reason": str(reason), **context},
        )
        return PostingResult.rejected(reason)

    def _write_entry(
        self,
        reference_id: str,
        event: PaymentCompletedEvent,
        split: FeeSplit,
    ) -> tuple[JournalEntry, bool]:
        """
        Ensure accounts and insert the entry with its lines.

        Returns:
            (entry, created) - created is False when a concurrent
            delivery inserted the entry first
        """
        accounts = ChartOfAccounts.ensure_base_accounts()
        farmer_account = ChartOfAccounts.ensure_farmer_subledger(
            farmer_id=event.farmer_id,
            farmer_name=event.farmer_name,
            parent=accounts.payables_parent,
        )

        lines = build_payment_lines(split, accounts, farmer_account)
        assert_balanced(lines)

        try:
            with transaction.atomic():
                entry = JournalEntry.objects.create(
                    reference_type=self.reference_type,
                    reference_id=reference_id,
                    order_id=event.order_id,
                    currency=event.currency or settings.LEDGER_DEFAULT_CURRENCY,
                    memo=f"Payment completed for order {event.order_id}",
                )
                JournalLine.objects.bulk_create(
                    [
                        JournalLine(
                            entry=entry,
                            account=line.account,
                            debit=line.debit,
                            credit=line.credit,
                            memo=line.memo,
                        )
                        for line in lines
                    ]
                )
        except IntegrityError:
            # Race: another delivery of the same payment posted first
            entry = self.find_posted_entry(reference_id)
            if entry is None:
                raise
            logger.info(
                f"Payment {reference_id} posted concurrently as entry {entry.id}",
                extra={"transaction_id": reference_id, "entry_id": str(entry.id)},
            )
            return entry, False

        logger.info(
            f"Posted payment {reference_id}: gross {split.gross}, "
            f"fee {split.fee}, farmer net {split.farmer_net} {entry.currency}",
            extra={
                "transaction_id": reference_id,
                "entry_id": str(entry.id),
                "order_id": event.order_id,
            },
        )
        return entry, True

    def _link_entry(self, transaction_id: str, entry: JournalEntry) -> None:
        """Store the entry id on the transaction; failures are only logged."""
        try:
            with transaction.atomic():
                self.gateway.link_ledger_entry(transaction_id, entry.id)
        except Exception:
            logger.warning(
                f"Could not link entry {entry.id} to transaction {transaction_id}",
                extra={"transaction_id": transaction_id, "entry_id": str(entry.id)},
                exc_info=True,
            )


def post_payment_completed(transaction_id: str) -> PostingResult:
    """
    Post a completed payment using the configured gateway.

    Sole public entry point for the payment-webhook layer.
    """
    return PostingService().post_payment_completed(transaction_id)
