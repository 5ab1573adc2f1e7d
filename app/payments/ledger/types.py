"""
Data types for ledger operations.

This module defines dataclasses used throughout the ledger system
for type-safe data transfer between layers.

Types:
    PaymentCompletedEvent: Completed payment as seen by the posting engine
    FeeSplit: Gross amount split into platform fee and farmer net
    BaseAccounts: The three top-level accounts every posting touches
    JournalLineSpec: A line to be written as part of a journal entry
    PostingResult: Outcome of posting a completed payment
    RejectionReason: Machine-readable reasons for rejected postings

Usage:
    from payments.ledger.types import PostingResult, RejectionReason

    result = PostingResult.rejected(RejectionReason.INVALID_AMOUNT)
    result.to_dict()  # {"ok": False, "reason": "invalid_amount"}
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING

from django.db import models

if TYPE_CHECKING:
    from typing import Any

    from .models import LedgerAccount


class RejectionReason(models.TextChoices):
    """
    Reasons a completed-payment posting is rejected without writing.

    Rejections are normal outcomes, not errors. The caller may retry
    once the underlying transaction changes.
    """

    TRANSACTION_NOT_COMPLETED = "transaction_not_completed", "Transaction Not Completed"
    INVALID_AMOUNT = "invalid_amount", "Invalid Amount"
    INVALID_NET_AMOUNT = "invalid_net_amount", "Invalid Net Amount"


@dataclass(frozen=True)
class PaymentCompletedEvent:
    """
    A payment transaction resolved from the marketplace records.

    Produced by a TransactionGateway. Amounts are kept as received; the
    posting engine normalizes them to cents.

    Attributes:
        transaction_id: Id of the payment transaction (idempotency reference)
        gross_amount: Amount paid by the buyer
        currency: Currency code of the payment
        order_id: Id of the order this payment settles
        farmer_id: Id of the farmer selling the order
        farmer_name: Display name of the farmer (may be empty)
        transaction_status: Status of the transaction (e.g. 'COMPLETED')
    """

    transaction_id: str
    gross_amount: Any
    currency: str | None
    order_id: str | None
    farmer_id: str
    farmer_name: str | None
    transaction_status: str

    @property
    def is_completed(self) -> bool:
        return str(self.transaction_status or "").upper() == "COMPLETED"


@dataclass(frozen=True)
class FeeSplit:
    """
    Gross payment split into the platform fee and the farmer's share.

    Attributes:
        gross: Gross amount, rounded to cents
        fee: Platform fee, rounded to cents
        farmer_net: Amount payable to the farmer (gross - fee)
        rate: Fee rate that was applied
    """

    gross: Decimal
    fee: Decimal
    farmer_net: Decimal
    rate: Decimal


@dataclass(frozen=True)
class BaseAccounts:
    """The top-level accounts of the chart."""

    cash: LedgerAccount
    payables_parent: LedgerAccount
    fee_revenue: LedgerAccount


@dataclass(frozen=True)
class JournalLineSpec:
    """
    Parameters for one line of a journal entry.

    Exactly one of debit/credit must be non-zero and both must be
    non-negative.
    """

    account: LedgerAccount
    debit: Decimal = Decimal("0.00")
    credit: Decimal = Decimal("0.00")
    memo: str = ""

    def __post_init__(self) -> None:
        """Validate line amounts after initialization."""
        if self.debit < 0 or self.credit < 0:
            raise ValueError("debit and credit must be non-negative")
        if (self.debit == 0) == (self.credit == 0):
            raise ValueError("exactly one of debit or credit must be non-zero")


@dataclass(frozen=True)
class PostingResult:
    """
    Outcome of post_payment_completed().

    Attributes:
        ok: True when an entry exists for the payment (new or replayed)
        entry_id: Id of the journal entry when ok
        idempotent: True when the entry already existed
        reason: RejectionReason value when not ok

    Example:
        result = post_payment_completed(transaction_id)
        if result.ok:
            print(result.entry_id, result.idempotent)
        else:
            print(f"Not yet processed: {result.reason}")
    """

    ok: bool
    entry_id: uuid.UUID | None = None
    idempotent: bool | None = None
    reason: str | None = None

    @classmethod
    def posted(cls, entry_id: uuid.UUID) -> PostingResult:
        return cls(ok=True, entry_id=entry_id, idempotent=False)

    @classmethod
    def already_posted(cls, entry_id: uuid.UUID) -> PostingResult:
        return cls(ok=True, entry_id=entry_id, idempotent=True)

    @classmethod
    def rejected(cls, reason: RejectionReason | str) -> PostingResult:
        return cls(ok=False, reason=str(reason))

    def to_dict(self) -> dict[str, Any]:
        """
        Convert to a JSON-serializable dict, omitting unset keys.

        Returns:
            {"ok": True, "entry_id": "...", "idempotent": False}
            or {"ok": False, "reason": "invalid_amount"}
        """
        result: dict[str, Any] = {"ok": self.ok}
        if self.entry_id is not None:
            result["entry_id"] = str(self.entry_id)
        if self.idempotent is not None:
            result["idempotent"] = self.idempotent
        if self.reason is not None:
            result["reason"] = self.reason
        return result
