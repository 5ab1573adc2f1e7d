"""
Ledger - Double-entry posting of completed marketplace payments.

This module records every completed payment as one immutable, balanced
journal entry that splits the gross amount into platform fee revenue and
a payable to the farmer who sold the order. Posting is exactly-once per
payment transaction, even under concurrent and repeated delivery.

Public API:
    Models:
        LedgerAccount - Node of the chart of accounts
        JournalEntry - Balanced record of one business event
        JournalLine - Debit or credit of an entry against an account
        AccountType - Enum of account categories

    Services:
        post_payment_completed - Post a completed payment (entry point)
        PostingService - Posting engine with an injectable gateway
        ChartOfAccounts - Idempotent account upserts
        FeePolicy - Platform fee computation

    Types:
        PostingResult - Outcome of a posting
        RejectionReason - Reasons a posting is rejected
        PaymentCompletedEvent - Transaction as seen by the engine

    Exceptions:
        LedgerError - Base exception for ledger operations
        TransactionNotFound - Unknown payment transaction
        AccountTypeConflict - Account code re-ensured with another type
        UnbalancedEntry - Debits and credits differ
        ImmutableLedgerRecord - Update/delete of a posted record

Usage:
    from payments.ledger import post_payment_completed, TransactionNotFound

    try:
        result = post_payment_completed(transaction_id)
    except TransactionNotFound:
        ...  # retry once the transaction exists

    if result.ok:
        print(f"Posted as {result.entry_id} (replay: {result.idempotent})")
    else:
        print(f"Not yet processed: {result.reason}")
"""

from .chart import ChartOfAccounts, farmer_subledger_code
from .exceptions import (
    AccountTypeConflict,
    ImmutableLedgerRecord,
    LedgerError,
    TransactionNotFound,
    UnbalancedEntry,
)
from .fees import FeePolicy
from .models import AccountType, JournalEntry, JournalLine, LedgerAccount
from .services import PostingService, post_payment_completed
from .types import PaymentCompletedEvent, PostingResult, RejectionReason

__all__ = [
    # Models
    "LedgerAccount",
    "JournalEntry",
    "JournalLine",
    "AccountType",
    # Services
    "post_payment_completed",
    "PostingService",
    "ChartOfAccounts",
    "farmer_subledger_code",
    "FeePolicy",
    # Types
    "PostingResult",
    "RejectionReason",
    "PaymentCompletedEvent",
    # Exceptions
    "LedgerError",
    "TransactionNotFound",
    "AccountTypeConflict",
    "UnbalancedEntry",
    "ImmutableLedgerRecord",
]
