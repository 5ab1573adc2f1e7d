"""
Ledger-specific exceptions for posting operations.

This module provides a hierarchy of exceptions for ledger operations,
inheriting from the core exception base class for consistent payloads.

Exception Hierarchy:
    LedgerError (base)
    ├── TransactionNotFound - Payment transaction lookup failures
    ├── AccountTypeConflict - Re-ensuring an account code with another type
    ├── UnbalancedEntry - Debits and credits of an entry differ
    └── ImmutableLedgerRecord - Update/delete of a posted record

Business rejections (transaction not completed, invalid amounts) are not
exceptions; they are returned as PostingResult.rejected(...).

Usage:
    from payments.ledger.exceptions import TransactionNotFound

    raise TransactionNotFound(transaction_id)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.exceptions import BaseApplicationError

if TYPE_CHECKING:
    from decimal import Decimal
    from typing import Any


class LedgerError(BaseApplicationError):
    """
    Base exception for all ledger operations.

    Example:
        try:
            post_payment_completed(transaction_id)
        except LedgerError as e:
            logger.error(f"Ledger operation failed: {e}")
            return e.to_dict()
    """

    default_error_code: str = "LEDGER_ERROR"


class TransactionNotFound(LedgerError):
    """
    Raised when the payment transaction to post does not exist.

    Fatal for the call. The caller may retry once the transaction
    is known to exist.

    Attributes:
        transaction_id: The id that failed to resolve
    """

    default_error_code: str = "TRANSACTION_NOT_FOUND"

    def __init__(
        self,
        transaction_id: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.transaction_id = str(transaction_id)
        full_details = {"transaction_id": self.transaction_id}
        if details:
            full_details.update(details)
        super().__init__(
            message=f"Transaction {transaction_id} not found",
            error_code=error_code,
            details=full_details,
        )


class AccountTypeConflict(LedgerError):
    """
    Raised when an account code is ensured with a different type.

    An account's type is write-once: changing it would reinterpret every
    line already posted against it.

    Example:
        raise AccountTypeConflict(
            f"Account 1000 is ASSET, not LIABILITY",
            details={"code": "1000", "existing_type": "ASSET"},
        )
    """

    default_error_code: str = "ACCOUNT_TYPE_CONFLICT"


class UnbalancedEntry(LedgerError):
    """
    Raised when the lines of an entry do not balance.

    Attributes:
        total_debit: Sum of line debits
        total_credit: Sum of line credits
    """

    default_error_code: str = "UNBALANCED_ENTRY"

    def __init__(
        self,
        total_debit: Decimal,
        total_credit: Decimal,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.total_debit = total_debit
        self.total_credit = total_credit
        full_details = {
            "total_debit": str(total_debit),
            "total_credit": str(total_credit),
        }
        if details:
            full_details.update(details)
        super().__init__(
            message=(
                f"Journal entry is unbalanced: debits {total_debit} "
                f"!= credits {total_credit}"
            ),
            error_code=error_code,
            details=full_details,
        )


class ImmutableLedgerRecord(LedgerError):
    """
    Raised when a posted journal record would be modified or deleted.

    Corrections must be recorded as new entries.
    """

    default_error_code: str = "IMMUTABLE_LEDGER_RECORD"
