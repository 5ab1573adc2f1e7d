"""
Base exception classes for application-wide error handling.

This module provides the root of the exception hierarchy used by the
domain apps. It enables:
- Consistent error payloads for callers (task workers, admin actions)
- Machine-readable error codes for client handling
- Detailed error information for debugging

Exception Hierarchy:
    BaseApplicationError (base)
    └── payments.ledger.exceptions.LedgerError - Ledger posting failures

Usage:
    from core.exceptions import BaseApplicationError

    class LedgerError(BaseApplicationError):
        default_error_code = "LEDGER_ERROR"

    # Raise with additional details
    raise LedgerError(
        "Posting failed",
        details={"transaction_id": transaction_id},
    )

    # Convert to dict for a task result or API response
    try:
        ...
    except BaseApplicationError as e:
        return e.to_dict()

Note:
    These exceptions are for domain/business logic errors.
    Expected business outcomes (e.g. a rejected posting) are returned
    as result objects instead of raised.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any


class BaseApplicationError(Exception):
    """
    Base exception for all application-specific errors.

    Provides a consistent interface for error handling across the application.
    All custom exceptions should inherit from this class.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable code for client-side handling
        details: Additional error context (ids, amounts, etc.)

    Example:
        try:
            post_payment_completed(transaction_id)
        except BaseApplicationError as e:
            logger.warning(f"Posting failed: {e.error_code}")
            return e.to_dict()
    """

    default_error_code: str = "APPLICATION_ERROR"

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        """
        Initialize the exception.

        Args:
            message: Human-readable error description
            error_code: Machine-readable error code (defaults to class default)
            details: Additional error context
        """
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for a caller-facing payload.

        Returns:
            Dict with error, error_code, and details keys

        Example:
            {
                "error": "Transaction 42 not found",
                "error_code": "TRANSACTION_NOT_FOUND",
                "details": {"transaction_id": "42"}
            }
        """
        result: dict[str, Any] = {
            "error": self.message,
            "error_code": self.error_code,
        }
        if self.details:
            result["details"] = self.details
        return result

    def __str__(self) -> str:
        """Return string representation with error code."""
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code!r}, "
            f"details={self.details!r})"
        )
