"""
Celery tasks for payment accounting.

This module provides async tasks for:
- Posting completed payments to the ledger

The posting engine never retries by itself. This task is the caller-side
policy: transient database failures are retried with exponential backoff,
which is safe because every ledger write path is idempotent.

Outcomes:
- ok: entry posted (or already posted)
- rejected: "not yet processed" - the transaction is not eligible yet
- transaction_not_found: logged as an error for operator attention

Usage:
    from payments.tasks import post_payment_completed_task

    # Queue a completed payment for posting
    post_payment_completed_task.delay(str(transaction.id))
"""

from __future__ import annotations

import logging

from celery import shared_task
from django.conf import settings
from django.db import InterfaceError, OperationalError

from payments.ledger import TransactionNotFound, post_payment_completed

logger = logging.getLogger(__name__)


@shared_task(
    bind=True,
    autoretry_for=(OperationalError, InterfaceError),
    retry_backoff=True,
    retry_backoff_max=300,
    retry_kwargs={"max_retries": settings.LEDGER_POSTING_MAX_RETRIES},
    acks_late=True,
)
def post_payment_completed_task(self, transaction_id: str) -> dict:
    """
    Post a completed payment to the ledger asynchronously.

    Args:
        transaction_id: Id of the payment transaction

    Returns:
        Dict form of the PostingResult, or
        {"ok": False, "reason": "transaction_not_found"}

    Raises:
        OperationalError/InterfaceError: Re-raised to trigger Celery retry
    """
    transaction_id = str(transaction_id)
    logger.info(
        "Posting completed payment",
        extra={"transaction_id": transaction_id, "attempt": self.request.retries},
    )

    try:
        result = post_payment_completed(transaction_id)
    except TransactionNotFound as e:
        logger.error(
            f"Cannot post payment: {e}",
            extra={"transaction_id": transaction_id},
        )
        return {"ok": False, "reason": "transaction_not_found"}

    if not result.ok:
        logger.info(
            f"Payment not yet processed: {result.reason}",
            extra={"transaction_id": transaction_id, "reason": result.reason},
        )

    return result.to_dict()
