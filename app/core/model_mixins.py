"""
Model mixins providing reusable functionality for Django models.

This module contains abstract mixin classes that can be combined with
BaseModel to add specific functionality. These are generic infrastructure
classes with no domain-specific logic.

Available Mixins:
    UUIDPrimaryKeyMixin: Use UUID as primary key

Usage:
    from core.models import BaseModel
    from core.model_mixins import UUIDPrimaryKeyMixin

    class PaymentTransaction(UUIDPrimaryKeyMixin, BaseModel):
        amount = models.DecimalField(max_digits=14, decimal_places=2)

Note:
    - Always list mixins before BaseModel in inheritance
    - Mixins are abstract and don't create database tables
"""

from __future__ import annotations

import uuid

from django.db import models


class UUIDPrimaryKeyMixin(models.Model):
    """
    Use UUID as primary key instead of auto-increment integer.

    Ledger and payment records are referenced across processes (task
    workers, the payment provider callback layer) so their ids must be
    safe to generate anywhere and must not reveal record counts.

    Fields:
        id: UUIDField as primary key (auto-generated)

    Usage:
        class JournalEntry(UUIDPrimaryKeyMixin, models.Model):
            memo = models.TextField()

        entry = JournalEntry.objects.create(memo="Payment completed")
        print(entry.id)  # UUID like: 550e8400-e29b-41d4-a716-446655440000
    """

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
        help_text="Unique identifier for this record",
    )

    class Meta:
        abstract = True
