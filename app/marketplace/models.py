"""
Marketplace models read by the payment ledger.

This module defines the records the ledger consumes:
- Order: A buyer's order of produce from a farmer
- PaymentTransaction: The payment settling an order

Only the fields the ledger depends on are kept here. Product listings,
delivery tracking and the buyer-facing flows belong to the wider platform.

Usage:
    from marketplace.models import Order, PaymentTransaction, TransactionStatus

    order = Order.objects.create(farmer=farmer, total_price=Decimal("1000.00"))
    txn = PaymentTransaction.objects.create(
        order=order,
        amount=order.total_price,
        status=TransactionStatus.COMPLETED,
    )
"""

from __future__ import annotations

from django.conf import settings
from django.db import models

from core.model_mixins import UUIDPrimaryKeyMixin
from core.models import BaseModel


class OrderStatus(models.TextChoices):
    """Lifecycle of a marketplace order."""

    PENDING = "PENDING", "Pending"
    CONFIRMED = "CONFIRMED", "Confirmed"
    IN_TRANSIT = "IN_TRANSIT", "In Transit"
    DELIVERED = "DELIVERED", "Delivered"
    CANCELLED = "CANCELLED", "Cancelled"


class TransactionStatus(models.TextChoices):
    """
    Status of a payment transaction.

    Only COMPLETED transactions are posted to the ledger.
    """

    PENDING = "PENDING", "Pending"
    COMPLETED = "COMPLETED", "Completed"
    FAILED = "FAILED", "Failed"


class Order(UUIDPrimaryKeyMixin, BaseModel):
    """
    An order placed by a buyer with a farmer.

    Fields:
        id: UUID primary key (from UUIDPrimaryKeyMixin)
        farmer: User selling the produce (receives the payable)
        buyer: User who placed the order (optional for guest checkout)
        total_price: Order total in the payment currency
        status: Current OrderStatus
        created_at/updated_at: Timestamps (from BaseModel)
    """

    farmer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="farmer_orders",
        help_text="Farmer selling this order",
    )
    buyer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="buyer_orders",
        help_text="Buyer who placed this order",
    )
    total_price = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        help_text="Order total",
    )
    status = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.PENDING,
        db_index=True,
        help_text="Current status of this order",
    )

    def __str__(self) -> str:
        """Return string representation."""
        return f"Order({self.id}, {self.total_price}, {self.status})"


class PaymentTransaction(UUIDPrimaryKeyMixin, BaseModel):
    """
    Payment settling an order, as reported by the payment provider.

    The ledger posts each COMPLETED transaction exactly once and stores the
    resulting journal entry id in ledger_entry_id.

    Fields:
        id: UUID primary key (idempotency reference of the ledger entry)
        order: The order this payment settles
        amount: Gross amount paid by the buyer
        currency: Currency code
        status: Current TransactionStatus
        provider: Payment provider name (e.g. 'mtn_momo')
        provider_reference: Provider-side id of the payment
        ledger_entry_id: Id of the journal entry posted for this payment
    """

    order = models.OneToOneField(
        Order,
        on_delete=models.PROTECT,
        related_name="payment_transaction",
        help_text="Order settled by this payment",
    )
    amount = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        help_text="Gross amount paid",
    )
    currency = models.CharField(
        max_length=8,
        default="UGX",
        help_text="Currency code of this payment",
    )
    status = models.CharField(
        max_length=20,
        choices=TransactionStatus.choices,
        default=TransactionStatus.PENDING,
        db_index=True,
        help_text="Current status of this payment",
    )
    provider = models.CharField(
        max_length=50,
        blank=True,
        default="",
        help_text="Payment provider that processed this payment",
    )
    provider_reference = models.CharField(
        max_length=191,
        blank=True,
        default="",
        db_index=True,
        help_text="Provider-side reference of this payment",
    )
    ledger_entry_id = models.UUIDField(
        null=True,
        blank=True,
        help_text="Journal entry posted for this payment",
    )

    def __str__(self) -> str:
        """Return string representation."""
        return f"PaymentTransaction({self.id}, {self.amount} {self.currency}, {self.status})"

    @property
    def is_posted(self) -> bool:
        return self.ledger_entry_id is not None
