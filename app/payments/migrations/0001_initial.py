"""
Create the double-entry ledger tables.

LedgerAccount, JournalEntry and JournalLine, with the storage constraints
that make account upserts and payment postings idempotent.
"""

import uuid
from decimal import Decimal

import django.db.models.deletion
from django.db import migrations, models

import payments.ledger.models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="LedgerAccount",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        help_text="Unique identifier for this record",
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(
                        auto_now_add=True,
                        db_index=True,
                        help_text="Timestamp when this record was created",
                    ),
                ),
                (
                    "updated_at",
                    models.DateTimeField(
                        auto_now=True,
                        help_text="Timestamp when this record was last modified",
                    ),
                ),
                (
                    "code",
                    models.CharField(
                        help_text="Stable account code, e.g. '1000' or '2000-1a2b3c4d'",
                        max_length=32,
                        unique=True,
                    ),
                ),
                (
                    "name",
                    models.CharField(
                        help_text="Display label of this account",
                        max_length=191,
                    ),
                ),
                (
                    "type",
                    models.CharField(
                        choices=[
                            ("ASSET", "Asset"),
                            ("LIABILITY", "Liability"),
                            ("REVENUE", "Revenue"),
                            ("EXPENSE", "Expense"),
                            ("EQUITY", "Equity"),
                        ],
                        help_text="Category of this account",
                        max_length=16,
                    ),
                ),
                (
                    "owner_id",
                    models.CharField(
                        blank=True,
                        db_index=True,
                        help_text="Id of the user this account tracks (e.g. a farmer)",
                        max_length=64,
                        null=True,
                    ),
                ),
                (
                    "parent",
                    models.ForeignKey(
                        blank=True,
                        help_text="Parent account this one rolls up to",
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="children",
                        to="payments.ledgeraccount",
                    ),
                ),
            ],
            options={
                "ordering": ["code"],
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="JournalEntry",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        help_text="Unique identifier for this record",
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "reference_type",
                    models.CharField(
                        help_text="Kind of source event, e.g. 'payment_completed'",
                        max_length=64,
                    ),
                ),
                (
                    "reference_id",
                    models.CharField(
                        help_text="Id of the source event",
                        max_length=191,
                    ),
                ),
                (
                    "order_id",
                    models.CharField(
                        blank=True,
                        help_text="Id of the originating order",
                        max_length=191,
                        null=True,
                    ),
                ),
                (
                    "currency",
                    models.CharField(
                        default=payments.ledger.models.default_currency,
                        help_text="Currency code of this entry",
                        max_length=8,
                    ),
                ),
                (
                    "memo",
                    models.TextField(
                        blank=True,
                        default="",
                        help_text="Human-readable description of this entry",
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(
                        auto_now_add=True,
                        db_index=True,
                        help_text="Timestamp when this entry was recorded",
                    ),
                ),
            ],
            options={
                "verbose_name_plural": "journal entries",
                "ordering": ["-created_at"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("reference_type", "reference_id"),
                        name="unique_journal_entry_reference",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="JournalLine",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        help_text="Unique identifier for this record",
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "debit",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.00"),
                        help_text="Debit amount (two decimals)",
                        max_digits=14,
                    ),
                ),
                (
                    "credit",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.00"),
                        help_text="Credit amount (two decimals)",
                        max_digits=14,
                    ),
                ),
                (
                    "memo",
                    models.TextField(
                        blank=True,
                        default="",
                        help_text="Line-level annotation",
                    ),
                ),
                (
                    "account",
                    models.ForeignKey(
                        help_text="Account debited or credited",
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="journal_lines",
                        to="payments.ledgeraccount",
                    ),
                ),
                (
                    "entry",
                    models.ForeignKey(
                        help_text="Entry this line belongs to",
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="lines",
                        to="payments.journalentry",
                    ),
                ),
            ],
            options={
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(
                            models.Q(("credit", 0), ("debit__gt", 0)),
                            models.Q(("credit__gt", 0), ("debit", 0)),
                            _connector="OR",
                        ),
                        name="journal_line_one_sided_positive",
                    )
                ],
            },
        ),
    ]
