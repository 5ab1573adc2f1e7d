"""
Payments app configuration.

This app provides payment accounting infrastructure including:
- Double-entry bookkeeping ledger
- Celery task for posting completed payments
"""

from django.apps import AppConfig


class PaymentsConfig(AppConfig):
    """Configuration for the payments application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "payments"
    verbose_name = "Payments"
