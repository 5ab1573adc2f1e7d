"""
Celery configuration for the marketplace ledger.

Celery runs the caller side of ledger posting: the payment webhook layer
queues payments.tasks.post_payment_completed_task, and workers post the
payment with retries on transient database errors.

This configuration uses Redis as both the message broker and result backend.
Tasks are auto-discovered from all installed Django apps.

Usage:
    from payments.tasks import post_payment_completed_task

    post_payment_completed_task.delay(str(transaction.id))

For more information, see:
https://docs.celeryq.dev/en/stable/django/first-steps-with-django.html
"""

import os

from celery import Celery

# Set the default Django settings module for the Celery worker
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

app = Celery("config")

# All Celery settings are prefixed with CELERY_ in settings.py
app.config_from_object("django.conf:settings", namespace="CELERY")

# Picks up payments.tasks
app.autodiscover_tasks()
