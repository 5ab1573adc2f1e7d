"""
Tests for payments app.

This package contains test modules for:
- test_tasks.py: Celery posting task tests

Ledger tests live in payments/ledger/tests/.

Usage:
    pytest payments/tests/
    pytest payments/ledger/tests/
"""
