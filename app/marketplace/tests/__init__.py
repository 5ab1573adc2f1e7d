"""
Tests for marketplace app.

This package contains test modules for:
- test_gateways.py: DjangoTransactionGateway tests
"""
