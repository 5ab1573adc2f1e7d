"""
Pytest fixtures for ledger tests.

Sections:
    - Configuration Fixtures: Fee rate settings
    - Gateway Fixtures: In-memory transaction gateway and posting service
    - Event Fixtures: Completed payment events
"""

import pytest

from payments.ledger.services import PostingService
from payments.ledger.tests.factories import (
    InMemoryTransactionGateway,
    PaymentCompletedEventFactory,
)


# ==========================================================================
# Configuration Fixtures
# ==========================================================================


@pytest.fixture
def fee_rate(settings):
    """Default 2% platform fee, independent of the environment."""
    settings.PLATFORM_FEE_RATE = "0.02"
    return settings.PLATFORM_FEE_RATE


# ==========================================================================
# Gateway Fixtures
# ==========================================================================


@pytest.fixture
def gateway():
    """Empty in-memory gateway; add events with gateway.add()."""
    return InMemoryTransactionGateway()


@pytest.fixture
def service(gateway, fee_rate):
    """PostingService reading from the in-memory gateway."""
    return PostingService(gateway=gateway)


# ==========================================================================
# Event Fixtures
# ==========================================================================


@pytest.fixture
def completed_event(gateway):
    """
    Completed payment of 1000.00 UGX, registered with the gateway.
    """
    return gateway.add(
        PaymentCompletedEventFactory(farmer_name="Amina Nakato")
    )
