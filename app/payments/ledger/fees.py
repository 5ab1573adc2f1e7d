"""
Platform fee policy.

The platform keeps a flat percentage of every completed payment; the rest
is payable to the farmer. The rate comes from configuration
(settings.PLATFORM_FEE_RATE) and is read at call time.

Rate resolution:
    - Missing, non-numeric or non-finite values fall back to 2%
    - Values outside the closed interval [0, 0.2] fall back to 2%

Rounding:
    All amounts are rounded to cents, half away from zero, using Decimal
    arithmetic. Because farmer_net = gross - fee, the debit (gross) always
    equals the credits (farmer_net + fee) to the cent.

Usage:
    from payments.ledger.fees import FeePolicy

    policy = FeePolicy.from_settings()
    split = policy.split(Decimal("1000.00"))
    split.fee         # Decimal('20.00')
    split.farmer_net  # Decimal('980.00')
"""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import TYPE_CHECKING

from django.conf import settings

from .types import FeeSplit

if TYPE_CHECKING:
    from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_FEE_RATE = Decimal("0.02")
MIN_FEE_RATE = Decimal("0")
MAX_FEE_RATE = Decimal("0.2")
CENT = Decimal("0.01")


def to_decimal(value: Any) -> Decimal | None:
    """
    Convert a configured or stored amount to Decimal.

    Floats go through str() so 0.1 becomes Decimal('0.1') rather than its
    binary expansion.

    Returns:
        The Decimal value, or None when the value is not numeric
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None


def round2(amount: Decimal) -> Decimal:
    """Round to two decimal places, half away from zero."""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def resolve_fee_rate(raw_rate: Any) -> Decimal:
    """
    Interpret a configured fee rate.

    Args:
        raw_rate: Configured value (string from the environment, number, None)

    Returns:
        The rate, or DEFAULT_FEE_RATE when it is unusable
    """
    if raw_rate is None or raw_rate == "":
        return DEFAULT_FEE_RATE

    rate = to_decimal(raw_rate)
    if rate is None or not rate.is_finite():
        logger.warning(
            f"Ignoring non-numeric platform fee rate {raw_rate!r}, "
            f"using {DEFAULT_FEE_RATE}"
        )
        return DEFAULT_FEE_RATE

    if rate < MIN_FEE_RATE or rate > MAX_FEE_RATE:
        logger.warning(
            f"Platform fee rate {rate} outside [{MIN_FEE_RATE}, {MAX_FEE_RATE}], "
            f"using {DEFAULT_FEE_RATE}"
        )
        return DEFAULT_FEE_RATE

    return rate


class FeePolicy:
    """
    Computes the platform fee for a gross payment.

    The configured rate is resolved once, when the policy is built.
    Build a new policy per posting so configuration changes apply
    to the next call.

    Example:
        policy = FeePolicy("0.5")   # out of bounds
        policy.rate                 # Decimal('0.02')
        policy.compute_fee(Decimal("1000.00"))  # Decimal('20.00')
    """

    def __init__(self, raw_rate: Any = None):
        self.rate = resolve_fee_rate(raw_rate)

    @classmethod
    def from_settings(cls) -> FeePolicy:
        """Build a policy from settings.PLATFORM_FEE_RATE."""
        return cls(getattr(settings, "PLATFORM_FEE_RATE", None))

    def compute_fee(self, gross: Decimal) -> Decimal:
        return round2(gross * self.rate)

    def split(self, gross: Decimal) -> FeeSplit:
        """
        Split a gross amount into fee and farmer net.

        Args:
            gross: Gross payment amount

        Returns:
            FeeSplit with gross, fee and farmer_net rounded to cents
        """
        gross = round2(gross)
        fee = self.compute_fee(gross)
        farmer_net = round2(gross - fee)
        return FeeSplit(gross=gross, fee=fee, farmer_net=farmer_net, rate=self.rate)
