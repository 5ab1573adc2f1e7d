"""
Tests for the platform fee policy.

Covers rate resolution (bounds, non-numeric values), half-up rounding to
cents and the gross = fee + farmer_net identity.
"""

import logging
from decimal import Decimal

import pytest

from payments.ledger.fees import (
    DEFAULT_FEE_RATE,
    FeePolicy,
    resolve_fee_rate,
    round2,
    to_decimal,
)


class TestToDecimal:
    """Tests for to_decimal()."""

    def test_passes_decimals_through(self):
        value = Decimal("12.345")
        assert to_decimal(value) is value

    def test_converts_floats_through_their_repr(self):
        assert to_decimal(0.1) == Decimal("0.1")

    def test_converts_strings_and_ints(self):
        assert to_decimal(" 1000.50 ") == Decimal("1000.50")
        assert to_decimal(7) == Decimal("7")

    @pytest.mark.parametrize("value", [None, True, False, "abc", "", "1,000", object()])
    def test_returns_none_for_non_numeric_values(self, value):
        assert to_decimal(value) is None


class TestRound2:
    """Tests for round2() - half away from zero, to cents."""

    @pytest.mark.parametrize(
        "amount,expected",
        [
            ("0.005", "0.01"),
            ("0.015", "0.02"),
            ("2.675", "2.68"),
            ("0.004", "0.00"),
            ("-0.005", "-0.01"),
            ("1000", "1000.00"),
        ],
    )
    def test_rounds_half_up(self, amount, expected):
        assert round2(Decimal(amount)) == Decimal(expected)

    def test_result_has_two_decimal_places(self):
        assert round2(Decimal("5")).as_tuple().exponent == -2


class TestResolveFeeRate:
    """Tests for resolve_fee_rate()."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("0.02", "0.02"),
            ("0.05", "0.05"),
            ("0", "0"),
            ("0.2", "0.2"),
            (0.1, "0.1"),
            (Decimal("0.15"), "0.15"),
        ],
    )
    def test_accepts_rates_within_bounds(self, raw, expected):
        assert resolve_fee_rate(raw) == Decimal(expected)

    @pytest.mark.parametrize("raw", [None, ""])
    def test_missing_rate_uses_default(self, raw):
        assert resolve_fee_rate(raw) == DEFAULT_FEE_RATE

    @pytest.mark.parametrize("raw", ["0.5", "0.2000001", "-0.01", "1", 5])
    def test_out_of_bounds_rate_uses_default(self, raw):
        assert resolve_fee_rate(raw) == DEFAULT_FEE_RATE

    @pytest.mark.parametrize("raw", ["abc", "nan", "NaN", "inf", "-Infinity", True])
    def test_non_numeric_rate_uses_default(self, raw):
        assert resolve_fee_rate(raw) == DEFAULT_FEE_RATE

    def test_unusable_rate_is_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="payments.ledger.fees"):
            resolve_fee_rate("0.5")

        assert "outside" in caplog.text


class TestFeePolicy:
    """Tests for FeePolicy."""

    def test_default_rate(self):
        assert FeePolicy().rate == DEFAULT_FEE_RATE

    def test_from_settings_reads_configured_rate(self, settings):
        settings.PLATFORM_FEE_RATE = "0.05"

        assert FeePolicy.from_settings().rate == Decimal("0.05")

    def test_from_settings_reads_rate_at_call_time(self, settings):
        settings.PLATFORM_FEE_RATE = "0.05"
        first = FeePolicy.from_settings()
        settings.PLATFORM_FEE_RATE = "0.1"
        second = FeePolicy.from_settings()

        assert first.rate == Decimal("0.05")
        assert second.rate == Decimal("0.1")

    def test_from_settings_out_of_bounds_uses_default(self, settings):
        settings.PLATFORM_FEE_RATE = "0.5"

        assert FeePolicy.from_settings().rate == DEFAULT_FEE_RATE

    def test_split_default_rate(self):
        split = FeePolicy("0.02").split(Decimal("1000.00"))

        assert split.gross == Decimal("1000.00")
        assert split.fee == Decimal("20.00")
        assert split.farmer_net == Decimal("980.00")
        assert split.rate == Decimal("0.02")

    def test_split_rounds_gross_to_cents(self):
        split = FeePolicy("0.02").split(Decimal("10.005"))

        assert split.gross == Decimal("10.01")
        assert split.fee == Decimal("0.20")
        assert split.farmer_net == Decimal("9.81")

    def test_fee_rounds_half_up(self):
        # 0.25 * 0.02 = 0.005 -> 0.01
        assert FeePolicy("0.02").compute_fee(Decimal("0.25")) == Decimal("0.01")

    def test_zero_rate_has_no_fee(self):
        split = FeePolicy("0").split(Decimal("500.00"))

        assert split.fee == Decimal("0.00")
        assert split.farmer_net == Decimal("500.00")

    def test_tiny_gross_has_no_fee(self):
        split = FeePolicy("0.02").split(Decimal("0.01"))

        assert split.fee == Decimal("0.00")
        assert split.farmer_net == Decimal("0.01")

    @pytest.mark.parametrize(
        "gross", ["0.01", "0.99", "33.33", "99.99", "1234.56", "999999.99"]
    )
    @pytest.mark.parametrize("rate", ["0", "0.02", "0.075", "0.2"])
    def test_fee_plus_net_equals_gross(self, gross, rate):
        split = FeePolicy(rate).split(Decimal(gross))

        assert split.fee + split.farmer_net == split.gross
        assert split.farmer_net >= 0
