"""Tests for the conversion engine."""

from decimal import Decimal

import pytest

from currency_converter.core import (
    ConversionEngine,
    NegativeAmountError,
    UnknownCurrencyError,
    convert,
    to_decimal,
)
from currency_converter.models.currency import ErrorKind


class TestConvert:
    """Tests for ConversionEngine.convert."""

    def test_usd_to_eur(self, table):
        """10 USD = 10 * 89 / 96 EUR."""
        conversion = convert(table, "USD", "EUR", Decimal("10"))
        assert conversion.result == Decimal("10") * Decimal("89") / Decimal("96")
        assert str(conversion.result).startswith("9.2708333")

    def test_eur_to_usd_round_trip(self, table):
        """Converting back returns the original amount within precision."""
        there = convert(table, "USD", "EUR", Decimal("10"))
        back = convert(table, "EUR", "USD", there.result)
        assert abs(back.result - Decimal("10")) < Decimal("1e-20")

    def test_round_trip_from_rounded_value(self, table):
        """EUR -> USD of 9.2708333 is approximately 10."""
        back = convert(table, "EUR", "USD", Decimal("9.2708333"))
        assert abs(back.result - Decimal("10")) < Decimal("0.00001")

    @pytest.mark.parametrize("code", ["KGS", "USD", "EUR"])
    @pytest.mark.parametrize("amount", ["0", "1", "10", "123.45", "0.0075"])
    def test_same_currency_is_identity(self, table, code, amount):
        """Converting a currency to itself returns the amount exactly."""
        assert convert(table, code, code, Decimal(amount)).result == Decimal(amount)

    def test_to_base(self, table):
        """Converting into the base currency multiplies by the rate."""
        assert convert(table, "USD", "KGS", Decimal("2")).result == Decimal("178")

    def test_codes_are_case_insensitive(self, table, usd, eur):
        """Test lowercase codes resolve and the records are returned."""
        conversion = convert(table, "usd", "eur", Decimal("1"))
        assert conversion.from_record == usd
        assert conversion.to_record == eur

    def test_zero_amount(self, table):
        """Zero is a valid amount."""
        assert convert(table, "USD", "EUR", Decimal("0")).result == 0

    def test_float_amount_goes_through_str(self, table):
        """Test floats are converted without binary noise."""
        conversion = convert(table, "KGS", "KGS", 0.6)
        assert conversion.amount == Decimal("0.6")

    def test_uses_clock(self, table, fixed_clock):
        """Test the conversion time comes from the injected clock."""
        conversion = ConversionEngine(clock=fixed_clock).convert(table, "USD", "EUR", 1)
        assert conversion.converted_at == fixed_clock()


class TestConvertErrors:
    """Tests for conversion failures."""

    def test_negative_amount(self, table):
        """Test negative amounts fail."""
        with pytest.raises(NegativeAmountError) as exc_info:
            convert(table, "USD", "EUR", Decimal("-1"))
        assert exc_info.value.kind == ErrorKind.NEGATIVE_AMOUNT

    def test_negative_amount_checked_before_codes(self, table):
        """Negative amount wins even when both codes are unknown."""
        with pytest.raises(NegativeAmountError):
            convert(table, "XXX", "YYY", Decimal("-5"))

    def test_unknown_from_code(self, table):
        """Test an unknown source code is named."""
        with pytest.raises(UnknownCurrencyError) as exc_info:
            convert(table, "XXX", "EUR", Decimal("1"))
        assert exc_info.value.code == "XXX"
        assert exc_info.value.kind == ErrorKind.UNKNOWN_CURRENCY

    def test_unknown_to_code(self, table):
        """Test an unknown target code is named."""
        with pytest.raises(UnknownCurrencyError) as exc_info:
            convert(table, "USD", "YYY", Decimal("1"))
        assert exc_info.value.code == "YYY"

    def test_both_unknown_names_from_code(self, table):
        """When both codes are unknown the source code is reported."""
        with pytest.raises(UnknownCurrencyError) as exc_info:
            convert(table, "XXX", "YYY", Decimal("1"))
        assert exc_info.value.code == "XXX"
        assert "XXX" in str(exc_info.value)


class TestToDecimal:
    """Tests for the amount coercion helper."""

    @pytest.mark.parametrize("value, expected", [
        ("10", Decimal("10")),
        (" 2.5 ", Decimal("2.5")),
        (3, Decimal("3")),
        (0.1, Decimal("0.1")),
        (Decimal("7.25"), Decimal("7.25")),
    ])
    def test_valid_values(self, value, expected):
        assert to_decimal(value) == expected

    @pytest.mark.parametrize("value", ["abc", "", "1,5", "NaN", "Infinity", None])
    def test_invalid_values(self, value):
        with pytest.raises(ValueError):
            to_decimal(value)
