"""Tests for RateTable invariants."""

from decimal import Decimal

import pytest

from currency_converter.core import (
    BaseCurrencyProtectedError,
    CurrencyNotFoundError,
    DuplicateCodeError,
    InvalidRateError,
    RateTable,
)
from currency_converter.models.currency import ErrorKind, RateRecord


def chf(code="CHF", rate="95"):
    return RateRecord(code=code, name="Swiss Franc", rate_to_base=Decimal(rate))


class TestRateTableConstruction:
    """Tests for building a table."""

    def test_base_currency_comes_first(self, table, base_currency):
        """Test the base currency is the first record."""
        assert table.list()[0] == base_currency
        assert table.base_currency == base_currency

    def test_preserves_insertion_order(self, table):
        """Test records keep the order they were added in."""
        assert [record.code for record in table.list()] == ["KGS", "USD", "EUR"]

    def test_base_rate_must_be_one(self):
        """Test a base currency with another rate is refused."""
        with pytest.raises(InvalidRateError):
            RateTable(RateRecord(code="KGS", name="Kyrgyz Som", rate_to_base=Decimal("2")))

    def test_base_rate_one_in_any_notation(self):
        """1.0 and 1 are the same rate."""
        table = RateTable(RateRecord(code="KGS", name="Kyrgyz Som", rate_to_base=Decimal("1.00")))
        assert len(table) == 1

    def test_duplicate_in_initial_records(self, base_currency, usd):
        """Test duplicates in the initial records are refused."""
        with pytest.raises(DuplicateCodeError):
            RateTable(base_currency, [usd, chf(code="usd")])


class TestRateTableLookup:
    """Tests for find and is_supported."""

    def test_find_is_case_insensitive(self, table, usd):
        """Test lookups ignore case."""
        assert table.find("usd") == usd
        assert table.find("UsD") == usd

    def test_find_unknown_returns_none(self, table):
        """Test not-found is None."""
        assert table.find("XYZ") is None

    def test_is_supported(self, table):
        """Test is_supported mirrors find."""
        assert table.is_supported("eur")
        assert table.is_supported("KGS")
        assert not table.is_supported("CHF")

    def test_list_is_a_snapshot(self, table):
        """Test the listed records cannot be used to change the table."""
        snapshot = table.list()
        assert isinstance(snapshot, tuple)
        table.add(chf())
        assert len(snapshot) == 3
        assert len(table.list()) == 4


class TestRateTableAdd:
    """Tests for add."""

    def test_add_then_find(self, table):
        """Test add followed by find returns the added record."""
        record = chf()
        table.add(record)
        assert table.find("CHF") == record
        assert table.list()[-1] == record

    def test_add_duplicate_any_case(self, table):
        """Test add of an existing code fails and leaves the table unchanged."""
        table.add(chf())
        before = table.list()

        with pytest.raises(DuplicateCodeError) as exc_info:
            table.add(chf(code="chf", rate="100"))

        assert exc_info.value.kind == ErrorKind.DUPLICATE_CODE
        assert exc_info.value.code == "chf"
        assert table.list() == before

    def test_add_base_currency_again(self, table):
        """Test the base currency cannot be duplicated."""
        with pytest.raises(DuplicateCodeError):
            table.add(RateRecord(code="kgs", name="Som", rate_to_base=Decimal("1")))

    @pytest.mark.parametrize("rate", ["0", "-1", "-0.01"])
    def test_add_non_positive_rate(self, table, rate):
        """Test zero and negative rates are refused."""
        with pytest.raises(InvalidRateError) as exc_info:
            table.add(chf(rate=rate))
        assert exc_info.value.kind == ErrorKind.INVALID_RATE
        assert not table.is_supported("CHF")

    def test_duplicate_checked_before_rate(self, table):
        """A duplicate code with a bad rate reports the duplicate."""
        with pytest.raises(DuplicateCodeError):
            table.add(chf(code="USD", rate="0"))


class TestRateTableRemove:
    """Tests for remove."""

    def test_remove_then_find(self, table, usd):
        """Test remove followed by find returns None."""
        removed = table.remove("usd")
        assert removed == usd
        assert table.find("USD") is None
        assert [record.code for record in table.list()] == ["KGS", "EUR"]

    def test_remove_unknown(self, table):
        """Test removing an unknown code fails with not found."""
        with pytest.raises(CurrencyNotFoundError) as exc_info:
            table.remove("CHF")
        assert exc_info.value.kind == ErrorKind.NOT_FOUND
        assert len(table) == 3

    @pytest.mark.parametrize("code", ["KGS", "kgs"])
    def test_remove_base_currency(self, table, code):
        """Test the base currency can never be removed."""
        before = table.list()
        with pytest.raises(BaseCurrencyProtectedError) as exc_info:
            table.remove(code)
        assert exc_info.value.kind == ErrorKind.BASE_CURRENCY_PROTECTED
        assert table.list() == before
