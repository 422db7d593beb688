"""Tests for flat file storage against tmp_path."""

from datetime import datetime
from decimal import Decimal

import pytest

from currency_converter.models.audit import ConversionLogEntry
from currency_converter.models.currency import RateRecord
from currency_converter.services.storage import (
    FileConversionLogStorage,
    FlatFileRateStorage,
)


@pytest.fixture
def rate_storage(storage_settings, usd, eur):
    return FlatFileRateStorage(storage_settings, default_rates=[usd, eur])


@pytest.fixture
def log_storage(storage_settings):
    return FileConversionLogStorage("KGS", storage_settings)


def make_entry(usd, eur, amount="10"):
    amount = Decimal(amount)
    return ConversionLogEntry(
        timestamp=datetime(2025, 1, 31, 14, 5, 9),
        amount=amount,
        from_record=usd,
        to_record=eur,
        result=amount * usd.rate_to_base / eur.rate_to_base,
    )


class TestFlatFileRateStorage:
    """Tests for the currency file."""

    def test_seed_if_missing_writes_defaults(self, rate_storage, storage_settings):
        """Test the default rates are written on first start."""
        assert rate_storage.seed_if_missing() is True
        content = storage_settings.currency_file_path.read_text(encoding="utf-8")
        assert content == "USD;US Dollar;89\nEUR;Euro;96\n"

    def test_seed_does_not_overwrite(self, rate_storage, storage_settings):
        """Test an existing file is left alone."""
        storage_settings.data_dir.mkdir(parents=True)
        storage_settings.currency_file_path.write_text("GBP;British Pound;112\n", encoding="utf-8")
        assert rate_storage.seed_if_missing() is False
        assert "GBP" in storage_settings.currency_file_path.read_text(encoding="utf-8")

    def test_load_missing_file_gives_base_only(self, rate_storage, base_currency):
        """Test loading without a file yields just the base currency."""
        table = rate_storage.load(base_currency)
        assert table.list() == (base_currency,)

    def test_load_skips_bad_lines(self, rate_storage, storage_settings, base_currency):
        """Test malformed lines are skipped and counted."""
        storage_settings.data_dir.mkdir(parents=True)
        storage_settings.currency_file_path.write_text(
            "USD;US Dollar;89\nbad;line\n\nEUR;Euro;96\nZZZ;Zero;0\n",
            encoding="utf-8",
        )
        table = rate_storage.load(base_currency)
        assert [record.code for record in table.list()] == ["KGS", "USD", "EUR"]
        assert rate_storage.last_skipped_count == 2

    def test_save_rewrites_whole_file(self, rate_storage, storage_settings, base_currency):
        """Test save replaces the file and never writes the base currency."""
        rate_storage.seed_if_missing()
        table = rate_storage.load(base_currency)
        table.add(RateRecord(code="CHF", name="Swiss Franc", rate_to_base=Decimal("95")))
        table.remove("USD")

        rate_storage.save(table)

        content = storage_settings.currency_file_path.read_text(encoding="utf-8")
        assert content == "EUR;Euro;96\nCHF;Swiss Franc;95\n"
        assert rate_storage.load(base_currency).list() == table.list()

    def test_write_base_currency(self, rate_storage, storage_settings, base_currency):
        """Test the base currency gets its own file."""
        rate_storage.write_base_currency(base_currency)
        content = storage_settings.base_currency_file_path.read_text(encoding="utf-8")
        assert content == "KGS;Kyrgyz Som;1\n"

    def test_non_ascii_names_round_trip(self, rate_storage, base_currency):
        """Test UTF-8 names survive a save and load."""
        table = rate_storage.load(base_currency)
        table.add(RateRecord(code="RUB", name="Российский рубль", rate_to_base=Decimal("1.0")))
        rate_storage.save(table)
        assert rate_storage.load(base_currency).find("RUB").name == "Российский рубль"


class TestFileConversionLogStorage:
    """Tests for the conversion log file."""

    def test_does_not_exist_before_first_entry(self, log_storage):
        assert log_storage.exists() is False
        assert log_storage.tail(5) == []

    def test_append_entry(self, log_storage, storage_settings, usd, eur):
        """Test an entry is appended as one readable line."""
        assert log_storage.append_entry(make_entry(usd, eur)) is True
        content = storage_settings.log_file_path.read_text(encoding="utf-8")
        assert content == "2025-01-31 14:05:09 | 10 USD -> 9.27 EUR | Rates to KGS: 89 / 96\n"

    def test_tail_returns_last_lines_in_order(self, log_storage, usd, eur):
        """Test tail returns the newest lines, oldest first."""
        for amount in ["1", "2", "3", "4"]:
            log_storage.append_entry(make_entry(usd, eur, amount))

        lines = log_storage.tail(2)

        assert len(lines) == 2
        assert lines[0].split(" | ")[1].startswith("3 USD")
        assert lines[1].split(" | ")[1].startswith("4 USD")

    def test_tail_more_than_available(self, log_storage, usd, eur):
        log_storage.append_entry(make_entry(usd, eur))
        assert len(log_storage.tail(100)) == 1

    @pytest.mark.parametrize("limit", [0, -1])
    def test_tail_requires_positive_limit(self, log_storage, limit):
        with pytest.raises(ValueError):
            log_storage.tail(limit)
