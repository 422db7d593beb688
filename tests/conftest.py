"""Shared fixtures: a small rate table and converter configuration."""

from datetime import datetime
from decimal import Decimal

import pytest
from pydantic import SecretStr

from currency_converter.config import ConverterConfig, StorageSettings
from currency_converter.core import RateTable
from currency_converter.models.currency import RateRecord


@pytest.fixture
def base_currency():
    return RateRecord(code="KGS", name="Kyrgyz Som", rate_to_base=Decimal("1"))


@pytest.fixture
def usd():
    return RateRecord(code="USD", name="US Dollar", rate_to_base=Decimal("89"))


@pytest.fixture
def eur():
    return RateRecord(code="EUR", name="Euro", rate_to_base=Decimal("96"))


@pytest.fixture
def table(base_currency, usd, eur):
    """[(KGS, 1), (USD, 89), (EUR, 96)]"""
    return RateTable(base_currency, [usd, eur])


@pytest.fixture
def converter_config(base_currency, usd, eur):
    return ConverterConfig(
        admin_credential=SecretStr("s3cret"),
        default_rates=[usd, eur],
        base_currency=base_currency,
    )


@pytest.fixture
def storage_settings(tmp_path):
    return StorageSettings(
        data_dir=tmp_path / "data",
        logs_dir=tmp_path / "logs",
    )


@pytest.fixture
def fixed_clock():
    moment = datetime(2025, 1, 31, 14, 5, 9)
    return lambda: moment
