"""Configuration package."""

from currency_converter.config.settings import (
    AdminSettings,
    AppSettings,
    ConverterConfig,
    CurrencySettings,
    Settings,
    StorageSettings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AdminSettings",
    "AppSettings",
    "ConverterConfig",
    "CurrencySettings",
    "Settings",
    "StorageSettings",
    "get_settings",
    "validate_all_settings",
]
