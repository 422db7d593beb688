"""Admin input validation package."""

from currency_converter.validation.validator import CurrencyValidator

__all__ = ["CurrencyValidator"]
