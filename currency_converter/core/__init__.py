"""Conversion core: rate table, conversion engine and their errors."""

from currency_converter.core.conversion import ConversionEngine, convert, to_decimal
from currency_converter.core.errors import (
    AccessDeniedError,
    BaseCurrencyProtectedError,
    ConverterError,
    CurrencyNotFoundError,
    DuplicateCodeError,
    InvalidInputError,
    InvalidRateError,
    NegativeAmountError,
    ParseFailureError,
    UnknownCurrencyError,
)
from currency_converter.core.table import RateTable

__all__ = [
    "ConversionEngine",
    "RateTable",
    "convert",
    "to_decimal",
    # Errors
    "AccessDeniedError",
    "BaseCurrencyProtectedError",
    "ConverterError",
    "CurrencyNotFoundError",
    "DuplicateCodeError",
    "InvalidInputError",
    "InvalidRateError",
    "NegativeAmountError",
    "ParseFailureError",
    "UnknownCurrencyError",
]
