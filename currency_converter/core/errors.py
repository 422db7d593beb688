"""
Converter Errors

Every failure the core can produce is a subclass of ConverterError and
carries an ErrorKind plus the context that caused it (usually the code).
None of them is fatal: the flows catch them and turn them into outcomes.
"""

from decimal import Decimal
from typing import Optional

from currency_converter.models.currency import ErrorKind, ValidationIssue


class ConverterError(Exception):
    """Base exception for converter errors."""

    kind: ErrorKind

    def __init__(self, message: str, code: Optional[str] = None):
        self.code = code
        super().__init__(message)

    @property
    def message(self) -> str:
        return str(self)


class UnknownCurrencyError(ConverterError):
    """A conversion referenced a code that is not in the table."""

    kind = ErrorKind.UNKNOWN_CURRENCY

    def __init__(self, code: str):
        super().__init__(f"Unknown currency code: {code}", code=code)


class NegativeAmountError(ConverterError):
    """A conversion was requested for an amount below zero."""

    kind = ErrorKind.NEGATIVE_AMOUNT

    def __init__(self, amount: Decimal):
        self.amount = amount
        super().__init__("Amount must be non-negative.")


class DuplicateCodeError(ConverterError):
    """The code is already in the table (case-insensitive)."""

    kind = ErrorKind.DUPLICATE_CODE

    def __init__(self, code: str):
        super().__init__(f"Currency {code} already exists.", code=code)


class InvalidRateError(ConverterError):
    """A rate is not usable in the table."""

    kind = ErrorKind.INVALID_RATE

    def __init__(self, code: str, rate: Decimal, message: Optional[str] = None):
        self.rate = rate
        super().__init__(
            message or f"Rate to base for {code} must be positive, got {rate}.",
            code=code,
        )


class CurrencyNotFoundError(ConverterError):
    """A remove targeted a code that is not in the table."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, code: str):
        super().__init__(f"Currency {code} not found.", code=code)


class BaseCurrencyProtectedError(ConverterError):
    """The base currency can never be removed."""

    kind = ErrorKind.BASE_CURRENCY_PROTECTED

    def __init__(self, code: str):
        super().__init__(
            f"{code} is the base currency and cannot be removed.",
            code=code,
        )


class ParseFailureError(ConverterError):
    """A persisted line could not be turned into a RateRecord."""

    kind = ErrorKind.PARSE_FAILURE

    def __init__(self, line: str, reason: str):
        self.line = line
        self.reason = reason
        super().__init__(f"Cannot parse line {line!r}: {reason}")


class InvalidInputError(ConverterError):
    """Admin input failed validation."""

    kind = ErrorKind.INVALID_INPUT

    def __init__(self, issues: list[ValidationIssue], code: Optional[str] = None):
        self.issues = issues
        message = "; ".join(issue.message for issue in issues) or "Invalid input."
        super().__init__(message, code=code)


class AccessDeniedError(ConverterError):
    """Wrong admin credential."""

    kind = ErrorKind.ACCESS_DENIED

    def __init__(self):
        super().__init__("Wrong password.")
