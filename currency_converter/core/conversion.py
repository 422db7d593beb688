"""
Conversion Engine

DESIGN DECISION: Conversion is DETERMINISTIC and goes through the base
currency:

    amount_in_base = amount * from.rate_to_base
    result         = amount_in_base / to.rate_to_base

The result is returned at full Decimal precision. Rounding to two places
happens only when a human looks at it.

Division by zero cannot happen: RateTable guarantees every rate is positive.
"""

from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Callable, Union

from currency_converter.core.errors import (
    NegativeAmountError,
    UnknownCurrencyError,
)
from currency_converter.core.table import RateTable
from currency_converter.models.currency import ConversionResult


Amount = Union[Decimal, int, float, str]


def to_decimal(value: Amount) -> Decimal:
    """
    Convert a value to Decimal.

    Floats go through str() so 0.6 becomes Decimal('0.6').

    Raises:
        ValueError: If the value is not a finite number.
    """
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except (InvalidOperation, TypeError, ValueError):
            raise ValueError(f"Not a number: {value!r}")
    if not result.is_finite():
        raise ValueError(f"Not a finite number: {value!r}")
    return result


class ConversionEngine:
    """
    Converts amounts between currencies of a RateTable.

    GUARANTEES:
    - Negative amounts are rejected before any lookup
    - The source code is resolved before the target code, so when both
      are unknown the error names the source
    - Same-currency conversion returns the amount unchanged
    """

    def __init__(self, clock: Callable[[], datetime] = datetime.now):
        self._clock = clock

    def convert(
        self,
        table: RateTable,
        from_code: str,
        to_code: str,
        amount: Amount,
    ) -> ConversionResult:
        """
        Convert amount of from_code into to_code.

        Raises:
            NegativeAmountError: If amount < 0.
            UnknownCurrencyError: If either code is not in the table.
        """
        amount = to_decimal(amount)
        if amount < 0:
            raise NegativeAmountError(amount)

        from_record = table.find(from_code)
        if from_record is None:
            raise UnknownCurrencyError(from_code)

        to_record = table.find(to_code)
        if to_record is None:
            raise UnknownCurrencyError(to_code)

        amount_in_base = amount * from_record.rate_to_base
        result = amount_in_base / to_record.rate_to_base

        return ConversionResult(
            amount=amount,
            result=result,
            from_record=from_record,
            to_record=to_record,
            converted_at=self._clock(),
        )


def convert(
    table: RateTable,
    from_code: str,
    to_code: str,
    amount: Amount,
) -> ConversionResult:
    """Module-level shortcut for ConversionEngine().convert()."""
    return ConversionEngine().convert(table, from_code, to_code, amount)
