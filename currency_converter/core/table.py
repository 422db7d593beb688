"""
Rate Table

The single owner of the currency records. All mutation goes through
add() and remove(), so the invariants hold after every call:

- codes are unique under case-insensitive comparison
- the base currency is always present, first, with a rate of exactly 1
- every record has a positive rate (so conversion never divides by zero)

Lookups are linear scans. Tables hold tens of entries, not thousands.
"""

from decimal import Decimal
from typing import Iterable, Iterator, Optional

from currency_converter.core.errors import (
    BaseCurrencyProtectedError,
    CurrencyNotFoundError,
    DuplicateCodeError,
    InvalidRateError,
)
from currency_converter.models.currency import RateRecord


class RateTable:
    """
    Ordered, insertion-preserving collection of RateRecords.

    The caller is responsible for persisting the table after a
    successful add or remove.
    """

    def __init__(
        self,
        base_currency: RateRecord,
        records: Iterable[RateRecord] = (),
    ):
        """
        Initialize the table with its base currency.

        Args:
            base_currency: The reference currency. Its rate must be exactly 1.
            records: Further records, added in order through add().

        Raises:
            InvalidRateError: If the base currency's rate is not 1.
            DuplicateCodeError / InvalidRateError: If a record breaks an invariant.
        """
        if base_currency.rate_to_base != Decimal(1):
            raise InvalidRateError(
                base_currency.code,
                base_currency.rate_to_base,
                message=(
                    f"Base currency {base_currency.code} must have a rate of 1, "
                    f"got {base_currency.rate_to_base}."
                ),
            )
        self._base = base_currency
        self._records: list[RateRecord] = [base_currency]
        for record in records:
            self.add(record)

    @property
    def base_currency(self) -> RateRecord:
        return self._base

    def find(self, code: str) -> Optional[RateRecord]:
        """Case-insensitive lookup. Returns None when not found."""
        for record in self._records:
            if record.matches(code):
                return record
        return None

    def is_supported(self, code: str) -> bool:
        return self.find(code) is not None

    def is_base(self, code: str) -> bool:
        return self._base.matches(code)

    def add(self, record: RateRecord) -> None:
        """
        Append a record.

        Raises:
            DuplicateCodeError: If the code is already present (any case).
            InvalidRateError: If rate_to_base <= 0.
        """
        if self.is_supported(record.code):
            raise DuplicateCodeError(record.code)
        if record.rate_to_base <= 0:
            raise InvalidRateError(record.code, record.rate_to_base)
        self._records.append(record)

    def remove(self, code: str) -> RateRecord:
        """
        Remove the record matching code and return it.

        Raises:
            CurrencyNotFoundError: If no record matches.
            BaseCurrencyProtectedError: If code is the base currency.
        """
        record = self.find(code)
        if record is None:
            raise CurrencyNotFoundError(code)
        if record is self._base:
            raise BaseCurrencyProtectedError(self._base.code)
        self._records.remove(record)
        return record

    def list(self) -> tuple[RateRecord, ...]:
        """Read-only snapshot in insertion order."""
        return tuple(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[RateRecord]:
        return iter(self.list())

    def __repr__(self) -> str:
        codes = ", ".join(record.code for record in self._records)
        return f"RateTable(base={self._base.code}, codes=[{codes}])"
