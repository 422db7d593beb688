"""
Rate Table Text Codec

Each record is one line of three ';'-separated fields:

    CODE;NAME;RATE

DESIGN DECISION: Parsing and validation are separate layers.
- parse_line only checks structure: three fields, non-empty code and name,
  and a rate that is a finite number (zero and negative rates DO parse)
- table invariants (unique codes, positive rates) are enforced by RateTable

Loading is best-effort: a bad line is skipped, never fatal.
"""

from decimal import Decimal, InvalidOperation
from typing import Iterable

import structlog
from pydantic import ValidationError

from currency_converter.core.errors import ConverterError, ParseFailureError
from currency_converter.core.table import RateTable
from currency_converter.models.currency import RateRecord


DELIMITER = ";"

logger = structlog.get_logger(__name__)


def format_line(record: RateRecord) -> str:
    """Serialize a record as CODE;NAME;RATE."""
    return DELIMITER.join([record.code, record.name, str(record.rate_to_base)])


def parse_line(line: str) -> RateRecord:
    """
    Parse one CODE;NAME;RATE line.

    Raises:
        ParseFailureError: If the line is blank, does not have exactly three
            fields, has an empty code/name, or the rate is not a number.
    """
    if not line or not line.strip():
        raise ParseFailureError(line, "blank line")

    parts = line.strip().split(DELIMITER)
    if len(parts) != 3:
        raise ParseFailureError(line, f"expected 3 fields, got {len(parts)}")

    code, name, rate_text = (part.strip() for part in parts)
    try:
        rate = Decimal(rate_text)
    except InvalidOperation:
        raise ParseFailureError(line, f"rate {rate_text!r} is not a number")

    try:
        return RateRecord(code=code, name=name, rate_to_base=rate)
    except ValidationError as e:
        raise ParseFailureError(line, str(e.errors()[0]["msg"]))


def parse_lines(lines: Iterable[str]) -> list[RateRecord]:
    """Parse every line, silently skipping the ones that fail."""
    records = []
    for line in lines:
        try:
            records.append(parse_line(line))
        except ParseFailureError as e:
            logger.debug("rate_line_skipped", line=e.line, reason=e.reason)
    return records


def load_table(
    serialized_lines: Iterable[str],
    base_currency: RateRecord,
) -> RateTable:
    """
    Build a RateTable from persisted lines (best-effort).

    The base currency always comes first. Lines that do not parse are
    skipped, and so are parsed records the table refuses (duplicates,
    non-positive rates, a second copy of the base currency).
    """
    table = RateTable(base_currency)
    for record in parse_lines(serialized_lines):
        try:
            table.add(record)
        except ConverterError as e:
            logger.debug(
                "rate_record_skipped",
                code=record.code,
                error_kind=e.kind.value,
                reason=e.message,
            )
    return table


def serialize_table(table: RateTable, exclude_code: str) -> list[str]:
    """Serialize all records except exclude_code, in table order."""
    return [
        format_line(record)
        for record in table.list()
        if not record.matches(exclude_code)
    ]
