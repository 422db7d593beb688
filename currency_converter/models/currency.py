"""
Core Data Models for the Currency Converter

These models define the values flowing through the conversion engine:
1. RateRecord - one currency and its rate against the base currency
2. ConversionResult - the outcome of a single conversion
3. ValidationIssue / ValidationResult - admin input checks

DESIGN DECISION: Money is always Decimal. Floats coming from a front end are
converted through str() so that 0.6 stays 0.6 instead of 0.59999...
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class ErrorKind(str, Enum):
    """
    Every typed failure the converter can report.

    The front end decides how to present each kind; none of them is fatal.
    """
    UNKNOWN_CURRENCY = "unknown_currency"
    NEGATIVE_AMOUNT = "negative_amount"
    DUPLICATE_CODE = "duplicate_code"
    INVALID_RATE = "invalid_rate"
    NOT_FOUND = "not_found"
    BASE_CURRENCY_PROTECTED = "base_currency_protected"
    PARSE_FAILURE = "parse_failure"
    INVALID_INPUT = "invalid_input"
    ACCESS_DENIED = "access_denied"


# =============================================================================
# RATE MODELS
# =============================================================================

MAX_RECORD_CODE_LENGTH = 20
MAX_NAME_LENGTH = 100


class RateRecord(BaseModel):
    """
    One currency in the rate table.

    rate_to_base means "1 unit of code equals rate_to_base units of the
    base currency".

    IMPORTANT: Construction only requires a finite number for the rate.
    Positivity is a table invariant and is enforced by RateTable.add,
    so a record parsed from a file with a zero rate can still be built
    and then rejected at the table level.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    code: str = Field(
        ...,
        min_length=1,
        max_length=MAX_RECORD_CODE_LENGTH,
        description="Currency code (e.g., USD)"
    )
    name: str = Field(
        ...,
        min_length=1,
        max_length=MAX_NAME_LENGTH,
        description="Display name (e.g., US Dollar)"
    )
    rate_to_base: Decimal = Field(
        ...,
        description="Units of base currency per 1 unit of this currency"
    )

    @field_validator('rate_to_base')
    @classmethod
    def reject_non_finite(cls, v: Decimal) -> Decimal:
        """NaN and Infinity are not rates."""
        if not v.is_finite():
            raise ValueError(f"Rate must be a finite number, got {v}")
        return v

    def matches(self, code: str) -> bool:
        """Case-insensitive code comparison."""
        return self.code.casefold() == code.strip().casefold()


class ConversionResult(BaseModel):
    """
    Result of converting an amount between two currencies.

    The result keeps full Decimal precision. Rounding to two places is a
    display concern handled by summary().
    """
    model_config = ConfigDict(frozen=True)

    amount: Decimal = Field(
        ...,
        ge=0,
        description="Amount in the source currency"
    )
    result: Decimal = Field(
        ...,
        description="Unrounded amount in the target currency"
    )
    from_record: RateRecord
    to_record: RateRecord
    converted_at: datetime = Field(
        default_factory=datetime.now,
        description="Local time of the conversion"
    )

    def summary(self, places: int = 2) -> str:
        """Human-readable line, e.g. '10 USD = 9.27 EUR'."""
        return (
            f"{self.amount} {self.from_record.code} = "
            f"{self.result:.{places}f} {self.to_record.code}"
        )


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found in admin input."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_format', 'reserved')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )
    suggested_fix: Optional[str] = Field(
        default=None,
        description="Suggested fix if available"
    )


class ValidationResult(BaseModel):
    """
    Result of validating a new currency entered by an admin.

    When the input is valid, record holds the cleaned RateRecord
    (code upper-cased, whitespace stripped, rate parsed).
    """

    is_valid: bool = Field(
        ...,
        description="Overall validation result"
    )
    issues: list[ValidationIssue] = Field(
        default_factory=list,
        description="All validation issues found"
    )
    record: Optional[RateRecord] = None

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")

    @property
    def messages(self) -> list[str]:
        return [issue.message for issue in self.issues]
