"""
Command and Outcome Models

DESIGN DECISION: The front end never manipulates the rate table directly.
It issues one of three commands and receives a typed outcome:

    ConvertCommand         -> ConversionOutcome
    AddCurrencyCommand     -> AdminOutcome
    RemoveCurrencyCommand  -> AdminOutcome

Cancelling is simply not issuing a command. Failures come back as an
ErrorKind plus a message, never as an exception the UI has to guess about.
"""

from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from currency_converter.models.currency import (
    ConversionResult,
    ErrorKind,
    RateRecord,
    ValidationIssue,
)


# =============================================================================
# COMMANDS
# =============================================================================

class ConvertCommand(BaseModel):
    """Convert an amount from one currency to another."""
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    from_code: str
    to_code: str
    amount: Decimal


class AddCurrencyCommand(BaseModel):
    """
    Add a currency to the table.

    Fields are kept as raw text: checking them is the validator's job,
    so a bad rate like "abc" becomes a ValidationIssue, not a crash.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    code: str
    name: str
    rate: str

    @field_validator('rate', mode='before')
    @classmethod
    def rate_as_text(cls, v: Any) -> str:
        return str(v)


class RemoveCurrencyCommand(BaseModel):
    """Remove a currency from the table."""
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    code: str


# =============================================================================
# OUTCOMES
# =============================================================================

class ConversionOutcome(BaseModel):
    """Outcome of a ConvertCommand."""

    success: bool
    error_kind: Optional[ErrorKind] = None
    error_message: Optional[str] = None
    conversion: Optional[ConversionResult] = None


class AdminOutcome(BaseModel):
    """Outcome of an add or remove command."""

    success: bool
    error_kind: Optional[ErrorKind] = None
    error_message: Optional[str] = None
    record: Optional[RateRecord] = Field(
        default=None,
        description="The record that was added or removed"
    )
    issues: list[ValidationIssue] = Field(
        default_factory=list,
        description="Validation issues when error_kind is INVALID_INPUT"
    )
