"""
Admin Input Validation

DESIGN DECISION: Validation happens in two distinct layers:

LAYER 1 - INPUT VALIDATION (this module):
- Code format: 2-6 ASCII letters, upper-cased
- Code is not the base currency
- Name present, short enough, and free of ';' and line breaks
- Rate is a positive number
- This catches typos before anything touches the table

LAYER 2 - TABLE INVARIANTS (RateTable.add / remove):
- Duplicate codes
- Non-positive rates
- Base currency protection

WHY TWO LAYERS:
1. Records loaded from a file skip layer 1 (their codes may be longer,
   lower-case, anything the file holds) but still go through layer 2
2. Better error messages (the admin sees every input problem at once)

IMPORTANT: Validation NEVER silently fixes issues beyond trimming
whitespace and upper-casing the code. It reports them.
"""

from decimal import Decimal
from typing import Optional

from currency_converter.core.conversion import to_decimal
from currency_converter.models.commands import AddCurrencyCommand
from currency_converter.models.currency import (
    MAX_NAME_LENGTH,
    RateRecord,
    ValidationIssue,
    ValidationResult,
)
from currency_converter.services.storage.codec import DELIMITER


MIN_CODE_LENGTH = 2
MAX_CODE_LENGTH = 6


class CurrencyValidator:
    """
    Validates currencies entered through the admin area.
    """

    def __init__(self, base_code: str):
        """
        Initialize validator.

        Args:
            base_code: Code of the base currency, which may never be re-added.
        """
        self._base_code = base_code.strip().upper()

    def _validate_code(self, code: str) -> list[ValidationIssue]:
        issues = []

        if not (MIN_CODE_LENGTH <= len(code) <= MAX_CODE_LENGTH):
            issues.append(ValidationIssue(
                field="code",
                issue_type="invalid_length",
                message=f"Invalid code length. Use {MIN_CODE_LENGTH}–{MAX_CODE_LENGTH} letters.",
                severity="error",
                suggested_fix="Use an ISO-style code such as CHF",
            ))

        if code and not (code.isascii() and code.isalpha()):
            issues.append(ValidationIssue(
                field="code",
                issue_type="invalid_format",
                message="Code must contain only letters.",
                severity="error",
            ))

        if code.upper() == self._base_code:
            issues.append(ValidationIssue(
                field="code",
                issue_type="reserved",
                message=f"{self._base_code} is the base currency and already exists.",
                severity="error",
            ))

        return issues

    def _validate_name(self, name: str) -> list[ValidationIssue]:
        if not name:
            return [ValidationIssue(
                field="name",
                issue_type="missing",
                message="Name cannot be empty.",
                severity="error",
                suggested_fix="Enter a display name such as Swiss Franc",
            )]

        issues = []

        if len(name) > MAX_NAME_LENGTH:
            issues.append(ValidationIssue(
                field="name",
                issue_type="invalid_length",
                message=f"Name is too long. Use at most {MAX_NAME_LENGTH} characters.",
                severity="error",
            ))

        # The currency file holds one CODE;NAME;RATE record per line
        if DELIMITER in name or name.splitlines() != [name]:
            issues.append(ValidationIssue(
                field="name",
                issue_type="invalid_format",
                message=f"Name cannot contain '{DELIMITER}' or line breaks.",
                severity="error",
            ))

        return issues

    def _validate_rate(self, rate_text: str) -> tuple[Optional[Decimal], list[ValidationIssue]]:
        try:
            rate = to_decimal(rate_text)
        except ValueError:
            rate = None

        if rate is None or rate <= 0:
            return None, [ValidationIssue(
                field="rate",
                issue_type="invalid_value",
                message="Rate must be a positive number.",
                severity="error",
                suggested_fix=f"Enter how many {self._base_code} one unit is worth",
            )]
        return rate, []

    def validate_new_currency(self, command: AddCurrencyCommand) -> ValidationResult:
        """
        Check a new currency before it is offered to the table.

        Duplicate detection is left to RateTable.add, which owns the records.

        Returns:
            ValidationResult with the cleaned record when valid
        """
        code = command.code.strip()
        name = command.name.strip()

        # Checked before upper-casing, which can turn one letter into two
        issues = self._validate_code(code)
        issues.extend(self._validate_name(name))
        rate, rate_issues = self._validate_rate(command.rate)
        issues.extend(rate_issues)

        is_valid = not any(issue.severity == "error" for issue in issues)
        record = None
        if is_valid:
            record = RateRecord(code=code.upper(), name=name, rate_to_base=rate)

        return ValidationResult(
            is_valid=is_valid,
            issues=issues,
            record=record,
        )

    def parse_amount(self, text: str) -> tuple[Optional[Decimal], list[ValidationIssue]]:
        """
        Parse an amount typed by a user.

        Only checks that it is a number; the engine rejects negatives.
        """
        try:
            return to_decimal(text), []
        except ValueError:
            return None, [ValidationIssue(
                field="amount",
                issue_type="invalid_format",
                message="Amount must be a valid number.",
                severity="error",
            )]
