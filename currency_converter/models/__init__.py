"""
Data Models Package

This package contains all Pydantic models used by the currency converter.
All data flowing through the system must conform to these schemas.
"""

from currency_converter.models.currency import (
    ConversionResult,
    ErrorKind,
    RateRecord,
    ValidationIssue,
    ValidationResult,
)
from currency_converter.models.commands import (
    AddCurrencyCommand,
    AdminOutcome,
    ConversionOutcome,
    ConvertCommand,
    RemoveCurrencyCommand,
)
from currency_converter.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
    ConversionLogEntry,
)

__all__ = [
    # Currency models
    "ConversionResult",
    "ErrorKind",
    "RateRecord",
    "ValidationIssue",
    "ValidationResult",
    # Commands
    "AddCurrencyCommand",
    "AdminOutcome",
    "ConversionOutcome",
    "ConvertCommand",
    "RemoveCurrencyCommand",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
    "ConversionLogEntry",
]
