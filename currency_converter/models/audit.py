"""
Audit Models for the Currency Converter

Two kinds of records are produced:
1. ConversionLogEntry - the human-readable, append-only conversion log
   that users can page through in the UI
2. AuditEvent - structured events (admin changes, rejections, failures)
   written to the local structured log

DESIGN DECISION: Both are append-only. We never delete or modify them.
"""

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field

from currency_converter.models.currency import RateRecord


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


# Codes in rejections come straight from user input and can be any length.
MAX_CODE_IN_DESCRIPTION = 40


def _clip(code: str) -> str:
    if len(code) <= MAX_CODE_IN_DESCRIPTION:
        return code
    return code[:MAX_CODE_IN_DESCRIPTION] + "..."


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Conversions
    CONVERSION_COMPLETED = "conversion_completed"
    CONVERSION_REJECTED = "conversion_rejected"

    # Rate table lifecycle
    TABLE_LOADED = "table_loaded"
    TABLE_SEEDED = "table_seeded"
    TABLE_SAVED = "table_saved"

    # Admin actions
    ADMIN_ACCESS_GRANTED = "admin_access_granted"
    ADMIN_ACCESS_DENIED = "admin_access_denied"
    CURRENCY_ADDED = "currency_added"
    CURRENCY_REMOVED = "currency_removed"
    MUTATION_REJECTED = "mutation_rejected"

    # System events
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.

    entity_code is the currency code the event is about, when there is one.
    """

    timestamp: datetime = Field(
        default_factory=_utc_now,
        description="When the event occurred (UTC)"
    )
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )
    entity_code: Optional[str] = Field(
        default=None,
        description="Currency code this event relates to"
    )
    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )
    error_code: Optional[str] = None
    error_message: Optional[str] = None
    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_code": self.entity_code,
            "description": self.description,
            "details": self.details,
            "error_code": self.error_code,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class ConversionLogEntry(BaseModel):
    """
    One line of the conversion log.

    Carries exactly what the engine hands to the log after a successful
    conversion: timestamp, amount, both records and the result.
    """

    timestamp: datetime
    amount: Decimal
    from_record: RateRecord
    to_record: RateRecord
    result: Decimal

    def to_log_line(self, base_code: str) -> str:
        """
        Format as a single human-readable line:

            2025-01-31 14:05:09 | 10 USD -> 9.27 EUR | Rates to KGS: 89 / 96
        """
        return (
            f"{self.timestamp:%Y-%m-%d %H:%M:%S} | "
            f"{self.amount} {self.from_record.code} -> "
            f"{self.result:.2f} {self.to_record.code} | "
            f"Rates to {base_code}: "
            f"{self.from_record.rate_to_base} / {self.to_record.rate_to_base}"
        )

    def to_log_dict(self) -> dict:
        return {
            "timestamp": self.timestamp.isoformat(),
            "amount": str(self.amount),
            "from_code": self.from_record.code,
            "to_code": self.to_record.code,
            "from_rate": str(self.from_record.rate_to_base),
            "to_rate": str(self.to_record.rate_to_base),
            "result": str(self.result),
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.currency_added(record)
        event = AuditEventBuilder.mutation_rejected("add", "CHF", "duplicate_code", msg)
    """

    @staticmethod
    def conversion_rejected(
        from_code: str,
        to_code: str,
        amount: str,
        error_code: str,
        error_message: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CONVERSION_REJECTED,
            severity=AuditSeverity.WARNING,
            description=f"Conversion rejected: {_clip(from_code)} -> {_clip(to_code)}",
            details={
                "from_code": from_code,
                "to_code": to_code,
                "amount": amount,
            },
            error_code=error_code,
            error_message=error_message,
            is_user_action=True,
        )

    @staticmethod
    def table_loaded(
        base_code: str,
        record_count: int,
        skipped_count: int,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TABLE_LOADED,
            entity_code=base_code,
            description=f"Rate table loaded with {record_count} currencies",
            details={
                "record_count": record_count,
                "skipped_count": skipped_count,
            },
        )

    @staticmethod
    def table_seeded(
        path: str,
        record_count: int,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TABLE_SEEDED,
            description=f"Currency file created from {record_count} default rates",
            details={
                "path": path,
                "record_count": record_count,
            },
        )

    @staticmethod
    def table_saved(
        path: str,
        record_count: int,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TABLE_SAVED,
            description=f"Currency file rewritten with {record_count} currencies",
            details={
                "path": path,
                "record_count": record_count,
            },
        )

    @staticmethod
    def admin_access(granted: bool) -> AuditEvent:
        if granted:
            return AuditEvent(
                event_type=AuditEventType.ADMIN_ACCESS_GRANTED,
                description="Admin access granted",
                is_user_action=True,
            )
        return AuditEvent(
            event_type=AuditEventType.ADMIN_ACCESS_DENIED,
            severity=AuditSeverity.WARNING,
            description="Admin access denied: wrong password",
            is_user_action=True,
        )

    @staticmethod
    def currency_added(record: RateRecord) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CURRENCY_ADDED,
            entity_code=record.code,
            description=f"Currency added: {record.code} ({record.name})",
            details={
                "name": record.name,
                "rate_to_base": str(record.rate_to_base),
            },
            is_user_action=True,
        )

    @staticmethod
    def currency_removed(record: RateRecord) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CURRENCY_REMOVED,
            entity_code=record.code,
            description=f"Currency removed: {record.code} ({record.name})",
            details={
                "name": record.name,
                "rate_to_base": str(record.rate_to_base),
            },
            is_user_action=True,
        )

    @staticmethod
    def mutation_rejected(
        action: str,
        code: str,
        error_code: str,
        error_message: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.MUTATION_REJECTED,
            severity=AuditSeverity.WARNING,
            entity_code=code,
            description=f"Currency {action} rejected for {_clip(code) or '<empty>'}",
            details={"action": action},
            error_code=error_code,
            error_message=error_message,
            is_user_action=True,
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
        )
