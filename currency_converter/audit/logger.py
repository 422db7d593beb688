"""
Audit Logger

DESIGN DECISION: Every conversion and every admin change is logged.
This provides:
1. A conversion history users can page through
2. Debugging capability
3. Accountability for changes to the rate table

The audit logger:
- Always logs locally through structlog
- Persists conversions to the conversion log storage when one is configured
- Gracefully handles storage failures (doesn't crash the app if logging fails)
"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Optional

import structlog

from currency_converter.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    ConversionLogEntry,
)
from currency_converter.models.currency import RateRecord
from currency_converter.services.storage import ConversionLogStorageInterface


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: str = "INFO") -> None:
    """Set the stdlib level that structlog's filter_by_level honours."""
    logging.basicConfig(format="%(message)s", level=level)
    logging.getLogger().setLevel(level)


class ConversionLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. The conversion log file (conversions only, for user visibility)
    """

    def __init__(
        self,
        storage: Optional[ConversionLogStorageInterface] = None,
    ):
        """
        Initialize the logger.

        Args:
            storage: Conversion log backend.
                    If None, only logs locally.
        """
        self._storage = storage
        self._logger = structlog.get_logger("currency_converter.audit")

    @property
    def storage(self) -> Optional[ConversionLogStorageInterface]:
        return self._storage

    def log(self, event: AuditEvent) -> None:
        """Log an audit event locally at its severity."""
        log_dict = event.to_log_dict()

        if event.severity.value == "error":
            self._logger.error("audit_event", **log_dict)
        elif event.severity.value == "warning":
            self._logger.warning("audit_event", **log_dict)
        elif event.severity.value == "debug":
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

    def log_conversion(
        self,
        timestamp: datetime,
        amount: Decimal,
        from_record: RateRecord,
        to_record: RateRecord,
        result: Decimal,
    ) -> bool:
        """
        Log a successful conversion.

        Always logs locally. Appends to storage if available.

        Returns True if the storage write succeeded (or no storage configured).
        """
        entry = ConversionLogEntry(
            timestamp=timestamp,
            amount=amount,
            from_record=from_record,
            to_record=to_record,
            result=result,
        )
        self._logger.info(
            AuditEventType.CONVERSION_COMPLETED.value,
            **entry.to_log_dict(),
        )

        if self._storage:
            try:
                return self._storage.append_entry(entry)
            except Exception as e:
                # Log failure but don't raise
                self._logger.error(
                    "conversion_log_storage_failed",
                    error=str(e),
                    from_code=from_record.code,
                    to_code=to_record.code,
                )
                return False

        return True

    def recent(self, limit: int) -> list[str]:
        """Most recent conversion log lines, oldest first."""
        if not self._storage:
            return []
        return self._storage.tail(limit)

    def log_conversion_rejected(
        self,
        from_code: str,
        to_code: str,
        amount: str,
        error_code: str,
        error_message: str,
    ) -> None:
        """Log a conversion the engine refused."""
        self.log(AuditEventBuilder.conversion_rejected(
            from_code=from_code,
            to_code=to_code,
            amount=amount,
            error_code=error_code,
            error_message=error_message,
        ))

    def log_table_loaded(
        self,
        base_code: str,
        record_count: int,
        skipped_count: int,
    ) -> None:
        """Log the startup load of the rate table."""
        self.log(AuditEventBuilder.table_loaded(
            base_code=base_code,
            record_count=record_count,
            skipped_count=skipped_count,
        ))

    def log_table_seeded(self, path: str, record_count: int) -> None:
        """Log creation of the currency file from defaults."""
        self.log(AuditEventBuilder.table_seeded(
            path=path,
            record_count=record_count,
        ))

    def log_table_saved(self, path: str, record_count: int) -> None:
        """Log a whole-file rewrite of the currency file."""
        self.log(AuditEventBuilder.table_saved(
            path=path,
            record_count=record_count,
        ))

    def log_admin_access(self, granted: bool) -> None:
        """Log an admin password check."""
        self.log(AuditEventBuilder.admin_access(granted))

    def log_currency_added(self, record: RateRecord) -> None:
        self.log(AuditEventBuilder.currency_added(record))

    def log_currency_removed(self, record: RateRecord) -> None:
        self.log(AuditEventBuilder.currency_removed(record))

    def log_mutation_rejected(
        self,
        action: str,
        code: str,
        error_code: str,
        error_message: str,
    ) -> None:
        """Log an add or remove the table or validator refused."""
        self.log(AuditEventBuilder.mutation_rejected(
            action=action,
            code=code,
            error_code=error_code,
            error_message=error_message,
        ))

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> None:
        """Log an error."""
        self.log(AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
        ))
