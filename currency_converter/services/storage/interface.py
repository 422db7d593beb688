"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Swap flat files for a database later
2. Use in-memory storage for testing
3. Keep the flows decoupled from file paths and encodings

The interface is intentionally simple - just the operations the
converter needs.
"""

from abc import ABC, abstractmethod

from currency_converter.core.table import RateTable
from currency_converter.models.audit import ConversionLogEntry
from currency_converter.models.currency import RateRecord


class RateStorageInterface(ABC):
    """
    Abstract interface for rate table persistence.

    Only non-base currencies are stored in the mutable table file;
    the base currency is supplied by configuration.
    """

    @abstractmethod
    def load(self, base_currency: RateRecord) -> RateTable:
        """
        Load the rate table.

        Args:
            base_currency: The reference currency, placed first in the table

        Returns:
            A table with the base currency and every loadable record
        """
        pass

    @abstractmethod
    def save(self, table: RateTable) -> None:
        """
        Persist the whole table, replacing what was stored before.

        Raises:
            StorageError: If the write fails
        """
        pass


class ConversionLogStorageInterface(ABC):
    """
    Abstract interface for the conversion log.

    The log is append-only - we never delete or modify entries.
    """

    @abstractmethod
    def append_entry(self, entry: ConversionLogEntry) -> bool:
        """
        Append one conversion to the log.

        Returns:
            True if logged successfully
        """
        pass

    @abstractmethod
    def tail(self, limit: int) -> list[str]:
        """
        Get the most recent log lines, oldest first.

        Args:
            limit: Maximum number of lines to return (must be positive)
        """
        pass

    @abstractmethod
    def exists(self) -> bool:
        """Has anything ever been logged?"""
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass
