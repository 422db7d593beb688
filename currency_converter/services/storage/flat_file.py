"""
Flat File Storage Implementation

DESIGN DECISION: Plain UTF-8 text files are the storage backend because:
1. Users and admins can read and fix them with any editor
2. No database setup required
3. The table holds tens of rows

Layout:
    data/currencies.csv       non-base currencies, CODE;NAME;RATE per line
    data/base_currency.txt    the base currency, rewritten at startup
    logs/<log file>           append-only conversion log

TRADEOFFS:
- Every save rewrites the whole currency file
- No atomic rename or journaling: a crash mid-write can corrupt the file,
  and the next load then skips whatever lines it cannot parse
"""

from pathlib import Path
from typing import Optional, Sequence

from currency_converter.config import StorageSettings, get_settings
from currency_converter.core.table import RateTable
from currency_converter.models.audit import ConversionLogEntry
from currency_converter.models.currency import RateRecord
from currency_converter.services.storage.codec import (
    format_line,
    load_table,
    serialize_table,
)
from currency_converter.services.storage.interface import (
    ConversionLogStorageInterface,
    RateStorageInterface,
    StorageError,
)


ENCODING = "utf-8"


def _write_lines(path: Path, lines: Sequence[str]) -> None:
    """Rewrite path with one line per entry."""
    content = "".join(f"{line}\n" for line in lines)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding=ENCODING)
    except OSError as e:
        raise StorageError(f"Failed to write {path}: {e}")


class FlatFileRateStorage(RateStorageInterface):
    """
    Rate table stored as ';'-delimited text.

    The base currency is never written to the currency file; it lives in
    its own file and always comes from configuration.
    """

    def __init__(
        self,
        settings: Optional[StorageSettings] = None,
        default_rates: Optional[Sequence[RateRecord]] = None,
    ):
        """
        Initialize flat file storage.

        Args:
            settings: File locations. Defaults to the configured ones.
            default_rates: Records written when the currency file is missing.
                          Defaults to the configured table.
        """
        self._settings = settings or get_settings().storage
        if default_rates is None:
            default_rates = get_settings().currency.default_rates
        self._default_rates = list(default_rates)
        self.last_skipped_count = 0

    @property
    def currency_file_path(self) -> Path:
        return self._settings.currency_file_path

    @property
    def base_currency_file_path(self) -> Path:
        return self._settings.base_currency_file_path

    def write_base_currency(self, base_currency: RateRecord) -> None:
        """Record the base currency in its own file."""
        _write_lines(self.base_currency_file_path, [format_line(base_currency)])

    def seed_if_missing(self) -> bool:
        """
        Write the default rates if the currency file does not exist yet.

        Returns:
            True if the file was created
        """
        if self.currency_file_path.exists():
            return False
        _write_lines(
            self.currency_file_path,
            [format_line(record) for record in self._default_rates],
        )
        return True

    def load(self, base_currency: RateRecord) -> RateTable:
        """
        Load the table, skipping lines that cannot be used.

        The number of skipped non-blank lines is kept in last_skipped_count.
        """
        try:
            lines = self.currency_file_path.read_text(encoding=ENCODING).splitlines()
        except FileNotFoundError:
            lines = []
        except OSError as e:
            raise StorageError(f"Failed to read {self.currency_file_path}: {e}")

        table = load_table(lines, base_currency)
        non_blank = sum(1 for line in lines if line.strip())
        self.last_skipped_count = non_blank - (len(table) - 1)
        return table

    def save(self, table: RateTable) -> None:
        """Rewrite the currency file with every non-base record."""
        _write_lines(
            self.currency_file_path,
            serialize_table(table, exclude_code=table.base_currency.code),
        )


class FileConversionLogStorage(ConversionLogStorageInterface):
    """
    Conversion log stored as an append-only text file.

    One human-readable line per conversion, see ConversionLogEntry.to_log_line.
    """

    def __init__(
        self,
        base_code: str,
        settings: Optional[StorageSettings] = None,
    ):
        self._base_code = base_code
        self._settings = settings or get_settings().storage

    @property
    def path(self) -> Path:
        return self._settings.log_file_path

    def append_entry(self, entry: ConversionLogEntry) -> bool:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("a", encoding=ENCODING) as f:
                f.write(entry.to_log_line(self._base_code) + "\n")
        except OSError as e:
            raise StorageError(f"Failed to append to {self.path}: {e}")
        return True

    def tail(self, limit: int) -> list[str]:
        if limit <= 0:
            raise ValueError("limit must be a positive integer")
        if not self.exists():
            return []
        try:
            lines = self.path.read_text(encoding=ENCODING).splitlines()
        except OSError as e:
            raise StorageError(f"Failed to read {self.path}: {e}")
        return lines[-limit:]

    def exists(self) -> bool:
        return self.path.exists()
