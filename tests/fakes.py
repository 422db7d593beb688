"""In-memory storage backends for flow tests."""

from currency_converter.models.audit import ConversionLogEntry
from currency_converter.services.storage import (
    ConversionLogStorageInterface,
    RateStorageInterface,
    StorageError,
    load_table,
    serialize_table,
)


class InMemoryRateStorage(RateStorageInterface):
    """Keeps the serialized lines in a list."""

    def __init__(self, lines=None, fail_on_save=False):
        self.lines = list(lines or [])
        self.save_count = 0
        self.fail_on_save = fail_on_save

    def load(self, base_currency):
        return load_table(self.lines, base_currency)

    def save(self, table):
        if self.fail_on_save:
            raise StorageError("disk full")
        self.lines = serialize_table(table, exclude_code=table.base_currency.code)
        self.save_count += 1


class InMemoryConversionLog(ConversionLogStorageInterface):
    """Keeps log entries in a list."""

    def __init__(self, base_code="KGS", fail=False):
        self.base_code = base_code
        self.entries = []
        self.fail = fail

    def append_entry(self, entry: ConversionLogEntry) -> bool:
        if self.fail:
            raise StorageError("log unavailable")
        self.entries.append(entry)
        return True

    def tail(self, limit):
        lines = [entry.to_log_line(self.base_code) for entry in self.entries]
        return lines[-limit:]

    def exists(self):
        return bool(self.entries)
