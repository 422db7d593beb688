"""
Storage Services Package

Provides abstract interfaces and concrete implementations for data storage.
Currently implements flat text files as the backend, but designed to be swappable.
"""

from currency_converter.services.storage.interface import (
    ConversionLogStorageInterface,
    RateStorageInterface,
    StorageError,
)
from currency_converter.services.storage.codec import (
    format_line,
    load_table,
    parse_line,
    parse_lines,
    serialize_table,
)
from currency_converter.services.storage.flat_file import (
    FileConversionLogStorage,
    FlatFileRateStorage,
)

__all__ = [
    # Interfaces
    "ConversionLogStorageInterface",
    "RateStorageInterface",
    # Exceptions
    "StorageError",
    # Codec
    "format_line",
    "load_table",
    "parse_line",
    "parse_lines",
    "serialize_table",
    # Flat file implementation
    "FileConversionLogStorage",
    "FlatFileRateStorage",
]
