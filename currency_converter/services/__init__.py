"""Services package."""

from currency_converter.services.storage import (
    ConversionLogStorageInterface,
    FileConversionLogStorage,
    FlatFileRateStorage,
    RateStorageInterface,
    StorageError,
)

__all__ = [
    # Storage services
    "ConversionLogStorageInterface",
    "FileConversionLogStorage",
    "FlatFileRateStorage",
    "RateStorageInterface",
    "StorageError",
]
