"""Audit logging package."""

from currency_converter.audit.logger import ConversionLogger, configure_logging

__all__ = ["ConversionLogger", "configure_logging"]
