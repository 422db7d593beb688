"""
Main Orchestrator for the Currency Converter

This module ties together all the components and defines the
end-to-end flows for:
1. Conversion (command → engine → log → outcome)
2. Administration (password → validate → mutate table → rewrite file)

DESIGN DECISION: The orchestrator enforces the boundaries:
- The front end only issues commands and reads outcomes
- Core errors never escape as exceptions; they become typed outcomes
- The currency file is rewritten after every successful mutation
- Every step is audited
"""

import hmac
from typing import Optional

from currency_converter.audit import ConversionLogger, configure_logging
from currency_converter.config import ConverterConfig, Settings, get_settings
from currency_converter.core import (
    AccessDeniedError,
    ConversionEngine,
    ConverterError,
    InvalidInputError,
    RateTable,
)
from currency_converter.models.commands import (
    AddCurrencyCommand,
    AdminOutcome,
    ConversionOutcome,
    ConvertCommand,
    RemoveCurrencyCommand,
)
from currency_converter.models.currency import RateRecord
from currency_converter.services.storage import (
    FileConversionLogStorage,
    FlatFileRateStorage,
    RateStorageInterface,
    StorageError,
)
from currency_converter.validation import CurrencyValidator


class ConversionFlow:
    """
    Orchestrates conversions.

    Flow:
    1. Engine converts (negative amount and unknown codes are rejected)
    2. Successful conversions are written to the conversion log
    3. The outcome goes back to the front end
    """

    def __init__(
        self,
        table: RateTable,
        engine: Optional[ConversionEngine] = None,
        conversion_logger: Optional[ConversionLogger] = None,
    ):
        self._table = table
        self._engine = engine or ConversionEngine()
        self._logger = conversion_logger or ConversionLogger()

    @property
    def base_currency(self) -> RateRecord:
        return self._table.base_currency

    def list_currencies(self) -> tuple[RateRecord, ...]:
        return self._table.list()

    def is_supported(self, code: str) -> bool:
        return self._table.is_supported(code)

    def convert(self, command: ConvertCommand) -> ConversionOutcome:
        """
        Convert and log.

        Returns:
            ConversionOutcome with the conversion, or the error kind and message
        """
        try:
            conversion = self._engine.convert(
                self._table,
                command.from_code,
                command.to_code,
                command.amount,
            )
        except ConverterError as e:
            self._logger.log_conversion_rejected(
                from_code=command.from_code,
                to_code=command.to_code,
                amount=str(command.amount),
                error_code=e.kind.value,
                error_message=e.message,
            )
            return ConversionOutcome(
                success=False,
                error_kind=e.kind,
                error_message=e.message,
            )

        self._logger.log_conversion(
            timestamp=conversion.converted_at,
            amount=conversion.amount,
            from_record=conversion.from_record,
            to_record=conversion.to_record,
            result=conversion.result,
        )

        return ConversionOutcome(success=True, conversion=conversion)

    def recent_conversions(self, limit: int) -> list[str]:
        """
        Last conversion log lines, oldest first.

        Raises:
            ValueError: If limit is not positive.
        """
        if limit <= 0:
            raise ValueError("limit must be a positive integer")
        return self._logger.recent(limit)

    def has_log(self) -> bool:
        storage = self._logger.storage
        return storage is not None and storage.exists()


class AdminFlow:
    """
    Orchestrates currency administration.

    Flow:
    1. Authenticate → compare against the configured credential
    2. Validate → admin input checks (format, name, rate, base clash)
    3. Mutate → RateTable.add / remove enforce the invariants
    4. Persist → rewrite the whole currency file

    Authentication is the front end's gate; the mutation methods
    assume it already happened.
    """

    def __init__(
        self,
        table: RateTable,
        storage: RateStorageInterface,
        config: ConverterConfig,
        validator: Optional[CurrencyValidator] = None,
        audit_logger: Optional[ConversionLogger] = None,
    ):
        self._table = table
        self._storage = storage
        self._config = config
        self._validator = validator or CurrencyValidator(config.base_currency.code)
        self._audit_logger = audit_logger or ConversionLogger()

    def authenticate(self, password: str) -> bool:
        """Constant-time comparison against the configured credential."""
        expected = self._config.admin_credential.get_secret_value()
        granted = hmac.compare_digest(password.encode(), expected.encode())
        self._audit_logger.log_admin_access(granted)
        return granted

    def require_admin(self, password: str) -> None:
        """
        Raises:
            AccessDeniedError: If the password is wrong.
        """
        if not self.authenticate(password):
            raise AccessDeniedError()

    def _persist(self) -> None:
        try:
            self._storage.save(self._table)
        except StorageError as e:
            self._audit_logger.log_error("storage_error", str(e))
            raise
        self._audit_logger.log_table_saved(
            path=str(getattr(self._storage, "currency_file_path", "")),
            record_count=len(self._table) - 1,
        )

    def _rejected(self, action: str, code: str, error: ConverterError) -> AdminOutcome:
        self._audit_logger.log_mutation_rejected(
            action=action,
            code=code,
            error_code=error.kind.value,
            error_message=error.message,
        )
        return AdminOutcome(
            success=False,
            error_kind=error.kind,
            error_message=error.message,
            issues=getattr(error, "issues", []),
        )

    def add_currency(self, command: AddCurrencyCommand) -> AdminOutcome:
        """
        Validate and add a currency, then rewrite the currency file.

        Raises:
            StorageError: If the file cannot be written. The currency stays
                in the in-memory table.
        """
        validation = self._validator.validate_new_currency(command)
        if not validation.is_valid:
            return self._rejected(
                "add",
                command.code,
                InvalidInputError(validation.issues, code=command.code),
            )

        record = validation.record
        try:
            self._table.add(record)
        except ConverterError as e:
            return self._rejected("add", record.code, e)

        self._audit_logger.log_currency_added(record)
        self._persist()
        return AdminOutcome(success=True, record=record)

    def remove_currency(self, command: RemoveCurrencyCommand) -> AdminOutcome:
        """
        Remove a currency, then rewrite the currency file.

        Raises:
            StorageError: If the file cannot be written.
        """
        try:
            record = self._table.remove(command.code)
        except ConverterError as e:
            return self._rejected("remove", command.code, e)

        self._audit_logger.log_currency_removed(record)
        self._persist()
        return AdminOutcome(success=True, record=record)


def create_app_components(
    settings: Optional[Settings] = None,
    config: Optional[ConverterConfig] = None,
) -> tuple[ConversionFlow, AdminFlow, RateTable]:
    """
    Factory function to create all application components.

    Creates the data and log directories, writes the base currency file,
    seeds the currency file from defaults on first start and loads the table.

    Args:
        settings: Application settings. Defaults to get_settings().
        config: Injected converter configuration.
               Defaults to settings.converter_config().

    Returns:
        (conversion_flow, admin_flow, rate_table)
    """
    settings = settings or get_settings()
    configure_logging(settings.app.log_level)
    config = config or settings.converter_config()
    storage_settings = settings.storage

    rate_storage = FlatFileRateStorage(storage_settings, config.default_rates)
    log_storage = FileConversionLogStorage(config.base_currency.code, storage_settings)
    audit_logger = ConversionLogger(log_storage)

    storage_settings.logs_dir.mkdir(parents=True, exist_ok=True)
    rate_storage.write_base_currency(config.base_currency)
    if rate_storage.seed_if_missing():
        audit_logger.log_table_seeded(
            path=str(rate_storage.currency_file_path),
            record_count=len(config.default_rates),
        )

    table = rate_storage.load(config.base_currency)
    audit_logger.log_table_loaded(
        base_code=config.base_currency.code,
        record_count=len(table),
        skipped_count=rate_storage.last_skipped_count,
    )

    conversion_flow = ConversionFlow(
        table=table,
        conversion_logger=audit_logger,
    )
    admin_flow = AdminFlow(
        table=table,
        storage=rate_storage,
        config=config,
        audit_logger=audit_logger,
    )

    return conversion_flow, admin_flow, table
