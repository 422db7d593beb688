"""
Configuration Management for the Currency Converter

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Nothing in the core embeds the admin password, the base currency or the
default rate table; they are read here and handed to the flows as a
ConverterConfig, so tests can inject fixtures instead.
"""

from decimal import Decimal
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from currency_converter.models.currency import RateRecord


def _default_rates() -> list[RateRecord]:
    """The table written on first start, as 1 unit = X KGS."""
    return [
        RateRecord(code="USD", name="US Dollar", rate_to_base=Decimal("89")),
        RateRecord(code="EUR", name="Euro", rate_to_base=Decimal("96")),
        RateRecord(code="GBP", name="British Pound", rate_to_base=Decimal("112")),
        RateRecord(code="JPY", name="Japanese Yen", rate_to_base=Decimal("0.60")),
        RateRecord(code="RUB", name="Russian Ruble", rate_to_base=Decimal("1.0")),
        RateRecord(code="KZT", name="Kazakh Tenge", rate_to_base=Decimal("0.20")),
        RateRecord(code="CNY", name="Chinese Yuan", rate_to_base=Decimal("12")),
        RateRecord(code="TRY", name="Turkish Lira", rate_to_base=Decimal("3.5")),
        RateRecord(code="AZN", name="Azerbaijani Manat", rate_to_base=Decimal("52")),
        RateRecord(code="UZS", name="Uzbekistani Som", rate_to_base=Decimal("0.0075")),
    ]


class ConverterConfig(BaseModel):
    """
    Everything the flows need from configuration.

    Built from settings in production, constructed directly in tests.
    """
    model_config = ConfigDict(frozen=True)

    admin_credential: SecretStr
    default_rates: list[RateRecord]
    base_currency: RateRecord

    @field_validator('base_currency')
    @classmethod
    def base_rate_is_one(cls, v: RateRecord) -> RateRecord:
        if v.rate_to_base != Decimal(1):
            raise ValueError("Base currency must have a rate of exactly 1")
        return v


class CurrencySettings(BaseSettings):
    """Base currency and the default rate table."""

    model_config = SettingsConfigDict(
        env_prefix="CONVERTER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    base_currency_code: str = Field(
        default="KGS",
        min_length=2,
        max_length=6,
        description="Code of the base currency"
    )
    base_currency_name: str = Field(
        default="Kyrgyz Som",
        min_length=1,
        description="Display name of the base currency"
    )
    # JSON list in the environment, e.g.
    # CONVERTER_DEFAULT_RATES='[{"code": "USD", "name": "US Dollar", "rate_to_base": "89"}]'
    default_rates: list[RateRecord] = Field(
        default_factory=_default_rates,
        description="Rates written when no currency file exists yet"
    )

    @field_validator('base_currency_code')
    @classmethod
    def normalize_code(cls, v: str) -> str:
        v = v.strip().upper()
        if not v.isalpha():
            raise ValueError("Base currency code must contain only letters")
        return v

    @property
    def base_currency(self) -> RateRecord:
        return RateRecord(
            code=self.base_currency_code,
            name=self.base_currency_name,
            rate_to_base=Decimal(1),
        )


class AdminSettings(BaseSettings):
    """Admin area configuration."""

    model_config = SettingsConfigDict(
        env_prefix="CONVERTER_ADMIN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    password: SecretStr = Field(
        default=SecretStr("MBANK2025"),
        description="Password guarding add/remove currency"
    )


class StorageSettings(BaseSettings):
    """Flat-file storage locations."""

    model_config = SettingsConfigDict(
        env_prefix="CONVERTER_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    data_dir: Path = Field(
        default=Path("data"),
        description="Directory holding the currency files"
    )
    logs_dir: Path = Field(
        default=Path("logs"),
        description="Directory holding the conversion log"
    )
    currency_file_name: str = Field(
        default="currencies.csv",
        description="Non-base currencies, one CODE;NAME;RATE per line"
    )
    base_currency_file_name: str = Field(
        default="base_currency.txt",
        description="The base currency record, rewritten at startup"
    )
    log_file_name: str = Field(
        default="mbank_conversions.log",
        description="Append-only conversion log"
    )

    @property
    def currency_file_path(self) -> Path:
        return self.data_dir / self.currency_file_name

    @property
    def base_currency_file_path(self) -> Path:
        return self.data_dir / self.base_currency_file_name

    @property
    def log_file_path(self) -> Path:
        return self.logs_dir / self.log_file_name


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Level for the local structured log"
    )

    # Display
    recent_log_lines: int = Field(
        default=10,
        ge=1,
        le=1000,
        description="How many log lines the log page shows by default"
    )
    display_decimal_places: int = Field(
        default=2,
        ge=0,
        le=8,
        description="Decimal places used when showing results"
    )

    @field_validator('log_level', mode='before')
    @classmethod
    def upper_level(cls, v: str) -> str:
        return str(v).strip().upper()


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def currency(self) -> CurrencySettings:
        return CurrencySettings()

    @property
    def admin(self) -> AdminSettings:
        return AdminSettings()

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()

    def converter_config(self) -> ConverterConfig:
        """Build the injected configuration for the flows."""
        currency = self.currency
        return ConverterConfig(
            admin_credential=self.admin.password,
            default_rates=currency.default_rates,
            base_currency=currency.base_currency,
        )


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, plus
    {setting_name}_error entries for the failures.
    Useful for startup checks.
    """
    results = {}

    settings = get_settings()

    for name in ("currency", "admin", "storage", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except Exception as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
