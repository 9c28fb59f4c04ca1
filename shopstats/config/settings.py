"""Typed runtime settings with dotenv support and startup validation."""

import decimal
import logging

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from shopstats.analytics import DuplicateKeyPolicy

_CONFIG_ROUNDING_MODES = frozenset(name for name in dir(decimal) if name.startswith("ROUND_"))


class SettingsLoadError(RuntimeError):
    """Raised when runtime settings cannot be loaded or validated."""


class AppSettings(BaseSettings):
    """Application settings for API runtime and report policies.

    Environment variable names map directly to field names in uppercase.
    Example: `dataset_path` reads from `DATASET_PATH`.

    Attributes:
        environment_name: Runtime environment label.
        application_host: Host interface for web server binding.
        application_port: Web server port.
        dataset_path: JSON dataset file consumed by report surfaces.
        log_level: Root logging level name.
        average_price_scale: Decimal places of weighted average prices.
        average_price_rounding: `decimal` rounding mode name for weighted average prices.
        duplicate_email_policy: Resolution rule for customers sharing one email.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    environment_name: str = Field(default="development")
    application_host: str = Field(default="0.0.0.0")
    application_port: int = Field(default=8000, ge=1, le=65535)
    dataset_path: str = Field(default="data/shop.json", min_length=1)
    log_level: str = Field(default="INFO")
    average_price_scale: int = Field(default=2, ge=0, le=12)
    average_price_rounding: str = Field(default="ROUND_HALF_UP")
    duplicate_email_policy: DuplicateKeyPolicy = Field(default=DuplicateKeyPolicy.KEEP_LAST)

    @field_validator("dataset_path")
    @classmethod
    def _validate_non_empty_string(cls, value: str) -> str:
        stripped_value = value.strip()
        if not stripped_value:
            raise ValueError("value must not be blank")
        return stripped_value

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        normalized_value = value.strip().upper()
        if not isinstance(logging.getLevelName(normalized_value), int):
            raise ValueError(f"unsupported log_level={value}")
        return normalized_value

    @field_validator("average_price_rounding")
    @classmethod
    def _validate_rounding_mode(cls, value: str) -> str:
        normalized_value = value.strip().upper()
        if normalized_value not in _CONFIG_ROUNDING_MODES:
            raise ValueError(f"average_price_rounding must be one of {sorted(_CONFIG_ROUNDING_MODES)}")
        return normalized_value


def config_load_settings() -> AppSettings:
    """Load and validate runtime settings from environment and dotenv.

    Returns:
        AppSettings: Validated runtime settings object.

    Raises:
        SettingsLoadError: Raised when settings are invalid.
    """

    try:
        return AppSettings()
    except ValidationError as error:
        raise SettingsLoadError(
            f"Startup configuration validation failed. Update .env or environment variables. Details: {error}"
        ) from error
