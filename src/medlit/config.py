"""
MedLit Configuration

Centralized configuration using Pydantic Settings.
All configuration is loaded from environment variables with sensible defaults.

Scoring weights, anti-patterns, the validity threshold and the dampening
bands are calibration constants in their modules, not settings.
"""

from typing import Literal

from pydantic import Field, ValidationError, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from medlit.core.exceptions import ConfigurationError


class OracleSettings(BaseSettings):
    """Calling-layer settings for the external oracle."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="",
        extra="ignore",
        populate_by_name=True,
    )

    timeout_seconds: float = Field(default=60.0, gt=0.0, alias="MEDLIT_ORACLE_TIMEOUT")
    max_retries: int = Field(default=2, ge=1, le=10, alias="MEDLIT_ORACLE_MAX_RETRIES")
    retry_min_wait: float = Field(default=0.5, ge=0.0, alias="MEDLIT_ORACLE_RETRY_MIN_WAIT")
    retry_max_wait: float = Field(default=8.0, ge=0.0, alias="MEDLIT_ORACLE_RETRY_MAX_WAIT")

    @model_validator(mode="after")
    def check_wait_bounds(self) -> "OracleSettings":
        """Ensure the retry wait window is ordered."""
        if self.retry_max_wait < self.retry_min_wait:
            raise ValueError("MEDLIT_ORACLE_RETRY_MAX_WAIT must be >= MEDLIT_ORACLE_RETRY_MIN_WAIT")
        return self


class PipelineSettings(BaseSettings):
    """Feature switches for the analysis pipeline."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="",
        extra="ignore",
        populate_by_name=True,
    )

    enable_validation_gate: bool = Field(default=True, alias="MEDLIT_ENABLE_VALIDATION_GATE")
    enable_dampening: bool = Field(default=True, alias="MEDLIT_ENABLE_DAMPENING")


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="",
        extra="ignore",
        populate_by_name=True,
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", alias="LOG_LEVEL"
    )
    log_format: Literal["json", "text"] = Field(default="text", alias="LOG_FORMAT")


class Settings(BaseSettings):
    """
    Main MedLit settings aggregator.

    Usage:
        from medlit.config import get_settings
        settings = get_settings()
        print(settings.oracle.timeout_seconds)
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    oracle: OracleSettings = Field(default_factory=OracleSettings)
    pipeline: PipelineSettings = Field(default_factory=PipelineSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


# Singleton pattern for settings
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance (singleton)."""
    global _settings
    if _settings is None:
        try:
            _settings = Settings()
        except ValidationError as e:
            raise ConfigurationError(
                "Invalid MedLit configuration", {"errors": e.errors(include_url=False)}
            ) from e
    return _settings


def reset_settings() -> None:
    """Reset settings (useful for testing)."""
    global _settings
    _settings = None
