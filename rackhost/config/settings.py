"""Typed runtime settings with dotenv support and startup validation."""

from pathlib import Path
import logging

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SettingsLoadError(RuntimeError):
    """Raised when runtime settings cannot be loaded or validated."""


class AppSettings(BaseSettings):
    """Application settings for the host runtime and application factory.

    Environment variable names map directly to field names in uppercase.
    Example: `rackup_path` reads from `RACKUP_PATH`.

    Attributes:
        environment_name: Runtime environment label.
        application_host: Host interface for web server binding.
        application_port: Web server port.
        rackup: Inline descriptor script used to build the primary application.
        rackup_path: Descriptor script file used when `rackup` is not set.
        runtime_load_paths: Extra directories searched by script `require`/`load`.
        log_level: Console logging level name.
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
    rackup: str | None = Field(default=None)
    rackup_path: str | None = Field(default=None)
    runtime_load_paths: list[str] = Field(default_factory=list)
    log_level: str = Field(default="INFO")

    @field_validator("rackup", "rackup_path")
    @classmethod
    def _validate_optional_string(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        return value

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        normalized_level = value.strip().upper()
        if not isinstance(logging.getLevelName(normalized_level), int):
            raise ValueError(f"unknown log level {value!r}")
        return normalized_level


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


def config_load_rackup(settings: AppSettings) -> str | None:
    """Resolve the descriptor script from inline setting or descriptor file.

    Args:
        settings: Validated application settings.

    Returns:
        str | None: Descriptor source, or None when neither source is configured.

    Raises:
        SettingsLoadError: Raised when the descriptor file cannot be read.
    """

    if settings.rackup is not None:
        return settings.rackup
    if settings.rackup_path is None:
        return None

    try:
        return Path(settings.rackup_path).read_text(encoding="utf-8")
    except OSError as error:
        raise SettingsLoadError(
            f"Descriptor file could not be read. Check RACKUP_PATH={settings.rackup_path}. Details: {error}"
        ) from error
