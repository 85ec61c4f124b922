"""Configuration management for configurable settings.

Uses Pydantic Settings for type-safe, environment-based configuration.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Package settings with environment variable support."""

    # Persistence behaviour when a setting changes on a saved record
    autosave_strategy: str = Field("commit", alias="CONFIGURABLE_AUTOSAVE_STRATEGY")  # commit or flush

    # What to do when the same key is declared twice on one host type
    duplicate_setting_policy: str = Field("overwrite", alias="CONFIGURABLE_DUPLICATE_SETTING_POLICY")

    # Logging configuration
    log_level: str = Field("INFO", alias="CONFIGURABLE_LOG_LEVEL")
    log_format: str = Field("text", alias="CONFIGURABLE_LOG_FORMAT")  # text or json

    @field_validator("autosave_strategy")
    @classmethod
    def validate_autosave_strategy(cls, v: str) -> str:
        """Validate autosave strategy."""
        valid_strategies = ["commit", "flush"]
        if v.lower() not in valid_strategies:
            raise ValueError(f"Autosave strategy must be one of: {valid_strategies}")
        return v.lower()

    @field_validator("duplicate_setting_policy")
    @classmethod
    def validate_duplicate_setting_policy(cls, v: str) -> str:
        """Validate duplicate setting policy."""
        valid_policies = ["overwrite", "warn", "error"]
        if v.lower() not in valid_policies:
            raise ValueError(f"Duplicate setting policy must be one of: {valid_policies}")
        return v.lower()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log format."""
        valid_formats = ["text", "json"]
        if v.lower() not in valid_formats:
            raise ValueError(f"Log format must be one of: {valid_formats}")
        return v.lower()

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # Ignore extra environment variables instead of forbidding them
    )


def get_settings() -> Settings:
    """Build a settings instance from the environment."""
    return Settings()  # type: ignore[call-arg]


# Global settings instance - will be created when first accessed
settings = None


def get_settings_instance() -> Settings:
    """Get the global settings instance, creating it if necessary."""
    global settings  # noqa: PLW0603
    if settings is None:
        settings = get_settings()
    return settings
