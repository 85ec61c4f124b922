"""Custom exceptions for configurable settings.

This module defines all custom exceptions raised by the package. Coercion of
setting values never raises; these are declaration-time and persistence-layer
errors only.
"""

from typing import Any


class ConfigurableException(Exception):
    """Base exception class for configurable settings."""

    def __init__(
        self,
        message: str,
        error_code: str,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


# Declaration Exceptions
class UnknownSettingTypeError(ConfigurableException):
    """Raised when a setting is declared with a type name that is not supported."""

    def __init__(self, setting_type: Any, details: dict[str, Any] | None = None):
        super().__init__(
            message=f"Unknown setting type '{setting_type}'",
            error_code="UNKNOWN_SETTING_TYPE",
            details=details or {"setting_type": str(setting_type)},
        )


class InvalidSettingKeyError(ConfigurableException):
    """Raised when a setting key is empty or would clobber an existing attribute."""

    def __init__(self, key: str, reason: str, details: dict[str, Any] | None = None):
        super().__init__(
            message=f"Invalid setting key '{key}': {reason}",
            error_code="INVALID_SETTING_KEY",
            details=details or {"key": key, "reason": reason},
        )


class DuplicateSettingError(ConfigurableException):
    """Raised when a key is declared twice and duplicates are configured as errors."""

    def __init__(self, key: str, host: str, details: dict[str, Any] | None = None):
        super().__init__(
            message=f"Setting '{key}' is already declared on '{host}'",
            error_code="DUPLICATE_SETTING",
            details=details or {"key": key, "host": host},
        )


# Access Exceptions
class UnknownSettingError(ConfigurableException):
    """Raised by the generic entry points when a key was never declared."""

    def __init__(self, key: str, host: str, details: dict[str, Any] | None = None):
        super().__init__(
            message=f"Setting '{key}' is not declared on '{host}'",
            error_code="UNKNOWN_SETTING",
            details=details or {"key": key, "host": host},
        )


# Persistence Exceptions
class CorruptSettingsContainerError(ConfigurableException):
    """Raised when a stored settings blob cannot be decoded into a mapping."""

    def __init__(self, reason: str, details: dict[str, Any] | None = None):
        super().__init__(
            message=f"Stored settings container is corrupt: {reason}",
            error_code="CORRUPT_SETTINGS_CONTAINER",
            details=details or {"reason": reason},
        )


class SettingsPersistenceError(ConfigurableException):
    """Raised when saving a record after a settings change fails."""

    def __init__(self, host: str, reason: str, details: dict[str, Any] | None = None):
        super().__init__(
            message=f"Failed to persist settings for '{host}': {reason}",
            error_code="SETTINGS_PERSISTENCE_ERROR",
            details=details or {"host": host, "reason": reason},
        )
