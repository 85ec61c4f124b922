"""
SQLAlchemy models support for configurable settings.
"""

from .base import ConfigurableModel, settings_column
from .types import SerializedSettings

__all__ = [
    "ConfigurableModel",
    "SerializedSettings",
    "settings_column",
]
