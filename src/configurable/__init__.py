"""
Typed settings stored in a single serialized field.

Declare settings on a host type and read or write them like ordinary
attributes. Values are canonicalized per type on write, fall back to their
defaults on read, and saved automatically when the host supports it.
"""

from .accessor import SettingAccessor
from .coercion import SettingType, canonicalize
from .core.exceptions import (
    ConfigurableException,
    CorruptSettingsContainerError,
    DuplicateSettingError,
    InvalidSettingKeyError,
    SettingsPersistenceError,
    UnknownSettingError,
    UnknownSettingTypeError,
)
from .host import Configurable, ConfigurableOptions, SettingsHost
from .registry import Item, SettingRegistry

__all__ = [
    "Configurable",
    "ConfigurableException",
    "ConfigurableOptions",
    "CorruptSettingsContainerError",
    "DuplicateSettingError",
    "InvalidSettingKeyError",
    "Item",
    "SettingAccessor",
    "SettingRegistry",
    "SettingType",
    "SettingsHost",
    "SettingsPersistenceError",
    "UnknownSettingError",
    "UnknownSettingTypeError",
    "canonicalize",
]
