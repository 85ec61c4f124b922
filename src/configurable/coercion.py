"""Setting types and the canonicalization rules applied on write.

Every value written through a setting is passed through ``canonicalize`` for
the setting's type before it reaches the container. The rules degrade bad
input to a type-appropriate zero value instead of raising.
"""

import re
from enum import Enum
from typing import Any

import yaml

from .core.exceptions import UnknownSettingTypeError

# Anything that is not a digit or a decimal point is dropped from numeric text
_NON_NUMERIC = re.compile(r"[^0-9.]")
_LEADING_INTEGER = re.compile(r"\d*")
_LEADING_FLOAT = re.compile(r"\d*\.?\d*")

# Compared with ``==``, so 0.0 and False fall into the set as well
FALSE_VALUES: tuple[Any, ...] = (0, "0", "", False, "false", "f", None)


class SettingType(str, Enum):
    """Semantic type of a declared setting."""

    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    YAML = "yaml"
    OBJECT = "object"

    @classmethod
    def parse(cls, value: Any) -> "SettingType":
        """Resolve a declaration-time type name, alias or builtin type."""
        if isinstance(value, cls):
            return value
        if isinstance(value, type):
            resolved = _BUILTIN_TYPES.get(value)
            if resolved is None:
                raise UnknownSettingTypeError(value.__name__)
            return resolved
        if isinstance(value, str):
            resolved = _ALIASES.get(value.strip().lower())
            if resolved is not None:
                return resolved
        raise UnknownSettingTypeError(value)


_ALIASES: dict[str, SettingType] = {
    "str": SettingType.STRING,
    "string": SettingType.STRING,
    "int": SettingType.INTEGER,
    "integer": SettingType.INTEGER,
    "float": SettingType.FLOAT,
    "bool": SettingType.BOOLEAN,
    "boolean": SettingType.BOOLEAN,
    "yml": SettingType.YAML,
    "yaml": SettingType.YAML,
    "object": SettingType.OBJECT,
}

_BUILTIN_TYPES: dict[type, SettingType] = {
    bool: SettingType.BOOLEAN,
    int: SettingType.INTEGER,
    float: SettingType.FLOAT,
    str: SettingType.STRING,
    object: SettingType.OBJECT,
}


def _as_text(value: Any) -> str | None:
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    return None


def to_string(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    text = _as_text(value)
    if text is not None:
        return text
    return str(value)


def to_integer(value: Any) -> int:
    """Coerce ``value`` to an int.

    Text keeps only its digits and decimal points, then the leading digit run
    is parsed (``"1,000"`` -> 1000, ``"1.05"`` -> 1, ``"abc"`` -> 0). Numbers
    are truncated. Other objects become 1 when truthy and 0 otherwise.
    """
    text = _as_text(value)
    if text is not None:
        digits = _LEADING_INTEGER.match(_NON_NUMERIC.sub("", text)).group()
        if not digits:
            return 0
        try:
            return int(digits)
        except ValueError:
            # Digit runs beyond the interpreter's int string conversion limit
            return 0
    if hasattr(value, "__int__") or hasattr(value, "__index__"):
        try:
            return int(value)
        except (TypeError, ValueError, OverflowError):
            return 0
    return 1 if value else 0


def to_float(value: Any) -> float:
    """Coerce ``value`` to a float using the same stripping rule as ``to_integer``."""
    text = _as_text(value)
    if text is not None:
        prefix = _LEADING_FLOAT.match(_NON_NUMERIC.sub("", text)).group()
        try:
            return float(prefix)
        except ValueError:
            return 0.0
    if hasattr(value, "__float__") or hasattr(value, "__index__"):
        try:
            return float(value)
        except (TypeError, ValueError, OverflowError):
            return 0.0
    return 1.0 if value else 0.0


def to_boolean(value: Any) -> bool:
    try:
        return not any(value == false_value for false_value in FALSE_VALUES)
    except (TypeError, ValueError):
        # Objects with exotic __eq__ (array-likes) are not in the false set
        return True


def to_yaml(value: Any) -> str:
    try:
        return yaml.safe_dump(value, explicit_start=True, default_flow_style=False, sort_keys=False)
    except yaml.YAMLError:
        return yaml.safe_dump(str(value), explicit_start=True)


def is_blank(value: Any) -> bool:
    """Return True for None, False, whitespace-only text and empty collections.

    Numbers are never blank, so an integer setting holding 0 still answers
    true to its query accessor.
    """
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (int, float)):
        return False
    try:
        return len(value) == 0
    except TypeError:
        return False


_CANONICALIZERS = {
    SettingType.STRING: to_string,
    SettingType.INTEGER: to_integer,
    SettingType.FLOAT: to_float,
    SettingType.BOOLEAN: to_boolean,
    SettingType.YAML: to_yaml,
}


def canonicalize(setting_type: SettingType, value: Any) -> Any:
    """Convert a raw value to the stored form for ``setting_type``.

    Object settings pass the value through untouched.
    """
    converter = _CANONICALIZERS.get(setting_type)
    if converter is None:
        return value
    return converter(value)
