"""Column type for a serialized settings container.

The container is stored as JSON (or YAML) text in a single column, so it
works on any database that has a text type. Decoding failures surface as
``CorruptSettingsContainerError``; the accessor layer never sees them.
"""

import json
from typing import Any

import yaml
from sqlalchemy.types import Text, TypeDecorator

from ..core.exceptions import CorruptSettingsContainerError

SERIALIZERS = ("json", "yaml")


class SerializedSettings(TypeDecorator):
    """Text column holding a mapping of setting keys to canonical values."""

    impl = Text
    cache_ok = True

    def __init__(self, serializer: str = "json", *args: Any, **kwargs: Any) -> None:
        if serializer not in SERIALIZERS:
            raise ValueError(f"Serializer must be one of: {list(SERIALIZERS)}")
        self.serializer = serializer
        super().__init__(*args, **kwargs)

    def process_bind_param(self, value: Any, dialect: Any) -> str | None:
        if value is None:
            return None
        data = dict(value)
        if self.serializer == "yaml":
            return yaml.safe_dump(data, default_flow_style=False, sort_keys=False)
        return json.dumps(data)

    def process_result_value(self, value: Any, dialect: Any) -> dict[str, Any] | None:
        if value is None or not value.strip():
            return None
        try:
            decoded = yaml.safe_load(value) if self.serializer == "yaml" else json.loads(value)
        except (ValueError, yaml.YAMLError) as e:
            raise CorruptSettingsContainerError(str(e)) from e
        if not isinstance(decoded, dict):
            raise CorruptSettingsContainerError(f"expected a mapping, got {type(decoded).__name__}")
        return decoded
