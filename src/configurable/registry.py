"""Setting declarations for a host type.

Each configurable host type owns one ``SettingRegistry``. Declaring a setting
records an immutable ``Item`` and binds a read/write attribute plus an
``is_<key>`` query attribute onto the host type. A subclass registry falls
back to its parent's registry for keys it does not declare itself.
"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Iterator

from .accessor import SettingAccessor, SettingDescriptor, SettingQueryDescriptor
from .coercion import SettingType, canonicalize
from .core.config import get_settings_instance
from .core.exceptions import DuplicateSettingError, InvalidSettingKeyError
from .core.logging import get_logger

if TYPE_CHECKING:
    from .host import ConfigurableOptions

logger = get_logger(__name__)

QUERY_PREFIX = "is_"

_MISSING = object()


def normalize_key(key: Any) -> str:
    """Coerce a declared key (str, enum member, number, ...) to its string form."""
    if isinstance(key, Enum):
        key = key.value
    return str(key)


@dataclass(frozen=True)
class Item:
    """Immutable description of one declared setting."""

    key: str
    type: SettingType
    default: Any = None

    @property
    def query_name(self) -> str:
        return f"{QUERY_PREFIX}{self.key}"

    def canonicalize(self, value: Any) -> Any:
        return canonicalize(self.type, value)


class SettingRegistry:
    """Ordered collection of the settings declared on one host type."""

    def __init__(
        self,
        host: type,
        parent: "SettingRegistry | None" = None,
        accessor: SettingAccessor | None = None,
    ) -> None:
        self.host = host
        self.parent = parent
        self.accessor = accessor or SettingAccessor()
        self._items: dict[str, Item] = {}

    def add(self, key: Any, type: Any = SettingType.OBJECT, default: Any = None) -> "SettingRegistry":
        """Declare a setting and bind its accessors onto the host type.

        Args:
            key: Setting name; normalized with ``str()``.
            type: A ``SettingType``, one of its names or aliases
                (``bool``, ``int``, ``str``, ``yml``, ...) or a builtin type.
            default: Value returned while nothing has been written. It is
                returned as declared, not copied, so a mutable default
                (list, dict) is shared by every instance of the host.

        Returns:
            The registry, so declarations can be chained.

        Raises:
            UnknownSettingTypeError: ``type`` is not a supported setting type.
            InvalidSettingKeyError: the key is empty or would clobber an
                existing attribute of the host.
            DuplicateSettingError: the key is already declared here and the
                duplicate policy is ``error``.
        """
        item = Item(key=normalize_key(key), type=SettingType.parse(type), default=default)
        self._validate_key(item)

        if item.key in self._items:
            self._handle_duplicate(item)
        elif self.parent is not None and item.key in self.parent:
            logger.debug(
                "Overriding inherited setting",
                extra={"setting": item.key, "host": self.host.__name__},
            )

        self._items[item.key] = item
        self._bind(item)
        logger.debug(
            "Declared setting",
            extra={"setting": item.key, "setting_type": item.type.value, "host": self.host.__name__},
        )
        return self

    def string(self, key: Any, default: Any = None) -> "SettingRegistry":
        return self.add(key, SettingType.STRING, default)

    def integer(self, key: Any, default: Any = None) -> "SettingRegistry":
        return self.add(key, SettingType.INTEGER, default)

    def float(self, key: Any, default: Any = None) -> "SettingRegistry":
        return self.add(key, SettingType.FLOAT, default)

    def boolean(self, key: Any, default: Any = None) -> "SettingRegistry":
        return self.add(key, SettingType.BOOLEAN, default)

    def yaml(self, key: Any, default: Any = None) -> "SettingRegistry":
        return self.add(key, SettingType.YAML, default)

    def object(self, key: Any, default: Any = None) -> "SettingRegistry":
        return self.add(key, SettingType.OBJECT, default)

    def get(self, key: Any) -> Item | None:
        """Return the item declared for ``key`` here or on a parent, if any."""
        key = normalize_key(key)
        item = self._items.get(key)
        if item is None and self.parent is not None:
            return self.parent.get(key)
        return item

    def items(self) -> list[Item]:
        """All visible items, parent declarations first, overrides in place."""
        merged = {item.key: item for item in self.parent} if self.parent is not None else {}
        merged.update(self._items)
        return list(merged.values())

    def keys(self) -> list[str]:
        return [item.key for item in self.items()]

    def __iter__(self) -> Iterator[Item]:
        return iter(self.items())

    def __len__(self) -> int:
        return len(self.items())

    def __contains__(self, key: Any) -> bool:
        return self.get(key) is not None

    def __repr__(self) -> str:
        return f"<SettingRegistry(host={self.host.__name__}, keys={self.keys()})>"

    def _options(self) -> "ConfigurableOptions | None":
        return getattr(self.host, "configurable_options", None)

    def _validate_key(self, item: Item) -> None:
        if not item.key:
            raise InvalidSettingKeyError(item.key, "key must not be empty")

        options = self._options()
        if options is not None and item.key == options.using:
            raise InvalidSettingKeyError(item.key, "key collides with the settings container field")

        for name, allowed in ((item.key, SettingDescriptor), (item.query_name, SettingQueryDescriptor)):
            existing = getattr(self.host, name, _MISSING)
            if existing is not _MISSING and not isinstance(existing, allowed):
                raise InvalidSettingKeyError(item.key, f"'{name}' is already defined on {self.host.__name__}")

    def _handle_duplicate(self, item: Item) -> None:
        policy = get_settings_instance().duplicate_setting_policy
        if policy == "error":
            raise DuplicateSettingError(item.key, self.host.__name__)
        log = logger.warning if policy == "warn" else logger.debug
        log(
            f"Setting '{item.key}' redeclared, last declaration wins",
            extra={"setting": item.key, "host": self.host.__name__},
        )

    def _bind(self, item: Item) -> None:
        setattr(self.host, item.key, SettingDescriptor(item, self.accessor))
        setattr(self.host, item.query_name, SettingQueryDescriptor(item, self.accessor))
