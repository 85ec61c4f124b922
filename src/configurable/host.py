"""Host-side plumbing for configurable types.

A host is any object that owns a settings container and can answer the
narrow ``SettingsHost`` interface. ``Configurable`` provides that interface
for plain Python objects and gives every subclass its own options and
registry; ``configurable.models.ConfigurableModel`` builds on it for
SQLAlchemy models.
"""

from collections.abc import Callable, MutableMapping
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from .coercion import SettingType
from .core.exceptions import UnknownSettingError
from .registry import Item, SettingRegistry


@dataclass(frozen=True)
class ConfigurableOptions:
    """Per-type options, set once with a ``__configurable__`` class attribute.

    Attributes:
        using: Name of the attribute holding the settings container.
        container_type: Factory for a new, empty container.
        autosave: Persist the host after a setting changes, unless it is new.
    """

    using: str = "settings"
    container_type: Callable[[], MutableMapping[str, Any]] = dict
    autosave: bool = True


@runtime_checkable
class SettingsHost(Protocol):
    """What the accessor needs from the object that owns the settings.

    Hosts may also define ``persist_settings()``; when they don't, changes
    are kept in memory only.
    """

    configurable_options: ConfigurableOptions

    def get_settings_container(self) -> MutableMapping[str, Any] | None: ...

    def set_settings_container(self, value: MutableMapping[str, Any]) -> None: ...

    def is_new_record(self) -> bool: ...


class Configurable:
    """Mixin giving a class typed settings stored in one container attribute.

    Example::

        class Profile(Configurable):
            __configurable__ = ConfigurableOptions(using="prefs", autosave=False)

        Profile.settings_registry.string("title", "Untitled").boolean("enabled", True)

        profile = Profile()
        profile.title            # "Untitled"
        profile.title = 42       # stored as "42"
        profile.is_enabled       # True
    """

    configurable_options = ConfigurableOptions()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        options = cls.__dict__.get("__configurable__")
        if options is not None:
            if not isinstance(options, ConfigurableOptions):
                raise TypeError(f"{cls.__name__}.__configurable__ must be a ConfigurableOptions instance")
            cls.configurable_options = options
        # Without its own __configurable__ a subclass sees its parent's options by lookup
        cls.settings_registry = SettingRegistry(cls, parent=getattr(cls, "settings_registry", None))

    @classmethod
    def setting(cls, key: Any, type: Any = SettingType.OBJECT, default: Any = None) -> SettingRegistry:
        """Declare a setting on this class. Shortcut for ``settings_registry.add``."""
        return cls.settings_registry.add(key, type, default)

    def get_settings_container(self) -> MutableMapping[str, Any] | None:
        return getattr(self, self.configurable_options.using, None)

    def set_settings_container(self, value: MutableMapping[str, Any]) -> None:
        setattr(self, self.configurable_options.using, value)

    def is_new_record(self) -> bool:
        return False

    def get_setting(self, key: Any) -> Any:
        """Read a declared setting by name."""
        return self.settings_registry.accessor.read(self, self._setting_item(key))

    def set_setting(self, key: Any, value: Any) -> Any:
        """Write a declared setting by name and return the stored value."""
        return self.settings_registry.accessor.write(self, self._setting_item(key), value)

    def query_setting(self, key: Any) -> bool:
        """Answer whether a declared setting holds a non-blank value."""
        return self.settings_registry.accessor.query(self, self._setting_item(key))

    def settings_snapshot(self) -> dict[str, Any]:
        """Get every declared setting's current or default value as a dictionary."""
        accessor = self.settings_registry.accessor
        return {item.key: accessor.read(self, item) for item in self.settings_registry}

    def _setting_item(self, key: Any) -> Item:
        item = self.settings_registry.get(key)
        if item is None:
            raise UnknownSettingError(str(key), type(self).__name__)
        return item


Configurable.settings_registry = SettingRegistry(Configurable)
