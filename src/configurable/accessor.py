"""Reader, writer and query behaviour for declared settings.

``SettingAccessor`` implements the runtime contract of a setting against the
host's single settings container. The descriptors at the bottom of the module
are what the registry binds onto a host type, so ``record.title`` and
``record.title = 42`` route through the accessor.
"""

from collections.abc import Mapping, MutableMapping, MutableSequence, MutableSet
from typing import TYPE_CHECKING, Any

from .coercion import is_blank
from .core.logging import get_logger

if TYPE_CHECKING:
    from .host import SettingsHost
    from .registry import Item

logger = get_logger(__name__)

_MISSING = object()


def _same_value(stored: Any, canonical: Any) -> bool:
    if stored is _MISSING:
        return False
    if stored is canonical:
        # The caller may have mutated a stored collection in place before writing it back
        return not isinstance(canonical, (MutableMapping, MutableSequence, MutableSet))
    # 1 == True in Python, but they are different stored values
    if type(stored) is not type(canonical):
        return False
    try:
        return bool(stored == canonical)
    except (TypeError, ValueError):
        return False


class SettingAccessor:
    """Reads and writes settings through the narrow host interface."""

    def read(self, host: "SettingsHost", item: "Item") -> Any:
        """Return the stored value for ``item``, or its default when absent.

        Never creates the container and never raises, even when the host has
        no container yet.
        """
        container = host.get_settings_container()
        if not isinstance(container, Mapping):
            return item.default
        return container[item.key] if item.key in container else item.default

    def query(self, host: "SettingsHost", item: "Item") -> bool:
        """Return whether the current value is present and not blank."""
        return not is_blank(self.read(host, item))

    def write(self, host: "SettingsHost", item: "Item", raw_value: Any) -> Any:
        """Canonicalize and store ``raw_value``, autosaving the host if it changed.

        Returns the canonical value. Writing the value that is already stored
        neither touches the container nor persists the host. A missing container,
        or one that is not a mapping, is replaced with a fresh one first.
        Writing back a stored collection object always counts as a change, so
        in-place edits to it are stored and persisted.
        """
        options = host.configurable_options
        container = host.get_settings_container()
        if not isinstance(container, Mapping):
            if container is not None:
                logger.warning(
                    "Replacing settings container that is not a mapping",
                    extra={"host": type(host).__name__, "container_type": type(container).__name__},
                )
            host.set_settings_container(options.container_type())
            # Hosts may wrap the new container (e.g. MutableDict), so re-read it
            container = host.get_settings_container()

        canonical = item.canonicalize(raw_value)
        if _same_value(container.get(item.key, _MISSING), canonical):
            logger.debug(
                "Setting unchanged, skipping store",
                extra={"setting": item.key, "host": type(host).__name__},
            )
            return canonical

        container[item.key] = canonical
        host.set_settings_container(container)

        if options.autosave:
            self._autosave(host)
        return canonical

    def _autosave(self, host: "SettingsHost") -> None:
        is_new_record = getattr(host, "is_new_record", None)
        if callable(is_new_record) and is_new_record():
            logger.debug("Host is a new record, skipping autosave", extra={"host": type(host).__name__})
            return

        persist = getattr(host, "persist_settings", None)
        if not callable(persist):
            logger.debug("Host does not support persistence, skipping autosave", extra={"host": type(host).__name__})
            return

        persist()
        logger.debug("Persisted settings", extra={"host": type(host).__name__})


class SettingDescriptor:
    """Read/write attribute for one declared setting."""

    def __init__(self, item: "Item", accessor: SettingAccessor) -> None:
        self.item = item
        self.accessor = accessor

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        if instance is None:
            return self
        return self.accessor.read(instance, self.item)

    def __set__(self, instance: Any, value: Any) -> None:
        self.accessor.write(instance, self.item, value)

    def __repr__(self) -> str:
        return f"<SettingDescriptor(key='{self.item.key}', type='{self.item.type.value}')>"


class SettingQueryDescriptor:
    """Read-only ``is_<key>`` attribute answering whether a setting is set."""

    def __init__(self, item: "Item", accessor: SettingAccessor) -> None:
        self.item = item
        self.accessor = accessor

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        if instance is None:
            return self
        return self.accessor.query(instance, self.item)

    def __set__(self, instance: Any, value: Any) -> None:
        raise AttributeError(f"'{self.item.query_name}' is a read-only query on setting '{self.item.key}'")

    def __repr__(self) -> str:
        return f"<SettingQueryDescriptor(key='{self.item.key}')>"
