"""
SQLAlchemy integration for configurable settings.

This module provides the model mixin that lets declarative models carry
typed settings in one serialized column, and the column factory that
declares that column.
"""

from typing import Any

from sqlalchemy import Column, inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.mutable import MutableDict
from sqlalchemy.orm import object_session
from sqlalchemy.orm.attributes import flag_modified

from ..core.config import get_settings_instance
from ..core.exceptions import SettingsPersistenceError
from ..core.logging import get_logger
from ..host import Configurable
from .types import SerializedSettings

logger = get_logger(__name__)


def settings_column(serializer: str = "json", **kwargs: Any) -> Column:
    """Declare the column that stores a model's settings container.

    The value is tracked as a ``MutableDict`` so in-place changes mark the
    row dirty, and serialized as text by ``SerializedSettings``.
    """
    kwargs.setdefault("nullable", True)
    return Column(MutableDict.as_mutable(SerializedSettings(serializer)), **kwargs)


class ConfigurableModel(Configurable):
    """Mixin for declarative models with settings stored in one column.

    Example::

        class Blog(ConfigurableModel, Base):
            __tablename__ = "blogs"

            id = Column(Integer, primary_key=True)
            settings = settings_column()

        Blog.settings_registry.string("title", "Untitled").integer("posts_per_page", 10)

    Changing a setting on a persistent instance saves it through its session.
    Transient and pending instances are never saved implicitly.
    """

    def is_new_record(self) -> bool:
        """Check if the instance has no database identity yet."""
        return not inspect(self).has_identity

    def set_settings_container(self, value: Any) -> None:
        super().set_settings_container(value)
        using = self.configurable_options.using
        # Plain dict containers are mutated in place, so SQLAlchemy needs telling
        if using in inspect(self).mapper.attrs:
            flag_modified(self, using)

    def persist_settings(self) -> None:
        """Save the instance through its session after a settings change."""
        session = object_session(self)
        if session is None:
            logger.debug("Instance is not attached to a session, skipping save", extra={"host": type(self).__name__})
            return

        strategy = get_settings_instance().autosave_strategy
        try:
            if strategy == "flush":
                session.flush()
            else:
                session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(
                f"Failed to persist settings for {type(self).__name__}",
                extra={"host": type(self).__name__, "strategy": strategy},
                exc_info=True,
            )
            raise SettingsPersistenceError(type(self).__name__, str(e)) from e
