"""
Shared pytest fixtures and path setup for unit tests.
"""

import sys
from pathlib import Path

# Add src to sys.path so configurable.* imports work when running pytest from repo root.
PROJECT_SRC = Path(__file__).resolve().parents[2]
if str(PROJECT_SRC) not in sys.path:
    sys.path.insert(0, str(PROJECT_SRC))

import pytest
from sqlalchemy import Column, Integer, create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from configurable.core import config
from configurable.host import Configurable
from configurable.models import ConfigurableModel, settings_column


@pytest.fixture
def configure(monkeypatch):
    """Install a Settings instance built from the given environment aliases."""

    def _configure(**values):
        settings = config.Settings(**values)
        monkeypatch.setattr(config, "settings", settings)
        return settings

    return _configure


@pytest.fixture(autouse=True)
def default_settings(configure):
    """Every test starts from the default package configuration."""
    return configure()


class MockHost(Configurable):
    """Plain host that records saves, like a record without a database."""

    def __init__(self, new_record: bool = True):
        self.settings = None
        self.new_record = new_record
        self.save_count = 0

    def is_new_record(self) -> bool:
        return self.new_record

    def persist_settings(self) -> None:
        self.new_record = False
        self.save_count += 1


@pytest.fixture
def host_class():
    """A fresh MockHost subclass per test so declarations never leak."""

    class Host(MockHost):
        pass

    return Host


@pytest.fixture
def base():
    """A fresh declarative base per test so table names can be reused."""
    return declarative_base()


@pytest.fixture
def blog_class(base):
    """Blog model with the settings used across these tests."""

    class Blog(ConfigurableModel, base):
        __tablename__ = "blogs"

        id = Column(Integer, primary_key=True)
        settings = settings_column()

    (
        Blog.settings_registry
        .string("string_with_no_default")
        .string("string_with_default", "default")
        .integer("integer_with_no_default")
        .integer("integer_with_default", 0)
        .boolean("boolean_with_no_default")
        .boolean("boolean_with_default", True)
    )
    return Blog


@pytest.fixture
def engine(base, blog_class):
    """In-memory SQLite engine with the test tables created."""
    engine = create_engine("sqlite://")
    base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    """Session bound to the in-memory engine."""
    session_factory = sessionmaker(bind=engine, expire_on_commit=True)
    session = session_factory()
    yield session
    session.close()
