"""Pytest configuration.

Settings come from the environment (pydantic-settings). Point the package at an
in-memory database before anything is imported so no data directory is created.
"""

import os

os.environ.setdefault("SETTINGS_DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from datetime import datetime, timedelta

import pytest
from sqlalchemy.pool import StaticPool

from settings_store.db import make_engine, make_session_factory
from settings_store.repo import SqlAlchemySettingsGateway
from settings_store.schema import SettingsSchemaInitializer
from settings_store.services.settings import SettingsManager


class InMemorySettingsGateway:
    """Dict-backed gateway; keeps insertion order like a table scan would."""

    def __init__(self):
        self.rows = {}
        self.pending_add = []
        self.pending_remove = []
        self.commits = 0

    def find_by_name(self, name):
        if any(s.name == name for s in self.pending_remove):
            return None
        for s in self.pending_add:
            if s.name == name:
                return s
        return self.rows.get(name)

    def find_all(self):
        return list(self.rows.values())

    def add(self, setting):
        self.pending_add.append(setting)

    def remove(self, setting):
        self.pending_remove.append(setting)

    def commit(self):
        for s in self.pending_add:
            self.rows[s.name] = s
        for s in self.pending_remove:
            self.rows.pop(s.name, None)
        self.pending_add.clear()
        self.pending_remove.clear()
        self.commits += 1


class FakeClock:
    def __init__(self, start=datetime(2026, 1, 1, 12, 0, 0)):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds=1):
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def engine():
    eng = make_engine("sqlite://", poolclass=StaticPool)
    yield eng
    eng.dispose()


@pytest.fixture
def db(engine):
    session = make_session_factory(engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def manager(db, engine):
    return SettingsManager(SqlAlchemySettingsGateway(db), SettingsSchemaInitializer(engine))


@pytest.fixture
def fake_gateway():
    return InMemorySettingsGateway()


@pytest.fixture
def fake_manager(fake_gateway):
    return SettingsManager(fake_gateway)


@pytest.fixture
def clock(monkeypatch):
    c = FakeClock()
    monkeypatch.setattr("settings_store.models.utcnow", c)
    return c
