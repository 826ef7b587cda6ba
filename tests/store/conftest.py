"""Shared fixtures for store tests."""

import pytest

from textobj.store import db
from textobj.store.machine import TextualObjectMachine


@pytest.fixture
def store_path(tmp_path):
    """An initialized, empty store file."""
    return db.initialize_database(tmp_path, "_to_store.db")


@pytest.fixture
def conn(store_path):
    conn = db.connect(store_path)
    yield conn
    conn.close()


@pytest.fixture
def machine(tmp_path):
    machine = TextualObjectMachine(tmp_path / "store")
    yield machine
    machine.close()
