"""Shared fixtures for CLI tests."""

from argparse import Namespace

import pytest
from git import Repo

from textobj.convert import new_textual_object
from textobj.store import TextualObjectMachine

NOTE = """# Reading notes

Whales are mammals [[id:abc12|page:4]].
See also [[id:zzz99]] and [[IMPORTANT|RELEVANT]].
"""


@pytest.fixture
def empty_repo(tmp_path):
    """Create an empty git repo."""
    Repo.init(tmp_path)
    return tmp_path


@pytest.fixture
def stored_repo(empty_repo):
    """A repo whose default store holds one object with ticket id abc12."""
    with TextualObjectMachine(empty_repo) as machine:
        machine.add(new_textual_object("abc12", source_name="Zotero", source_id="melville1851"))
    return empty_repo


@pytest.fixture
def note_file(tmp_path):
    path = tmp_path / "note.md"
    path.write_text(NOTE)
    return path


@pytest.fixture
def make_args():
    """Build a Namespace with the common flags filled in."""

    def _make(path, **kwargs):
        defaults = {"path": str(path), "store": None, "store_file": None, "json": False, "verbose": False}
        defaults.update(kwargs)
        return Namespace(**defaults)

    return _make
