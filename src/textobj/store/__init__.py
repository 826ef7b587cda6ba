"""SQLite-backed storage of textual objects."""

from textobj.store.db import initialize_database, split_store_path
from textobj.store.machine import DEFAULT_STORE_FILE_NAME, MachineOption, TextualObjectMachine

__all__ = [
    "DEFAULT_STORE_FILE_NAME",
    "MachineOption",
    "TextualObjectMachine",
    "initialize_database",
    "split_store_path",
]
