"""SQLite storage of textual objects."""

import json
import logging
import sqlite3
from datetime import datetime, timezone
from pathlib import Path

from textobj.convert import sample_textual_object
from textobj.errors import StoreError
from textobj.models import TextualObject

logger = logging.getLogger(__name__)

TABLE = "textual_objects"

_CREATE_TABLE = f"""
CREATE TABLE IF NOT EXISTS {TABLE} (
    id             TEXT PRIMARY KEY NOT NULL,
    ticket_id      TEXT NOT NULL,
    ticket_minimal TEXT DEFAULT '' NOT NULL,

    source_id      TEXT DEFAULT '' NOT NULL,
    source_name    TEXT DEFAULT '' NOT NULL,
    source_id_type TEXT DEFAULT '' NOT NULL,
    source_path    TEXT DEFAULT '' NOT NULL,

    store_info     TEXT DEFAULT '' NOT NULL,
    store_url      TEXT DEFAULT '' NOT NULL,

    created        TIMESTAMP NOT NULL,
    updated        TIMESTAMP NOT NULL,

    json           TEXT DEFAULT '{{}}' NOT NULL
)
"""

_COLUMNS = (
    "id",
    "ticket_id",
    "ticket_minimal",
    "source_id",
    "source_name",
    "source_id_type",
    "source_path",
    "store_info",
    "store_url",
    "created",
    "updated",
    "json",
)


# --- Paths ---


def join_db_path(directory: str | Path, file_name: str) -> str:
    return str(Path(directory) / file_name)


def split_store_path(store_path: str) -> tuple[str, str]:
    """Split a store file path into (directory, file_name).

    Splits on the last "/" or "\\", so Windows paths split the same on
    every platform.
    """
    cut = max(store_path.rfind("/"), store_path.rfind("\\"))
    if cut < 0:
        return ".", store_path
    return store_path[:cut], store_path[cut + 1 :]


def database_exists(path: str | Path) -> bool:
    return Path(path).is_file()


# --- Connection and schema ---


def connect(path: str | Path) -> sqlite3.Connection:
    """Open a connection with rows addressable by column name."""
    try:
        conn = sqlite3.connect(str(path), check_same_thread=False)
    except sqlite3.Error as e:
        raise StoreError(f"Cannot open store at {path}: {e}") from e
    conn.row_factory = sqlite3.Row
    return conn


def create_table(conn: sqlite3.Connection) -> None:
    with conn:
        conn.execute(_CREATE_TABLE)
        conn.execute(f"CREATE INDEX IF NOT EXISTS idx_{TABLE}_ticket_id ON {TABLE} (ticket_id)")


def drop_table(conn: sqlite3.Connection) -> None:
    with conn:
        conn.execute(f"DROP TABLE IF EXISTS {TABLE}")


def initialize_database(directory: str | Path, file_name: str) -> str:
    """Create the store file and table if missing. Returns the store path."""
    path = join_db_path(directory, file_name)
    if Path(path).is_dir():
        raise StoreError(f"Cannot initialize database at {path}: path is a directory")
    created = not database_exists(path)
    conn = connect(path)
    try:
        create_table(conn)
    except sqlite3.Error as e:
        raise StoreError(f"Cannot initialize database at {path}: {e}") from e
    finally:
        conn.close()
    if created:
        logger.info("created store %s", path)
    return path


def reset_database(path: str | Path) -> None:
    """Drop and recreate the table, keeping the file."""
    conn = connect(path)
    try:
        drop_table(conn)
        create_table(conn)
    finally:
        conn.close()
    logger.info("reset store %s", path)


def drop_database(path: str | Path) -> None:
    try:
        Path(path).unlink()
    except OSError as e:
        raise StoreError(f"Cannot drop database at {path}: {e}") from e
    logger.info("dropped store %s", path)


# --- Rows ---


def _timestamp(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat()


def _row_to_textual_object(row: sqlite3.Row | None) -> TextualObject | None:
    if row is None:
        return None
    return TextualObject(
        id=row["id"],
        ticket_id=row["ticket_id"],
        ticket_minimal=row["ticket_minimal"],
        source_id=row["source_id"],
        source_name=row["source_name"],
        source_id_type=row["source_id_type"],
        source_path=row["source_path"],
        store_info=row["store_info"],
        store_url=row["store_url"],
        created=datetime.fromisoformat(row["created"]),
        updated=datetime.fromisoformat(row["updated"]),
        json=json.loads(row["json"]),
    )


def encode_payload(to: TextualObject) -> str:
    """JSON text of a record's payload. Raises StoreError if it cannot be encoded."""
    try:
        return json.dumps(to.json)
    except (TypeError, ValueError) as e:
        raise StoreError(f"Cannot encode payload of {to.ticket_id}: {e}") from e


def insert(conn: sqlite3.Connection, to: TextualObject, commit: bool = True) -> str:
    """Store a record. Returns its id.

    With commit=False the row joins the caller's open transaction.
    """
    placeholders = ", ".join("?" for _ in _COLUMNS)
    params = (
        to.id,
        to.ticket_id,
        to.ticket_minimal,
        to.source_id,
        to.source_name,
        to.source_id_type,
        to.source_path,
        to.store_info,
        to.store_url,
        _timestamp(to.created),
        _timestamp(to.updated),
        encode_payload(to),
    )
    sql = f"INSERT INTO {TABLE} ({', '.join(_COLUMNS)}) VALUES ({placeholders})"
    try:
        if commit:
            with conn:
                conn.execute(sql, params)
        else:
            conn.execute(sql, params)
    except sqlite3.Error as e:
        raise StoreError(f"Cannot insert {to.ticket_id}: {e}") from e
    return to.id


def find_by_id(conn: sqlite3.Connection, id_: str) -> TextualObject | None:
    row = conn.execute(f"SELECT * FROM {TABLE} WHERE id = ?", (id_,)).fetchone()
    return _row_to_textual_object(row)


def find_by_ticket_id(conn: sqlite3.Connection, ticket_id: str) -> TextualObject | None:
    row = conn.execute(f"SELECT * FROM {TABLE} WHERE ticket_id = ? LIMIT 1", (ticket_id,)).fetchone()
    return _row_to_textual_object(row)


def ticket_id_exists(conn: sqlite3.Connection, ticket_id: str) -> bool:
    row = conn.execute(f"SELECT 1 FROM {TABLE} WHERE ticket_id = ? LIMIT 1", (ticket_id,)).fetchone()
    return row is not None


def count(conn: sqlite3.Connection) -> int:
    return conn.execute(f"SELECT COUNT(*) FROM {TABLE}").fetchone()[0]


def _delete_where(conn: sqlite3.Connection, column: str, value: str, commit: bool = True) -> int:
    sql = f"DELETE FROM {TABLE} WHERE {column} = ?"
    if not commit:
        return conn.execute(sql, (value,)).rowcount
    with conn:
        cursor = conn.execute(sql, (value,))
    return cursor.rowcount


def delete_by_id(conn: sqlite3.Connection, id_: str) -> int:
    """Delete by record id. Returns rows deleted."""
    return _delete_where(conn, "id", id_)


def delete_by_ticket_id(conn: sqlite3.Connection, ticket_id: str) -> int:
    """Delete by ticket id. Returns rows deleted."""
    return _delete_where(conn, "ticket_id", ticket_id)


def delete_by_source_id(conn: sqlite3.Connection, source_id: str, commit: bool = True) -> int:
    return _delete_where(conn, "source_id", source_id, commit)


def seed_random_data(conn: sqlite3.Connection, n: int = 10) -> list[str]:
    """Insert n sample records. Returns their ticket ids."""
    ticket_ids = []
    for _ in range(n):
        to = sample_textual_object()
        insert(conn, to)
        ticket_ids.append(to.ticket_id)
    return ticket_ids
