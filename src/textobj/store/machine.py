"""TextualObjectMachine: one store file and the operations on it."""

import asyncio
import logging
import threading
from dataclasses import dataclass, replace
from pathlib import Path

from textobj.convert import refresh_minimal_ticket, textual_object_from_request
from textobj.errors import ConfigurationError
from textobj.ids import generate_id, unique_id
from textobj.marker import DATE_FORMAT, DEFAULT_MARKER, MarkerConfig
from textobj.models import TextualObject
from textobj.parser import remove_markers, scan_text
from textobj.requests import (
    AddManyRequest,
    FindRequest,
    FindResult,
    ScanRequest,
    ScanResult,
    StoredReceipt,
)
from textobj.store import db

logger = logging.getLogger(__name__)

DEFAULT_STORE_FILE_NAME = "_to_store.db"


@dataclass(frozen=True)
class MachineOption:
    """How a machine picks and describes its store file."""

    store_file_name: str | None = None
    use_random_file_name: bool = False
    store_info: str | None = None


class TextualObjectMachine:
    """Owns one SQLite store and a single connection to it.

    All database work goes through one lock so table creation, reads and
    writes never interleave on the shared connection.
    """

    def __init__(self, store_dir: str | Path, option: MachineOption | None = None) -> None:
        option = option or MachineOption()
        path = Path(store_dir)
        if path.exists() and not path.is_dir():
            raise ConfigurationError(f"{store_dir} is a path to a file, not a path to a directory")
        path.mkdir(parents=True, exist_ok=True)

        if option.use_random_file_name:
            file_name = f"{generate_id()}.db"
        else:
            file_name = option.store_file_name or DEFAULT_STORE_FILE_NAME

        self.store_url = db.initialize_database(path, file_name)
        self.store_info = option.store_info or ""
        self._lock = threading.Lock()
        self._conn = None

    @classmethod
    def from_store_url(cls, store_url: str, store_info: str | None = None) -> "TextualObjectMachine":
        """Open the machine for an existing store file path."""
        directory, file_name = db.split_store_path(store_url)
        return cls(directory, MachineOption(store_file_name=file_name, store_info=store_info))

    def __repr__(self) -> str:
        return f"<TextualObjectMachine {self.store_url}>"

    def __enter__(self) -> "TextualObjectMachine":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    # --- Connection ---

    def _connection(self):
        if self._conn is None:
            self._conn = db.connect(self.store_url)
        return self._conn

    def close(self) -> None:
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None

    def delete_store(self) -> None:
        """Close the connection and remove the store file."""
        self.close()
        with self._lock:
            db.drop_database(self.store_url)

    # --- Records ---

    @property
    def count(self) -> int:
        with self._lock:
            return db.count(self._connection())

    def add(self, to: TextualObject) -> str:
        """Insert a record as-is. Returns its id."""
        with self._lock:
            return db.insert(self._connection(), to)

    def find(self, ticket_id: str) -> TextualObject | None:
        with self._lock:
            return db.find_by_ticket_id(self._connection(), ticket_id)

    def find_all(self, ticket_ids: list[str]) -> list[TextualObject]:
        """Records for the given ticket ids, in request order, misses skipped."""
        found = (self.find(ticket_id) for ticket_id in ticket_ids)
        return [to for to in found if to is not None]

    def delete(self, ticket_id: str) -> bool:
        """Delete by ticket id. True if exactly one record was removed."""
        with self._lock:
            return db.delete_by_ticket_id(self._connection(), ticket_id) == 1

    def unique_ticket_id(self) -> str:
        """A ticket id not used by any record in this store."""
        with self._lock:
            conn = self._connection()
            return unique_id(lambda candidate: db.ticket_id_exists(conn, candidate))

    # --- Requests ---

    def add_many(self, request: AddManyRequest) -> StoredReceipt:
        """Store every object of the request and return a receipt keyed by ticket id.

        The batch is all or nothing: payloads are encoded before any write,
        and the overwrite deletes and the inserts share one transaction.
        """
        request.validate()
        store_info = request.store_info or self.store_info
        batch: dict[str, TextualObject] = {}

        with self._lock:
            conn = self._connection()
            for add in request.objects:
                to = textual_object_from_request(add)
                if db.ticket_id_exists(conn, to.ticket_id) or to.ticket_id in batch:
                    logger.debug("ticket id %s taken, drawing another", to.ticket_id)
                    ticket_id = unique_id(lambda c: c in batch or db.ticket_id_exists(conn, c))
                    to = refresh_minimal_ticket(replace(to, ticket_id=ticket_id))
                to = replace(to, store_url=self.store_url, store_info=store_info)
                db.encode_payload(to)
                batch[to.ticket_id] = to

            with conn:
                for to in batch.values():
                    if request.overwrite and to.source_id:
                        removed = db.delete_by_source_id(conn, to.source_id, commit=False)
                        if removed:
                            logger.info("replaced %d record(s) with source_id %s", removed, to.source_id)
                    db.insert(conn, to, commit=False)

        return StoredReceipt(store_url=self.store_url, store_info=store_info, stored=batch)

    def find_many(self, request: FindRequest) -> FindResult:
        request.validate()
        result = FindResult(store_url=self.store_url)
        for ticket_id in request.ticket_ids:
            to = self.find(ticket_id)
            if to is None:
                result.missing.append(ticket_id)
            else:
                result.found[ticket_id] = to
        return result

    def scan(
        self,
        request: ScanRequest,
        marker: MarkerConfig = DEFAULT_MARKER,
        date_format: str = DATE_FORMAT,
    ) -> ScanResult:
        """Scan text for tickets and resolve each ticket id against the store."""
        request.validate()
        tickets = scan_text(request.text, marker, date_format)
        result = ScanResult(store_url=self.store_url, cleaned_text=remove_markers(request.text, tickets))
        for ticket in tickets:
            if ticket.ticket_id in result.found or ticket.ticket_id in result.missing:
                continue
            to = self.find(ticket.ticket_id)
            if to is None:
                result.missing.append(ticket.ticket_id)
            else:
                result.found[ticket.ticket_id] = to
        return result

    # --- Async variants ---

    async def add_async(self, to: TextualObject) -> str:
        return await asyncio.to_thread(self.add, to)

    async def find_async(self, ticket_id: str) -> TextualObject | None:
        return await asyncio.to_thread(self.find, ticket_id)

    async def delete_async(self, ticket_id: str) -> bool:
        return await asyncio.to_thread(self.delete, ticket_id)
