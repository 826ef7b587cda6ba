"""Data models for tickets, tags and textual objects."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from textobj.ids import generate_id
from textobj.marker import DEFAULT_MARKER, MarkerConfig


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class PositionInfo:
    """Where a marker was found: 0-based line and column, match length, matched text."""

    line: int
    column: int
    length: int
    raw_text: str

    @classmethod
    def from_match(cls, match, line: int) -> "PositionInfo":
        return cls(
            line=line,
            column=match.start(),
            length=match.end() - match.start(),
            raw_text=match.group(0),
        )


@dataclass(frozen=True)
class Ticket:
    """One marker's content.

    Reserved keys never appear in `values`; they live in `ticket_id`,
    `updated`, `store_url` and `store_info`. `values` keeps insertion order.
    """

    ticket_id: str = field(default_factory=generate_id)
    values: dict[str, str] = field(default_factory=dict)
    updated: datetime = field(default_factory=utc_now)
    store_url: str | None = None
    store_info: str | None = None
    marker: MarkerConfig = DEFAULT_MARKER
    position: PositionInfo | None = None


@dataclass(frozen=True)
class PrintOptions:
    """Which optional fields print_ticket emits. `minimal` overrides the rest."""

    include_updated: bool = True
    include_store_info: bool = True
    include_store_id: bool = True
    minimal: bool = False


MINIMAL = PrintOptions(include_updated=False, include_store_info=False, include_store_id=False, minimal=True)


@dataclass(frozen=True)
class Tag:
    """Key-only view of a ticket: `[[KEY|VALUE|NOTE]]`."""

    key: str
    value: str | None = None
    note: str | None = None


@dataclass
class TextualObject:
    """A persisted record that a ticket id points at."""

    id: str
    ticket_id: str
    ticket_minimal: str = ""
    # unique id where the object came from, e.g. a url, a citekey or a doi
    source_id: str = ""
    # e.g. "Zotero", "DOI"
    source_name: str = ""
    # kind of source_id, e.g. "Zotero Citekey"
    source_id_type: str = ""
    source_path: str = ""
    store_info: str = ""
    store_url: str = ""
    created: datetime = field(default_factory=utc_now)
    updated: datetime = field(default_factory=utc_now)
    json: Any = None
