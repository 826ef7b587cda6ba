"""Conversions between textual objects, requests and tickets."""

import copy
import json
import uuid
from dataclasses import replace
from datetime import timezone

from textobj.ids import generate_id
from textobj.marker import DEFAULT_MARKER, MarkerConfig
from textobj.models import TextualObject, Ticket, utc_now
from textobj.requests import AddRequest
from textobj.writer import print_minimal_ticket

SAMPLE_JSON = {
    "test_string": "test_string_value",
    "test_number": 1,
    "test_boolean": True,
    "test_null": None,
    "test_array": [1, 2, 3],
    "test_object": {
        "test_string": "test_string_value",
        "test_number": 1,
        "test_boolean": True,
        "test_null": None,
        "test_array": [1, 2, 3],
    },
}


def _value_text(value) -> str:
    """Strings stay verbatim, everything else is JSON-encoded."""
    if isinstance(value, str):
        return value
    return json.dumps(value)


def ticket_from_textual_object(to: TextualObject, marker: MarkerConfig = DEFAULT_MARKER) -> Ticket:
    """Build a ticket describing a stored record.

    Top-level payload keys become ticket values in payload order.
    """
    payload = to.json if isinstance(to.json, dict) else {}
    values = {key: _value_text(value) for key, value in payload.items()}
    updated = to.updated if to.updated.tzinfo else to.updated.replace(tzinfo=timezone.utc)
    return Ticket(
        ticket_id=to.ticket_id,
        values=values,
        updated=updated.astimezone(timezone.utc).replace(microsecond=0),
        store_url=to.store_url,
        store_info=to.store_info,
        marker=marker,
    )


def new_textual_object(ticket_id: str | None = None, **fields) -> TextualObject:
    """Fresh record with a new UUID, ticket id and stamped minimal marker."""
    ticket_id = ticket_id or generate_id()
    now = utc_now()
    fields.setdefault("created", now)
    fields.setdefault("updated", now)
    return TextualObject(
        id=str(uuid.uuid4()),
        ticket_id=ticket_id,
        ticket_minimal=print_minimal_ticket(ticket_id),
        **fields,
    )


def textual_object_from_request(request: AddRequest) -> TextualObject:
    """Turn an add request into a record ready to insert.

    store_url and store_info stay empty; the machine fills them in.
    """
    return new_textual_object(
        source_id=request.source_id or "",
        source_id_type=request.source_id_type or "",
        source_path=request.source_path or "",
        source_name=request.source_name,
        json=request.json,
    )


def refresh_minimal_ticket(to: TextualObject, marker: MarkerConfig = DEFAULT_MARKER) -> TextualObject:
    """Return a copy of to whose ticket_minimal matches its ticket_id."""
    return replace(to, ticket_minimal=print_minimal_ticket(to.ticket_id, marker))


def sample_textual_object() -> TextualObject:
    """A record with a representative JSON payload, for seeding stores."""
    return new_textual_object(
        source_id=generate_id(10),
        source_name="test",
        source_id_type="Zotero Citekey",
        source_path="/path/to/file.txt",
        json=copy.deepcopy(SAMPLE_JSON),
    )
