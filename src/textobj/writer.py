"""Serialize tickets and tags back into marker text."""

from textobj.marker import (
    DATE_FORMAT,
    DEFAULT_MARKER,
    ID_KEY,
    SHADOWED_FIELD_NAMES,
    STORE_ID_KEY,
    STORE_INFO_KEY,
    UPDATED_KEY,
    MarkerConfig,
)
from textobj.models import MINIMAL, PrintOptions, Tag, Ticket


def _entry(key: str, value: str, marker: MarkerConfig) -> str:
    return f"{key}{marker.value_separator} {value}"


def _join(entries: list[str], marker: MarkerConfig) -> str:
    return marker.wrap(f" {marker.value_entry_separator} ".join(entries))


def print_ticket(ticket: Ticket, options: PrintOptions | None = None) -> str:
    """Render a ticket as marker text.

    Full form is `[[id: X | k: v | ... | updated: ... | store_info: ... | store_id: ...]]`.
    Note the labels: store_url prints as "store_info" and store_info as
    "store_id", matching what existing stored text contains.
    """
    options = options or PrintOptions()
    if options.minimal:
        return print_minimal_ticket(ticket.ticket_id, ticket.marker)

    entries = [_entry(ID_KEY, ticket.ticket_id, ticket.marker)]
    for key, value in ticket.values.items():
        if key in SHADOWED_FIELD_NAMES:
            continue
        entries.append(_entry(key, value, ticket.marker))

    if options.include_updated:
        entries.append(_entry(UPDATED_KEY, ticket.updated.strftime(DATE_FORMAT), ticket.marker))
    if options.include_store_info and ticket.store_url:
        entries.append(_entry(STORE_INFO_KEY, ticket.store_url, ticket.marker))
    if options.include_store_id and ticket.store_info:
        entries.append(_entry(STORE_ID_KEY, ticket.store_info, ticket.marker))

    return _join(entries, ticket.marker)


def print_minimal(ticket: Ticket) -> str:
    """Render only the identifying entry: `[[id: X]]`."""
    return print_ticket(ticket, MINIMAL)


def print_minimal_ticket(ticket_id: str, marker: MarkerConfig = DEFAULT_MARKER) -> str:
    """Minimal marker for a bare ticket id, used to stamp new records into text."""
    return _join([_entry(ID_KEY, ticket_id, marker)], marker)


def print_tag(tag: Tag, marker: MarkerConfig = DEFAULT_MARKER) -> str:
    """Render a tag as `[[KEY|VALUE|NOTE]]`, omitting absent trailing parts."""
    parts = [tag.key]
    if tag.value is not None:
        parts.append(tag.value)
    if tag.note is not None:
        parts.append(tag.note)
    return marker.wrap(marker.value_entry_separator.join(parts))


def ticket_to_dict(ticket: Ticket) -> dict:
    """JSON-friendly dict of a ticket, used for --json output."""
    data = {
        "ticket_id": ticket.ticket_id,
        "values": dict(ticket.values),
        "updated": ticket.updated.strftime(DATE_FORMAT),
        "store_url": ticket.store_url,
        "store_info": ticket.store_info,
    }
    if ticket.position is not None:
        data["position"] = {
            "line": ticket.position.line,
            "column": ticket.position.column,
            "length": ticket.position.length,
            "raw_text": ticket.position.raw_text,
        }
    return data
