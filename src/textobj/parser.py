"""Scan text for markers and parse them into tickets."""

from datetime import datetime, timezone

from textobj.errors import ParseError
from textobj.ids import generate_id
from textobj.marker import (
    DATE_FORMAT,
    DEFAULT_MARKER,
    ID_KEY,
    STORE_ID_KEY,
    STORE_INFO_KEY,
    UPDATED_KEY,
    MarkerConfig,
)
from textobj.models import PositionInfo, Tag, Ticket, utc_now


def scan_text(text: str, marker: MarkerConfig = DEFAULT_MARKER, date_format: str = DATE_FORMAT) -> list[Ticket]:
    """Find every marker in text and parse each into a Ticket.

    Lines are split on "\\n" and scanned independently, so a marker never
    spans a line break. Results are ordered top to bottom, then left to right.
    """
    if not text:
        return []

    pattern = marker.pattern
    tickets: list[Ticket] = []
    for line_number, line in enumerate(text.split("\n")):
        line = line.removesuffix("\r")
        for match in pattern.finditer(line):
            position = PositionInfo.from_match(match, line_number)
            tickets.append(parse_ticket(match.group(1), marker, position, date_format))
    return tickets


def parse_ticket(
    content: str,
    marker: MarkerConfig = DEFAULT_MARKER,
    position: PositionInfo | None = None,
    date_format: str = DATE_FORMAT,
) -> Ticket:
    """Parse the inner content of one marker into a Ticket.

    Delimiters still present in content are stripped first, so both
    "a:b|c" and "[[a:b|c]]" parse the same way.

    Keys and values lose leading and trailing whitespace, so "k: v " reads
    as ("k", "v"); interior spaces are kept.

    Raises ParseError when the `updated` entry does not match date_format.
    """
    content = content.replace(marker.left_marker, "").replace(marker.right_marker, "")

    ticket_id: str | None = None
    updated: datetime | None = None
    store_url: str | None = None
    store_info: str | None = None
    values: dict[str, str] = {}

    for key, value in _split_entries(content, marker):
        if key == ID_KEY:
            ticket_id = value
        elif key == UPDATED_KEY:
            updated = parse_timestamp(value, date_format)
        elif key == STORE_ID_KEY:
            store_url = value
        elif key == STORE_INFO_KEY:
            store_info = value
        else:
            values[key] = value

    return Ticket(
        ticket_id=ticket_id or generate_id(),
        values=values,
        updated=updated or utc_now(),
        store_url=store_url,
        store_info=store_info,
        marker=marker,
        position=position,
    )


def _split_entries(content: str, marker: MarkerConfig):
    """Yield (key, value) pairs, applying the empty-key rules.

    Keys and values are stripped at their edges only, which undoes the
    padding print_ticket adds. ":value" becomes key "value" with an empty
    value; an entry that is empty on both sides is dropped.
    """
    for entry in content.split(marker.value_entry_separator):
        key, _, value = entry.partition(marker.value_separator)
        key, value = key.strip(), value.strip()
        if not key:
            if not value:
                continue
            key, value = value, ""
        yield key, value


def parse_timestamp(value: str, date_format: str = DATE_FORMAT) -> datetime:
    """Parse a naive timestamp and pin it to UTC."""
    try:
        naive = datetime.strptime(value, date_format)
    except ValueError as e:
        raise ParseError(f"Invalid updated timestamp {value!r}: {e}", value=value) from e
    return naive.replace(tzinfo=timezone.utc)


def ticket_to_tag(ticket: Ticket) -> Tag:
    """Build a Tag from the keys of a ticket; values are ignored.

    First key is the tag key, second the value, third and later keys are
    joined into the note.
    """
    keys = list(ticket.values)
    key = keys[0] if keys else ""
    value = keys[1] if len(keys) >= 2 else None
    note = ", ".join(keys[2:]) if len(keys) >= 3 else None
    return Tag(key=key, value=value, note=note)


def scan_text_for_tags(text: str, marker: MarkerConfig = DEFAULT_MARKER) -> tuple[str, list[Tag]]:
    """Return (text with markers removed, tags found)."""
    tickets = scan_text(text, marker)
    tags = [ticket_to_tag(t) for t in tickets]
    return remove_markers(text, tickets), tags


def remove_markers(text: str, tickets: list[Ticket]) -> str:
    """Cut each scanned ticket's matched text out of text, by position."""
    lines = text.split("\n")
    # Right to left within a line so earlier columns stay valid.
    for ticket in sorted(
        (t for t in tickets if t.position is not None),
        key=lambda t: (t.position.line, t.position.column),
        reverse=True,
    ):
        pos = ticket.position
        line = lines[pos.line]
        if line[pos.column : pos.column + pos.length] == pos.raw_text:
            lines[pos.line] = line[: pos.column] + line[pos.column + pos.length :]
    return "\n".join(lines)
