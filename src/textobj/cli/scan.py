"""Handlers for 'textobj scan' and 'textobj tags'."""

import sys

from textobj.cli._common import output_json, read_text_or_die, scan_or_die, settings_or_die
from textobj.models import MINIMAL, PrintOptions
from textobj.parser import remove_markers, ticket_to_tag
from textobj.writer import print_tag, print_ticket, ticket_to_dict


def scan(args) -> int:
    """List every ticket in a text with its position."""
    settings = settings_or_die(args)
    text = read_text_or_die(args.file, args.json)
    tickets = scan_or_die(text, settings, args.json)

    if args.json:
        output_json([ticket_to_dict(t) for t in tickets])
        return 0

    options = MINIMAL if args.minimal else PrintOptions()
    for ticket in tickets:
        pos = ticket.position
        print(f"{pos.line}:{pos.column}  {print_ticket(ticket, options)}")

    return 0


def tags(args) -> int:
    """List the tags in a text, or print the text with markers removed."""
    settings = settings_or_die(args)
    text = read_text_or_die(args.file, args.json)
    tickets = scan_or_die(text, settings, args.json)
    found = [ticket_to_tag(t) for t in tickets]

    if args.json:
        output_json(
            {
                "tags": [{"key": t.key, "value": t.value, "note": t.note} for t in found],
                "cleaned_text": remove_markers(text, tickets),
            }
        )
    elif args.clean:
        sys.stdout.write(remove_markers(text, tickets))
    else:
        for tag in found:
            print(print_tag(tag, settings.marker))

    return 0
