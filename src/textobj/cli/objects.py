"""Handlers for textual object commands: add, find, delete, count, resolve."""

import json
import sys

import yaml

from textobj.cli._common import (
    error,
    machine_or_die,
    output_json,
    output_result,
    read_text_or_die,
    settings_or_die,
)
from textobj.errors import TextObjError
from textobj.requests import AddManyRequest, FindRequest, ScanRequest
from textobj.store import MachineOption, TextualObjectMachine


def _load_document(text: str, json_mode: bool):
    """Parse YAML (or JSON) from text into plain JSON-compatible data."""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        error(f"Invalid YAML input: {e}", json_mode)
    # YAML dates become datetime objects; store them as text.
    return json.loads(json.dumps(data, default=str))


def _print_lookup(result) -> None:
    for ticket_id, to in result.found.items():
        print(f"{ticket_id}  {to.source_name}  {to.source_id}".rstrip())
    for ticket_id in result.missing:
        print(f"{ticket_id}  (missing)")


def add(args) -> int:
    """Store textual objects read from stdin and print a minimal ticket for each."""
    settings = settings_or_die(args)
    data = _load_document(sys.stdin.read(), args.json)

    try:
        request = AddManyRequest.from_dict(data, store_dir=settings.store_dir)
        request.validate()
        option = MachineOption(
            store_file_name=request.store_file_name or settings.store_file_name,
            store_info=request.store_info or settings.store_info or None,
        )
        with TextualObjectMachine(request.store_dir, option) as machine:
            receipt = machine.add_many(request)
    except TextObjError as e:
        error(str(e), args.json)

    if args.json:
        output_json(receipt.to_dict())
    else:
        for to in receipt.stored.values():
            label = " ".join(part for part in (to.source_name, to.source_id) if part)
            print(f"{to.ticket_minimal}  {label}".rstrip())
        print(f"Stored {receipt.total} in {receipt.store_url}")

    return 0


def find(args) -> int:
    """Look up textual objects by ticket id."""
    settings = settings_or_die(args)
    request = FindRequest(store_url=settings.store_url, ticket_ids=list(args.ids))

    try:
        request.validate()
        with TextualObjectMachine.from_store_url(request.store_url) as machine:
            result = machine.find_many(request)
    except TextObjError as e:
        error(str(e), args.json)

    if args.json:
        output_json(result.to_dict())
    else:
        _print_lookup(result)

    return 0


def delete(args) -> int:
    """Delete a textual object by ticket id. The store must already exist."""
    settings = settings_or_die(args)
    request = FindRequest(store_url=settings.store_url, ticket_ids=[args.id])

    try:
        request.validate()
        with TextualObjectMachine.from_store_url(request.store_url) as machine:
            deleted = machine.delete(args.id)
            remaining = machine.count
    except TextObjError as e:
        error(str(e), args.json)

    if not deleted:
        error(f"Ticket '{args.id}' not found.", args.json)

    output_result(
        {"id": args.id, "deleted": True, "count": remaining},
        f"Deleted {args.id} ({remaining} left)",
        args.json,
    )
    return 0


def count(args) -> int:
    """Print the number of stored textual objects."""
    settings = settings_or_die(args)
    with machine_or_die(settings, args.json) as machine:
        total = machine.count

    output_result({"store_url": machine.store_url, "count": total}, str(total), args.json)
    return 0


def resolve(args) -> int:
    """Scan a text and resolve its ticket ids against the store."""
    settings = settings_or_die(args)
    text = read_text_or_die(args.file, args.json)
    request = ScanRequest(store_url=settings.store_url, text=text)

    try:
        request.validate()
        with TextualObjectMachine.from_store_url(request.store_url) as machine:
            result = machine.scan(request, settings.marker, settings.date_format)
    except TextObjError as e:
        error(str(e), args.json)

    if args.json:
        output_json(result.to_dict())
    else:
        _print_lookup(result)

    return 0
