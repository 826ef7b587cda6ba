"""Shared helpers for CLI command handlers."""

import json
import logging
import sys
from pathlib import Path

from textobj.config import Settings, load_settings
from textobj.errors import TextObjError
from textobj.models import Ticket
from textobj.parser import scan_text
from textobj.store import MachineOption, TextualObjectMachine


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr; INFO with -v, warnings otherwise."""
    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(message)s",
        stream=sys.stderr,
        level=logging.INFO if verbose else logging.WARNING,
    )


def settings_or_die(args) -> Settings:
    """Resolve settings from git config and CLI flags. Exit 1 on bad config."""
    try:
        return load_settings(
            args.path,
            store_dir=getattr(args, "store", None),
            store_file_name=getattr(args, "store_file", None),
            store_info=getattr(args, "store_info", None),
        )
    except TextObjError as e:
        error(str(e), args.json)


def machine_or_die(settings: Settings, json_mode: bool) -> TextualObjectMachine:
    """Open the configured store, creating it if needed. Exit 1 on failure."""
    try:
        return TextualObjectMachine(
            settings.store_dir,
            MachineOption(store_file_name=settings.store_file_name, store_info=settings.store_info or None),
        )
    except TextObjError as e:
        error(str(e), json_mode)


def read_text_or_die(source: str | None, json_mode: bool) -> str:
    """Read a file, or stdin when source is None or "-"."""
    if source in (None, "-"):
        return sys.stdin.read()
    try:
        return Path(source).read_text(encoding="utf-8")
    except OSError as e:
        error(f"Cannot read {source}: {e.strerror}", json_mode)


def scan_or_die(text: str, settings: Settings, json_mode: bool) -> list[Ticket]:
    """Scan text with the configured marker. Exit 1 on a malformed ticket."""
    try:
        return scan_text(text, settings.marker, settings.date_format)
    except TextObjError as e:
        error(str(e), json_mode)


def output_json(data: dict | list) -> None:
    """Write JSON to stdout."""
    print(json.dumps(data, indent=2))


def output_result(data: dict, text: str, json_mode: bool) -> None:
    """Output mutation result as JSON or plain text."""
    if json_mode:
        output_json(data)
    else:
        print(text)


def error(message: str, json_mode: bool) -> None:
    """Print error to stderr and exit 1."""
    if json_mode:
        print(json.dumps({"error": message}), file=sys.stderr)
    else:
        print(f"error: {message}", file=sys.stderr)
    sys.exit(1)
