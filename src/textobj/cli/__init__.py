"""CLI argument parser and dispatch for textobj."""

import argparse

from textobj.cli.config import config_set, config_show
from textobj.cli.objects import add, count, delete, find, resolve
from textobj.cli.scan import scan, tags


def build_parser() -> argparse.ArgumentParser:
    """Build the full CLI argument parser."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--path", default=".", help="Directory whose git config holds settings (default: .)")
    common.add_argument("--store", help="Store directory (default: from config, else --path)")
    common.add_argument("--store-file", dest="store_file", help="Store file name (default: _to_store.db)")
    common.add_argument("--json", action="store_true", help="Machine-readable JSON output")
    common.add_argument("-v", "--verbose", action="store_true", help="Log store activity to stderr")

    parser = argparse.ArgumentParser(
        prog="textobj",
        description="In-text ticket markers and their textual object store",
        parents=[common],
    )

    nouns = parser.add_subparsers(dest="noun")

    # --- scanning ---
    scan_p = nouns.add_parser("scan", help="List tickets in a text", parents=[common])
    scan_p.add_argument("file", nargs="?", help="Text file (default: stdin)")
    scan_p.add_argument("--minimal", action="store_true", help="Print only ticket ids")
    scan_p.set_defaults(func=scan)

    tags_p = nouns.add_parser("tags", help="List tags in a text", parents=[common])
    tags_p.add_argument("file", nargs="?", help="Text file (default: stdin)")
    tags_p.add_argument("--clean", action="store_true", help="Print the text with markers removed")
    tags_p.set_defaults(func=tags)

    # --- store ---
    add_p = nouns.add_parser("add", help="Store textual objects read as YAML/JSON from stdin", parents=[common])
    add_p.add_argument("--store-info", dest="store_info", help="Description recorded on each stored object")
    add_p.set_defaults(func=add)

    find_p = nouns.add_parser("find", help="Look up textual objects by ticket id", parents=[common])
    find_p.add_argument("ids", nargs="+", help="Ticket IDs")
    find_p.set_defaults(func=find)

    delete_p = nouns.add_parser("delete", help="Delete a textual object", parents=[common])
    delete_p.add_argument("id", help="Ticket ID")
    delete_p.set_defaults(func=delete)

    count_p = nouns.add_parser("count", help="Count stored textual objects", parents=[common])
    count_p.set_defaults(func=count)

    resolve_p = nouns.add_parser("resolve", help="Resolve the tickets in a text against the store", parents=[common])
    resolve_p.add_argument("file", nargs="?", help="Text file (default: stdin)")
    resolve_p.set_defaults(func=resolve)

    # --- config ---
    config_p = nouns.add_parser("config", help="Show or change settings", parents=[common])
    config_verbs = config_p.add_subparsers(dest="verb")

    config_set_p = config_verbs.add_parser("set", help="Write a setting to git config", parents=[common])
    config_set_p.add_argument("key", help="Setting name, e.g. left-marker")
    config_set_p.add_argument("value", help="New value")
    config_set_p.set_defaults(func=config_set)

    # config with no verb = show
    config_p.set_defaults(func=config_show)

    return parser
