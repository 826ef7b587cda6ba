"""Handlers for 'textobj config'."""

from textobj.cli._common import error, output_json, output_result, settings_or_die
from textobj.config import load_settings
from textobj.errors import TextObjError
from textobj.git import write_git_config_key


def config_show(args) -> int:
    """Print the effective settings."""
    settings = settings_or_die(args)
    data = settings.to_dict()
    if args.json:
        output_json(data)
    else:
        for key, value in data.items():
            print(f"{key.replace('_', '-')} = {value}")
    return 0


def config_set(args) -> int:
    """Write one setting to the [textobj] section of the repository's git config.

    The value is checked against the current settings first; a rejected
    value is never written.
    """
    try:
        load_settings(args.path, **{args.key.replace("-", "_"): args.value})
        write_git_config_key(args.path, args.key, args.value)
    except TextObjError as e:
        error(str(e), args.json)
    output_result({"key": args.key, "value": args.value}, f"{args.key} = {args.value}", args.json)
    return 0
