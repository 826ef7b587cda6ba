"""Git config access for textobj settings."""

from pathlib import Path
from typing import Any

from git import InvalidGitRepositoryError, NoSuchPathError, Repo

from textobj.errors import ConfigurationError

SECTION = "textobj"

TEXTOBJ_DEFAULTS = {
    "left-marker": "[[",
    "right-marker": "]]",
    "value-entry-separator": "|",
    "value-separator": ":",
    "date-format": "%Y-%m-%d %H:%M:%S",
    "store-dir": ".",
    "store-file-name": "_to_store.db",
    "store-info": "",
}


def _python_key(git_key: str) -> str:
    """Convert git-style key (hyphenated) to Python-style (underscored)."""
    return git_key.replace("-", "_")


def _git_key(python_key: str) -> str:
    """Convert Python-style key (underscored) to git-style (hyphenated)."""
    return python_key.replace("_", "-")


def find_repo(path: str | Path) -> Repo | None:
    """The repository containing path, or None outside of one."""
    try:
        return Repo(path, search_parent_directories=True)
    except (InvalidGitRepositoryError, NoSuchPathError):
        return None


def is_git_repo(path: str | Path) -> bool:
    """Check if path is inside a git repository."""
    return find_repo(path) is not None


def read_textobj_config(path: str | Path) -> dict[str, Any]:
    """Read the [textobj] git config section as python-style keys.

    Missing keys, and everything when path is not inside a repository,
    fall back to TEXTOBJ_DEFAULTS. Unknown keys in the section are ignored.
    """
    result = {_python_key(k): v for k, v in TEXTOBJ_DEFAULTS.items()}
    repo = find_repo(path)
    if repo is None:
        return result
    reader = repo.config_reader()
    if not reader.has_section(SECTION):
        return result
    for git_k, raw in reader.items(SECTION):
        if git_k in TEXTOBJ_DEFAULTS:
            result[_python_key(git_k)] = str(raw)
    return result


def write_git_config_key(path: str | Path, key: str, value: Any) -> None:
    """Write one [textobj] key to the repository config. key may use either style."""
    git_k = _git_key(key)
    if git_k not in TEXTOBJ_DEFAULTS:
        raise ConfigurationError(f"Unknown setting '{key}'. Known: {', '.join(TEXTOBJ_DEFAULTS)}")
    repo = find_repo(path)
    if repo is None:
        raise ConfigurationError(f"{path} is not inside a git repository")
    writer = repo.config_writer("repository")
    try:
        writer.set_value(SECTION, git_k, str(value))
    finally:
        writer.release()
