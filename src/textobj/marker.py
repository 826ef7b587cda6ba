"""Marker format constants and configuration."""

import re
from dataclasses import dataclass
from functools import lru_cache

from textobj.errors import ConfigurationError

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Keys routed to dedicated ticket fields instead of the value map.
ID_KEY = "id"
UPDATED_KEY = "updated"
STORE_ID_KEY = "store_id"
STORE_INFO_KEY = "store_info"
RESERVED_KEYS = frozenset({ID_KEY, UPDATED_KEY, STORE_ID_KEY, STORE_INFO_KEY})

# Ticket field names that must never be printed from the value map.
SHADOWED_FIELD_NAMES = frozenset({"to_updated", "to_store_id", "to_store_info", "to_marker"})


@dataclass(frozen=True)
class MarkerConfig:
    """Delimiters and separators of the marker syntax.

    Rejected at construction:
    - any empty string (an empty delimiter matches everywhere)
    - a separator contained in either delimiter
    - identical entry and value separators
    """

    left_marker: str = "[["
    right_marker: str = "]]"
    value_entry_separator: str = "|"
    value_separator: str = ":"

    def __post_init__(self) -> None:
        for name in ("left_marker", "right_marker", "value_entry_separator", "value_separator"):
            if not getattr(self, name):
                raise ConfigurationError(f"{name} must not be empty")
        for sep_name in ("value_entry_separator", "value_separator"):
            sep = getattr(self, sep_name)
            for marker_name in ("left_marker", "right_marker"):
                if sep in getattr(self, marker_name):
                    raise ConfigurationError(f"{sep_name} {sep!r} overlaps {marker_name} {getattr(self, marker_name)!r}")
        if self.value_entry_separator == self.value_separator:
            raise ConfigurationError("value_entry_separator and value_separator must differ")

    @property
    def pattern(self) -> re.Pattern:
        """Compiled non-greedy pattern capturing the content between delimiters."""
        return _compile(self.left_marker, self.right_marker)

    def wrap(self, content: str) -> str:
        return f"{self.left_marker}{content}{self.right_marker}"


@lru_cache(maxsize=32)
def _compile(left: str, right: str) -> re.Pattern:
    return re.compile(f"{re.escape(left)}(.*?){re.escape(right)}")


DEFAULT_MARKER = MarkerConfig()
