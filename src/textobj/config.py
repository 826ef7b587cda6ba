"""Effective settings: defaults, then git config, then explicit overrides."""

from dataclasses import dataclass
from pathlib import Path

from textobj.git import read_textobj_config
from textobj.marker import DATE_FORMAT, DEFAULT_MARKER, MarkerConfig
from textobj.store.machine import DEFAULT_STORE_FILE_NAME


@dataclass(frozen=True)
class Settings:
    marker: MarkerConfig = DEFAULT_MARKER
    date_format: str = DATE_FORMAT
    store_dir: str = "."
    store_file_name: str = DEFAULT_STORE_FILE_NAME
    store_info: str = ""

    @property
    def store_url(self) -> str:
        return str(Path(self.store_dir) / self.store_file_name)

    def to_dict(self) -> dict:
        return {
            "left_marker": self.marker.left_marker,
            "right_marker": self.marker.right_marker,
            "value_entry_separator": self.marker.value_entry_separator,
            "value_separator": self.marker.value_separator,
            "date_format": self.date_format,
            "store_dir": self.store_dir,
            "store_file_name": self.store_file_name,
            "store_info": self.store_info,
        }


def load_settings(path: str | Path = ".", **overrides) -> Settings:
    """Resolve settings for work rooted at path.

    Overrides set to None are ignored, so argparse namespaces can be
    passed through directly. A relative store_dir from git config is
    taken relative to path. Raises ConfigurationError for a degenerate marker.
    """
    values = read_textobj_config(path)
    values.update({k: v for k, v in overrides.items() if v is not None})

    store_dir = Path(values["store_dir"])
    if "store_dir" not in overrides or overrides["store_dir"] is None:
        store_dir = Path(path) / store_dir

    marker = MarkerConfig(
        left_marker=values["left_marker"],
        right_marker=values["right_marker"],
        value_entry_separator=values["value_entry_separator"],
        value_separator=values["value_separator"],
    )
    return Settings(
        marker=marker,
        date_format=values["date_format"],
        store_dir=str(store_dir),
        store_file_name=values["store_file_name"],
        store_info=values["store_info"],
    )
