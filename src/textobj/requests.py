"""Request and result records for adding, finding and resolving textual objects."""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

from textobj.errors import RequestError
from textobj.marker import DATE_FORMAT
from textobj.models import TextualObject, utc_now

NO_OBJECTS = "No textual objects to add"
NO_TICKET_IDS = "No ticket ids provided"
NO_TEXT = "No text is provided"
STORE_URL_MISSING = "store_url does not exist"


def _text_or_none(value: Any) -> str | None:
    return None if value is None else str(value)


def _check_store_url(store_url: str) -> None:
    if not Path(store_url).is_file():
        raise RequestError(STORE_URL_MISSING, suggestion="Point store_url at an existing store file.", payload=store_url)


@dataclass
class AddRequest:
    """One object to add; source fields identify it where it came from."""

    source_name: str = ""
    source_id: str | None = None
    source_id_type: str | None = None
    source_path: str | None = None
    json: Any = None

    @classmethod
    def from_dict(cls, data: dict) -> "AddRequest":
        if not isinstance(data, dict):
            raise RequestError("Each textual object must be a mapping", payload=data)
        return cls(
            source_name=str(data.get("source_name") or ""),
            source_id=_text_or_none(data.get("source_id")),
            source_id_type=_text_or_none(data.get("source_id_type")),
            source_path=_text_or_none(data.get("source_path")),
            json=data.get("json"),
        )


@dataclass
class AddManyRequest:
    objects: list[AddRequest] = field(default_factory=list)
    store_dir: str = ""
    store_info: str | None = None
    store_file_name: str | None = None
    # replace an existing record with the same source_id
    overwrite: bool = False

    def validate(self) -> None:
        if not self.objects:
            raise RequestError(NO_OBJECTS, suggestion='Add objects in the "objects" field of your request.')

    @classmethod
    def from_dict(cls, data: Any, store_dir: str = "") -> "AddManyRequest":
        """Build from a parsed document: a list of objects, or a mapping with "objects"."""
        if isinstance(data, list):
            data = {"objects": data}
        if not isinstance(data, dict):
            raise RequestError("Expected a list of objects or a mapping", payload=data)
        return cls(
            objects=[AddRequest.from_dict(o) for o in data.get("objects") or []],
            store_dir=data.get("store_dir") or store_dir,
            store_info=data.get("store_info"),
            store_file_name=data.get("store_file_name"),
            overwrite=bool(data.get("overwrite", False)),
        )


def textual_object_to_dict(to: TextualObject) -> dict:
    return {
        "id": to.id,
        "ticket_id": to.ticket_id,
        "ticket_minimal": to.ticket_minimal,
        "source_id": to.source_id,
        "source_name": to.source_name,
        "source_id_type": to.source_id_type,
        "source_path": to.source_path,
        "store_info": to.store_info,
        "store_url": to.store_url,
        "created": to.created.strftime(DATE_FORMAT),
        "updated": to.updated.strftime(DATE_FORMAT),
        "json": to.json,
    }


@dataclass
class StoredReceipt:
    """What add_many stored, keyed by ticket id in insertion order."""

    store_url: str
    store_info: str = ""
    stored: dict[str, TextualObject] = field(default_factory=dict)
    created: datetime = field(default_factory=utc_now)

    @property
    def total(self) -> int:
        return len(self.stored)

    def to_dict(self) -> dict:
        return {
            "store_url": self.store_url,
            "store_info": self.store_info,
            "stored": {k: textual_object_to_dict(v) for k, v in self.stored.items()},
            "total": self.total,
        }


@dataclass
class FindRequest:
    store_url: str
    ticket_ids: list[str] = field(default_factory=list)

    def validate(self) -> None:
        if not self.ticket_ids:
            raise RequestError(NO_TICKET_IDS, suggestion="Pass at least one ticket id.")
        _check_store_url(self.store_url)


@dataclass
class FindResult:
    store_url: str
    found: dict[str, TextualObject] = field(default_factory=dict)
    missing: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "store_url": self.store_url,
            "found": {k: textual_object_to_dict(v) for k, v in self.found.items()},
            "found_count": len(self.found),
            "missing": list(self.missing),
            "missing_count": len(self.missing),
        }


@dataclass
class ScanRequest:
    store_url: str
    text: str

    def validate(self) -> None:
        if not self.text:
            raise RequestError(NO_TEXT, suggestion="Provide the text to scan.")
        _check_store_url(self.store_url)


@dataclass
class ScanResult(FindResult):
    cleaned_text: str = ""

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["cleaned_text"] = self.cleaned_text
        return data
