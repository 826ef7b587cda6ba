"""Exception types raised by textobj."""

from typing import Any


class TextObjError(Exception):
    """Base class for every error textobj raises on purpose."""


class ParseError(TextObjError, ValueError):
    """Marker content could not be parsed, e.g. a malformed `updated` value."""

    def __init__(self, message: str, value: str = "") -> None:
        super().__init__(message)
        self.value = value


class ConfigurationError(TextObjError, ValueError):
    """Marker or store configuration is unusable."""


class StoreError(TextObjError):
    """The backing store failed."""


class RequestError(TextObjError):
    """A request was rejected before touching the store.

    Carries a user-facing suggestion and an optional payload describing
    what was wrong.
    """

    def __init__(self, message: str, suggestion: str = "", payload: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.suggestion = suggestion
        self.payload = payload

    def to_dict(self) -> dict:
        return {"error": self.message, "suggestion": self.suggestion, "payload": self.payload}
