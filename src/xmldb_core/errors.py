"""Error taxonomy and the status value returned by RecordStore operations."""

from __future__ import annotations

from dataclasses import dataclass


class XMLDBError(Exception):
    """Base class for every failure a RecordStore reports."""


class EmptyDocumentError(XMLDBError):
    pass


class ParseFailureError(XMLDBError):
    pass


class MissingRootError(XMLDBError):
    pass


class CorruptionError(XMLDBError):
    """The canonical tree broke its shape while being converted."""

    def __init__(self, field_name: object, reason: str) -> None:
        self.field_name = field_name
        self.reason = reason
        super().__init__(
            f"Could not convert field '{field_name}': {reason}. Tree may be corrupt."
        )


class StoreIOError(XMLDBError):
    pass


class DuplicateResourceError(XMLDBError):
    pass


class NotFoundError(XMLDBError):
    pass


@dataclass(frozen=True)
class Status:
    """Outcome of a store operation.  Truthy on success."""

    ok: bool
    error: XMLDBError | None = None

    def __bool__(self) -> bool:
        return self.ok

    @property
    def message(self) -> str:
        return "" if self.error is None else str(self.error)

    @classmethod
    def success(cls) -> Status:
        return cls(True)

    @classmethod
    def failure(cls, error: XMLDBError) -> Status:
        return cls(False, error)
