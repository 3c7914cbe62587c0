"""XMLDB Core: canonical record trees over markup documents."""

from .converter import to_document
from .document import DocumentNode, Element, Text
from .errors import (
    CorruptionError,
    DuplicateResourceError,
    EmptyDocumentError,
    MissingRootError,
    NotFoundError,
    ParseFailureError,
    Status,
    StoreIOError,
    XMLDBError,
)
from .index import NOT_FOUND, Location, locate
from .model import Instance, Leaf, Record, ROOT_TAG
from .normalizer import normalize
from .repl import StoreRepl, format_tree
from .store import RecordStore, StoreState

__all__ = [
    "normalize",
    "to_document",
    "locate",
    "Location",
    "NOT_FOUND",
    "Leaf",
    "Record",
    "Instance",
    "ROOT_TAG",
    "Element",
    "Text",
    "DocumentNode",
    "RecordStore",
    "StoreState",
    "Status",
    "XMLDBError",
    "EmptyDocumentError",
    "ParseFailureError",
    "MissingRootError",
    "CorruptionError",
    "StoreIOError",
    "DuplicateResourceError",
    "NotFoundError",
    "StoreRepl",
    "format_tree",
]
