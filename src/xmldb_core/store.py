"""RecordStore: loads, edits and saves a canonical record tree."""

from __future__ import annotations

import logging
import os
from enum import Enum, auto
from typing import Callable, Union

from .converter import to_document
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
from .index import NOT_FOUND, locate
from .model import INDENT, PATH_FIELD, RESOURCES_TAG, ROOT_TAG, Instance, Leaf, Record
from .normalizer import normalize
from .reader import parse
from .writer import serialize

logger = logging.getLogger(__name__)

Sink = Callable[[str], None]
PathLike = Union[str, "os.PathLike[str]"]


class StoreState(Enum):
    EMPTY = auto()
    LOADED = auto()


class RecordStore:
    """Owns one canonical tree and the operations that load, edit and save it.

    Every public operation returns a :class:`Status`.  Failures are passed
    to *sink* as a readable message and never raised to the caller::

        store = RecordStore()
        store.load("scene.xml")
        store.add_entry("objectGeometryGroup", "b.obj")
        store.save("scene.xml")
    """

    def __init__(
        self,
        root_tag: str = ROOT_TAG,
        indent: int = INDENT,
        sink: Sink | None = None,
    ) -> None:
        self.root_tag = root_tag
        self.indent = indent
        self._sink: Sink = sink if sink is not None else logger.warning
        self._tree = Record()
        self._state = StoreState.EMPTY

    @property
    def tree(self) -> Record:
        return self._tree

    @property
    def state(self) -> StoreState:
        return self._state

    def reset(self) -> None:
        self._tree = Record()
        self._state = StoreState.EMPTY

    # -- Load -----------------------------------------------------------

    def load(self, path: PathLike) -> Status:
        """Replace the tree with the contents of the file at *path*.

        On failure the store is left empty.
        """
        try:
            self._load_bytes(_read_file(path), os.fspath(path))
        except XMLDBError as exc:
            self.reset()
            return self._report(exc)
        logger.debug("Loaded database '%s'", path)
        return Status.success()

    def loads(self, data: bytes | str) -> Status:
        """Like :meth:`load`, from in-memory text or bytes."""
        try:
            self._load_bytes(data, "<string>")
        except XMLDBError as exc:
            self.reset()
            return self._report(exc)
        return Status.success()

    def _load_bytes(self, data: bytes | str, source: str) -> None:
        if len(data) == 0:
            raise EmptyDocumentError(f"Could not parse database '{source}': document empty.")

        raw = parse(data)
        if raw is None:
            raise ParseFailureError(f"Parsing database '{source}' returned no result.")

        if not isinstance(raw, dict) or self.root_tag not in raw:
            raise MissingRootError(
                f"Could not parse database '{source}': root tag '<{self.root_tag}>' missing."
            )

        self._tree = normalize(raw[self.root_tag])
        self._state = StoreState.LOADED

    # -- Save -----------------------------------------------------------

    def save(self, path: PathLike) -> Status:
        """Write the tree to *path*, truncating it.

        A tree that breaks its shape is still written as far as it could be
        converted; the returned status then carries the CorruptionError.
        """
        text, error = self._render()
        if text is None:
            return Status.failure(error)

        try:
            with open(path, "w", encoding="utf-8") as fh:
                fh.write(text)
        except OSError as exc:
            return self._report(
                StoreIOError(
                    f"Could not open file '{os.fspath(path)}' for writing database: "
                    f"{exc.strerror or exc}"
                )
            )

        if error is not None:
            return Status.failure(error)
        logger.debug("Saved database '%s'", path)
        return Status.success()

    def dumps(self) -> str:
        """Return the tree as document text ("" if it cannot be serialised)."""
        text, _ = self._render()
        return "" if text is None else text

    def _render(self) -> tuple[str | None, CorruptionError | None]:
        forest, error = to_document(self._tree, is_root=True, root_tag=self.root_tag)
        if error is not None:
            self._sink(f"Could not write database completely, conversion error:\n{error}")
        try:
            return serialize(forest, self.indent), error
        except CorruptionError as exc:
            self._sink(f"Could not serialise database: {exc}")
            return None, exc

    # -- Entries --------------------------------------------------------

    def add_entry(self, collection_name: str, path: str) -> Status:
        """Append a ``{path}`` entry to *collection_name* unless it already exists.

        The ``resources`` container and the collection are created when
        missing; a failed call leaves the tree untouched.
        """
        try:
            existing = self._collection(collection_name)
            if existing is not None and locate(existing, PATH_FIELD, path) != NOT_FOUND:
                return self._report(
                    DuplicateResourceError(
                        f"Cannot add {collection_name} at '{path}': "
                        "resource already exists in database."
                    )
                )
            collection = self._collection(collection_name, create=True)
        except CorruptionError as exc:
            return self._report(exc)

        collection.append(Record({PATH_FIELD: [Leaf(path)]}))
        self._state = StoreState.LOADED
        return Status.success()

    def remove_entry(self, collection_name: str, path: str) -> Status:
        """Remove the first entry of *collection_name* keyed by *path*."""
        try:
            collection = self._collection(collection_name)
            location = NOT_FOUND if collection is None else locate(collection, PATH_FIELD, path)
        except CorruptionError as exc:
            return self._report(exc)

        if location == NOT_FOUND:
            return self._report(
                NotFoundError(
                    f"Cannot remove {collection_name} at '{path}': "
                    "resource not found in database."
                )
            )

        del collection[location.instance]
        self._state = StoreState.LOADED
        return Status.success()

    def has_entry(self, collection_name: str, path: str) -> bool:
        try:
            collection = self._collection(collection_name)
            return collection is not None and locate(collection, PATH_FIELD, path) != NOT_FOUND
        except CorruptionError as exc:
            self._report(exc)
            return False

    def entries(self, collection_name: str) -> list[str]:
        """Return the path keys of *collection_name* in order."""
        try:
            collection = self._collection(collection_name)
        except CorruptionError as exc:
            self._report(exc)
            return []

        paths: list[str] = []
        for instance in collection or []:
            if not isinstance(instance, Record):
                continue
            slots = instance.fields.get(PATH_FIELD)
            if isinstance(slots, list) and slots and isinstance(slots[0], Leaf):
                paths.append(str(slots[0]))
        return paths

    # -- Internals ------------------------------------------------------

    def _collection(
        self, collection_name: str, create: bool = False
    ) -> list[Instance] | None:
        """Return ``resources[0].<collection_name>``.

        Missing parts are created with *create*, otherwise ``None`` is
        returned for them.
        """
        resources = self._tree.get(RESOURCES_TAG)
        if resources is None:
            if not create:
                return None
            resources = self._tree.ensure(RESOURCES_TAG)
        if not isinstance(resources, list):
            raise CorruptionError(RESOURCES_TAG, "associated value is not a list of instances")
        if not resources:
            if not create:
                return None
            resources.append(Record())

        container = resources[0]
        if not isinstance(container, Record):
            raise CorruptionError(RESOURCES_TAG, "first instance is not a record")

        collection = container.get(collection_name)
        if collection is None:
            if not create:
                return None
            collection = container.ensure(collection_name)
        if not isinstance(collection, list):
            raise CorruptionError(
                collection_name, "associated value is not a list of instances"
            )
        return collection

    def _report(self, error: XMLDBError) -> Status:
        self._sink(str(error))
        return Status.failure(error)


def _read_file(path: PathLike) -> bytes:
    try:
        with open(path, "rb") as fh:
            return fh.read()
    except OSError as exc:
        raise StoreIOError(
            f"Could not read database file '{os.fspath(path)}': {exc.strerror or exc}"
        ) from exc
