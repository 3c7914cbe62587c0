"""Data model for the canonical record tree."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


# ---------------------------------------------------------------------------
# Fixed schema names
# ---------------------------------------------------------------------------

ROOT_TAG = "database"
INDENT = 4

RESOURCES_TAG = "resources"
PATH_FIELD = "path"


# ---------------------------------------------------------------------------
# Canonical tree
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class Leaf:
    """A text value.  Numbers are stored in their rendered form."""

    value: str

    def __post_init__(self) -> None:
        v = self.value
        if isinstance(v, float) and v.is_integer():
            v = int(v)
        self.value = str(v)

    def __str__(self) -> str:
        return self.value


@dataclass(slots=True)
class Record:
    """A map of named fields, each holding its instances in document order."""

    fields: dict[str, list[Instance]] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.fields)

    def __contains__(self, name: str) -> bool:
        return name in self.fields

    def get(self, name: str) -> list[Instance] | None:
        return self.fields.get(name)

    def ensure(self, name: str) -> list[Instance]:
        """Return the instance list of *name*, creating an empty one if absent."""
        if name not in self.fields:
            self.fields[name] = []
        return self.fields[name]


Instance = Union[Leaf, Record]


# ---------------------------------------------------------------------------
# Raw parser output
# ---------------------------------------------------------------------------

# str for a text leaf, dict for one element with children, list for a
# repeated element.  An element with neither text nor children is {}.
RawNode = Union[str, int, float, dict, list, Leaf, Record]
