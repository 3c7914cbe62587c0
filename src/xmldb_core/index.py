"""Lookup of a record inside a named collection by one of its scalar fields."""

from __future__ import annotations

from typing import NamedTuple

from .errors import CorruptionError
from .model import Instance, Leaf, Record


class Location(NamedTuple):
    instance: int
    slot: int


NOT_FOUND = Location(-1, -1)


def locate(collection: list[Instance], field_name: str, value: object) -> Location:
    """Find the first record in *collection* whose *field_name* holds *value*.

    Only the records' own field lists are searched; nothing deeper.  Returns
    the record's position and the position of the matching leaf within the
    field, or ``NOT_FOUND``.  Raises CorruptionError if a record holds
    *field_name* as anything but a list.
    """
    for instance_index, instance in enumerate(collection):
        if not isinstance(instance, Record):
            continue

        slots = instance.fields.get(field_name)
        if slots is None:
            continue
        if not isinstance(slots, list):
            raise CorruptionError(field_name, "associated value is not a list of instances")

        for slot_index, slot in enumerate(slots):
            if isinstance(slot, Leaf) and slot.value == value:
                return Location(instance_index, slot_index)

    return NOT_FOUND
