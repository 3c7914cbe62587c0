"""Normalisation of raw parser trees into the canonical record tree.

A generic tree parser cannot tell a repeated element from a single one:
one ``<item>`` comes back as the instance itself, two come back as a list.
``normalize`` rewrites every named field so that it always maps to an
ordered list of instances, at every depth.

Assumes field names are never themselves numerals.
"""

from __future__ import annotations

from .model import Instance, Leaf, RawNode, Record


def normalize(node: RawNode) -> Record:
    """Return the canonical Record for a raw map (or an already canonical one).

    Anything that is not a map normalises to an empty Record.
    """
    if isinstance(node, Record):
        return Record({name: _normalize_field(v) for name, v in node.fields.items()})
    if isinstance(node, dict):
        return Record({str(name): _normalize_field(v) for name, v in node.items()})
    return Record()


def _normalize_field(value: RawNode) -> list[Instance]:
    # An empty map has no named fields, so it counts as an empty list
    # rather than as a single empty instance.
    if isinstance(value, list):
        return [_normalize_instance(v) for v in _flatten(value)]
    if isinstance(value, (dict, Record)) and not value:
        return []
    return [_normalize_instance(value)]


def _flatten(items: list) -> list:
    flat: list = []
    for item in items:
        if isinstance(item, list):
            flat.extend(_flatten(item))
        else:
            flat.append(item)
    return flat


def _normalize_instance(value: RawNode) -> Instance:
    if isinstance(value, Leaf):
        return Leaf(value.value)
    if isinstance(value, (Record, dict)):
        return normalize(value)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return Leaf(value)
    return Leaf("" if value is None else str(value))
