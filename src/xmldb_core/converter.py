"""Conversion of the canonical record tree into an ordered document forest."""

from __future__ import annotations

from .document import DocumentNode, Element, Text
from .errors import CorruptionError
from .model import ROOT_TAG, Leaf, Record


def to_document(
    tree: Record,
    is_root: bool = False,
    root_tag: str = ROOT_TAG,
) -> tuple[list[DocumentNode], CorruptionError | None]:
    """Convert *tree* into a list of sibling elements.

    Fields are visited in the tree's own order and every instance becomes
    one element named after its field: a Leaf becomes an element holding a
    single Text child, a Record becomes an element holding its converted
    fields.  With *is_root* the whole forest is wrapped in one *root_tag*
    element.

    Conversion stops at the first field that breaks the canonical shape.
    The forest built up to that point is returned together with the
    CorruptionError; on success the error is ``None``.
    """
    forest, error = _convert_fields(tree)
    if is_root:
        forest = [Element(root_tag, forest)]
    return forest, error


def _convert_fields(tree: object) -> tuple[list[DocumentNode], CorruptionError | None]:
    forest: list[DocumentNode] = []
    if not isinstance(tree, Record):
        return forest, CorruptionError(
            type(tree).__name__, "expected a record of named fields"
        )

    for name, instances in tree.fields.items():
        if not isinstance(name, str) or not name:
            return forest, CorruptionError(name, "field name must be a non-empty string")
        if not isinstance(instances, list):
            return forest, CorruptionError(
                name, "associated value is not a list of instances"
            )

        for index, instance in enumerate(instances):
            if isinstance(instance, Leaf):
                forest.append(Element(name, [Text(str(instance))]))
            elif isinstance(instance, Record):
                children, error = _convert_fields(instance)
                forest.append(Element(name, children))
                if error is not None:
                    return forest, error
            else:
                return forest, CorruptionError(
                    name, f"instance {index} is not positional (got {type(instance).__name__})"
                )

    return forest, None
