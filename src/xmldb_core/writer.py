"""Writer layer: serialises a document forest to indented markup text."""

from __future__ import annotations

from lxml import etree

from .document import DocumentNode, Element, Text
from .errors import CorruptionError
from .model import INDENT


def serialize(forest: list[DocumentNode], indent: int = INDENT) -> str:
    """Return *forest* as text, one element per line, *indent* spaces per level."""
    parts: list[str] = []
    for node in forest:
        if not isinstance(node, Element):
            raise CorruptionError("#text", "text node outside of an element")
        el = _build(node, None)
        etree.indent(el, space=" " * indent)
        parts.append(etree.tostring(el, encoding="unicode"))
    if not parts:
        return ""
    return "\n".join(parts) + "\n"


def _build(node: Element, parent: etree._Element | None) -> etree._Element:
    try:
        if parent is None:
            el = etree.Element(node.name)
        else:
            el = etree.SubElement(parent, node.name)
    except ValueError as exc:
        raise CorruptionError(node.name, str(exc)) from exc

    previous: etree._Element | None = None
    for child in node.children:
        if isinstance(child, Text):
            try:
                if previous is None:
                    el.text = (el.text or "") + child.value
                else:
                    previous.tail = (previous.tail or "") + child.value
            except ValueError as exc:
                raise CorruptionError(node.name, str(exc)) from exc
        else:
            previous = _build(child, el)
    return el
