"""Reader layer: converts markup text into a raw nested tree.

The raw tree is what a generic deserializer produces and is deliberately
ambiguous: an element that appears once maps to its value directly, an
element that appears several times maps to a list of values.
"""

from __future__ import annotations

import logging
import re

from lxml import etree

from .model import RawNode

logger = logging.getLogger(__name__)

# Text that is already decoded must not be decoded again by its declaration.
_XML_DECL_RE = re.compile(r"^<\?xml\b[^>]*\?>")


def _make_parser() -> etree.XMLParser:
    return etree.XMLParser(
        remove_blank_text=True,
        remove_comments=True,
        remove_pis=True,
        resolve_entities=False,
        no_network=True,
    )


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def parse(data: bytes | str) -> RawNode | None:
    """Parse *data* and return ``{root_name: value}``, or ``None`` if malformed."""
    if isinstance(data, str):
        data = _XML_DECL_RE.sub("", data, count=1).encode("utf-8")
    try:
        root = etree.fromstring(data, _make_parser())
    except etree.XMLSyntaxError as exc:
        logger.debug("XML syntax error: %s", exc)
        return None
    return {_local_name(root): element_to_raw(root)}


# ---------------------------------------------------------------------------
# Element conversion
# ---------------------------------------------------------------------------

def _local_name(el: etree._Element) -> str:
    return etree.QName(el).localname


def element_to_raw(el: etree._Element) -> RawNode:
    """Convert one element.

    - Text-only element → its text
    - Element with children → dict of child name → value (or list of values)
    - Element with neither → ``{}``
    """
    children = [c for c in el if isinstance(c.tag, str)]
    if not children:
        text = el.text
        if text is None or not text.strip():
            return {}
        return text

    raw: dict[str, RawNode] = {}
    for child in children:
        name = _local_name(child)
        value = element_to_raw(child)
        if name not in raw:
            raw[name] = value
        elif isinstance(raw[name], list):
            raw[name].append(value)
        else:
            raw[name] = [raw[name], value]
    return raw
